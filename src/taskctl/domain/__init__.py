"""Domain layer: value objects, the Task aggregate, and ID allocation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
