"""Service layer: business logic returning ServiceResult.

Services may import from domain, mappers and infrastructure.
They must never import from commands, output, or api.
"""
