"""HTTP adapter: FastAPI app factory and task controller.

The API layer consumes ServiceResult and never talks to repositories
directly.
"""

from taskctl.api.app import create_app

__all__ = ["create_app"]
