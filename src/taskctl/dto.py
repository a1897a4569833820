"""Wire-transport shape of a Task.

``{"id": "T-001", "title": "...", "status": false, "dateCreated": "<ISO-8601>"}``
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskDTO(BaseModel):
    """A Task as exposed over HTTP and in CLI JSON output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    status: bool
    date_created: str = Field(alias="dateCreated")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
