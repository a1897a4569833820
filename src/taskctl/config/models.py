"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taskctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from taskctl.domain.ids import DEFAULT_PREFIX


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000
    api_prefix: str = "/api"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = ".taskctl/taskctl.db"


class IdsConfig(BaseModel):
    """[ids] section."""

    model_config = {"frozen": True}

    prefix: str = DEFAULT_PREFIX

    @field_validator("prefix")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            msg = "ids.prefix must not be empty"
            raise ValueError(msg)
        return value.strip()
