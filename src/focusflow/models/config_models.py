"""Configuration models for FocusFlow CLI.

The CLI talks to a single hosted backend (REST tables plus an auth service).
Everything a user can tune lives in ``AppConfig`` and is persisted as JSON by
``ConfigService``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class BackendConfig(BaseModel):
    """Hosted backend configuration."""

    url: str = Field(default="https://focusflow.supabase.co")
    anon_key: str = Field(default="", description="Public API key sent with every request")
    timeout: int = Field(default=30, ge=1)
    retry: int = Field(default=3, ge=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the backend URL."""
        if not v or not v.strip():
            raise ValueError("url cannot be empty")
        return v.strip().rstrip("/")


class CacheConfig(BaseModel):
    """Cache configuration."""

    enabled: bool = Field(default=True)
    ttl: int = Field(default=300, ge=0)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="table", description="Default output format: table, json, yaml")
    bell: bool = Field(default=True, description="Ring the terminal bell when an interval ends")


class AppConfig(BaseModel):
    """Main FocusFlow configuration."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
