"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, musdis.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    filename: str = "musdis.db"
    log_sql: bool = False


class SlugsConfig(BaseModel):
    """[slugs] section."""

    model_config = {"frozen": True}

    max_attempts: int = Field(default=100, ge=1)


class IdentityConfig(BaseModel):
    """[identity] section."""

    model_config = {"frozen": True}

    password_min_length: int = Field(default=8, ge=1)
    hash_iterations: int = Field(default=600_000, ge=1)
