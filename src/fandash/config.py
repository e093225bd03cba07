"""Dashboard configuration loaded from environment variables."""

from __future__ import annotations

import os
import secrets

from pydantic import BaseModel, Field, ValidationError, field_validator

from fandash.exceptions import ConfigError

ENV_PREFIX = "FANDASH_"


class DashboardConfig(BaseModel):
    """Runtime settings for the dashboard process."""

    manager_url: str = "http://localhost:5000"
    request_timeout_s: float = Field(default=2.0, gt=0)
    refresh_interval_s: int = Field(default=10, ge=1)
    max_history_points: int = Field(default=120, ge=1)
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    storage_secret: str = Field(default_factory=lambda: secrets.token_hex(32))

    @field_validator("manager_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("manager_url must start with http:// or https://")
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> DashboardConfig:
        """Build a config from ``FANDASH_*`` variables plus explicit overrides.

        Overrides whose value is None are ignored so click options can be
        passed straight through.

        Raises:
            ConfigError: If a value fails validation.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
