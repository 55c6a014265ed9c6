"""Settings for the playground host surfaces.

Configuration is explicit, validated and environment-driven. Every field
can be overridden with an ``OTTL_PLAYGROUND_`` prefixed environment
variable or a ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["OTTL_PLAYGROUND_PORT"] = "9000"
    >>> PlaygroundSettings().port
    9000

Tags:
    settings, configuration, pydantic, environment, ottl-playground

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlaygroundSettings(BaseSettings):
    """Settings shared by the HTTP API and the CLI.

    Order of precedence (highest → lowest):
        1. Environment variables (``OTTL_PLAYGROUND_PORT``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="OTTL_PLAYGROUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8080, description="Bind port")

    # ── Observability ────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Process log level")
    json_logs: bool | None = Field(
        default=None,
        description="Force JSON (True) or console (False) logs; None auto-detects",
    )

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="OTTL Playground API", description="OpenAPI title")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    max_payload_bytes: int = Field(
        default=1024 * 1024,
        ge=1,
        description="Largest config + payload accepted by the execute endpoint",
    )


@lru_cache(maxsize=1)
def get_settings() -> PlaygroundSettings:
    """Cached settings: loaded once per process."""
    return PlaygroundSettings()


__all__ = ["PlaygroundSettings", "get_settings"]
