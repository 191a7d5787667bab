"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache); one Settings instance per process
    - No setting names the active deployment layout; template roots are probed, not configured
    - templates_dir, when set, is only an extra root searched before the built-in ones
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Runtime
    environment: str = "development"

    # Templates
    templates_dir: str | None = None
    default_template_id: str = "default"

    # API
    cors_origins: list[str] = ["*"]
    # Mount points of the serverless variants; stripped before routing.
    route_prefixes: list[str] = [
        "/api/generate-resume",
        "/.netlify/functions/generate-resume",
    ]

    @field_validator("route_prefixes")
    @classmethod
    def normalize_prefixes(cls, v: list[str]) -> list[str]:
        """Leading slash, no trailing slash, longest first."""
        cleaned = {"/" + p.strip("/") for p in v if p.strip("/")}
        return sorted(cleaned, key=len, reverse=True)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
