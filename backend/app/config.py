"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All settings come from environment variables or .env (never hardcoded at call sites)
    - get_settings() is cached (lru_cache) — single instance per process
    - api_key falls back to "changeme" when API_KEY is unset
    - api_prefix is a non-root path ("/" alone is rejected at load time)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Weak default secret preserved for compatibility with existing clients;
      uses_default_api_key lets startup warn about it instead of silently changing behavior
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.enforce_auth import DEFAULT_API_KEY


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Auth
    api_key: str = DEFAULT_API_KEY
    api_prefix: str = "/api"

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Accept "api", "api/" and "/api/" as "/api". The namespace cannot be the service root."""
        if isinstance(v, str):
            v = v.strip("/")
            if not v:
                raise ValueError("api_prefix must name a non-root path, e.g. /api")
            return "/" + v
        return v

    # Store
    seed_products: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def uses_default_api_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()
