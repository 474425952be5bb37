"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every deployment knob comes from environment variables (or .env)
    - get_settings() is cached (lru_cache) — single instance per process
    - verify_tls is a property, evaluated each time it is read (never frozen at import)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - environment left unset by default: TLS stays on and CORS stays open unless a
      deployment explicitly opts into "development" or "production"
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPSTREAM_BASE_URL = "https://api.deadbase.host/api/v2"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, populate_by_name=True,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"  # nosec B104
    port: int = 5000
    environment: str | None = Field(
        None, validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "ENVIRONMENT"),
    )
    frontend_url: str | None = None

    # Upstream
    upstream_base_url: str = DEFAULT_UPSTREAM_BASE_URL
    upstream_timeout_seconds: float = 20.0
    upstream_max_retries: int = Field(2, ge=0)
    upstream_base_delay_ms: int = Field(1000, ge=0)
    upstream_user_agent: str = DEFAULT_USER_AGENT
    upstream_verify_tls: bool | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("upstream_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @property
    def environment_name(self) -> str:
        """Reported environment (health endpoint, startup log)."""
        return self.environment or "development"

    @property
    def is_development(self) -> bool:
        """Explicit development mode only — an unset environment does not count."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def verify_tls(self) -> bool:
        """Whether upstream TLS certificates are verified.

        Read by the upstream client on every call, so flipping `environment`
        or `upstream_verify_tls` on a live Settings takes effect immediately.
        """
        if self.upstream_verify_tls is not None:
            return self.upstream_verify_tls
        return not self.is_development

    @property
    def cors_origins(self) -> list[str]:
        if self.is_production:
            return [self.frontend_url] if self.frontend_url else []
        return ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
