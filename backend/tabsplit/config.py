"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - invite_secret has NO default: absence is a ConfigurationError at sign/verify time,
      not a startup failure (health, listing and allocation keep working)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SecretStr for the invite secret: never rendered in reprs or logs
"""

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://tabsplit:tabsplit@db:5432/tabsplit"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs use postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Invites
    invite_secret: SecretStr | None = None
    invite_base_url: str = "http://localhost:3000"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def invite_secret_bytes(self) -> bytes:
        """Raw secret bytes; empty when unset (the codec rejects empty)."""
        if self.invite_secret is None:
            return b""
        return self.invite_secret.get_secret_value().encode("utf-8")


@lru_cache
def get_settings() -> Settings:
    return Settings()
