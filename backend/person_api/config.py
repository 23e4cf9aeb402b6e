"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded for production)
    - get_settings() is cached (lru_cache) — single instance per process
    - Picture upload limits are configuration, not literals in the service

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from person_api.core.access_policy import PicturePolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://person:person@db:5432/person"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres exposes postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Tokens
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    access_token_ttl_seconds: int = 3600

    # Hashing
    bcrypt_rounds: int = 12

    # Pictures
    picture_dir: str = "pictures"
    picture_min_bytes: int = 1000
    picture_max_bytes: int = 10 * 1024 * 1024
    picture_extension: str = ".png"
    picture_content_types: list[str] = ["image/png", "image/jpeg"]

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def picture_policy(self) -> PicturePolicy:
        return PicturePolicy(
            min_bytes=self.picture_min_bytes,
            max_bytes=self.picture_max_bytes,
            extension=self.picture_extension,
            content_types=tuple(t.lower() for t in self.picture_content_types),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
