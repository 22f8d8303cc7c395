from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ProjectDesk"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./projectdesk.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_create_tables: bool = False  # Local/dev convenience; use Alembic otherwise

    # Sessions (signed cookie carrying the wizard session)
    session_secret_key: str = "change-this-to-a-secure-random-string"
    session_cookie_name: str = "projectdesk_session"
    session_max_age_seconds: int = 14 * 24 * 60 * 60
    session_https_only: bool = False

    # Project wizard
    wizard_session_ttl_seconds: int = 30 * 60  # Idle timeout for Redis-backed wizard state
    project_commit_max_attempts: int = 3
    project_commit_retry_delay_seconds: float = 1.0

    # Document uploads (ProjectDocument.file_path is relative to this root)
    upload_root: str = "./wwwroot"

    # Redis (optional - wizard state falls back to the cookie session without it)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10
    redis_retry_interval_seconds: float = 30.0  # Wait before reconnecting after a failure

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("session_secret_key")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("SESSION_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("project_commit_max_attempts")
    @classmethod
    def validate_commit_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PROJECT_COMMIT_MAX_ATTEMPTS must be at least 1")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    if settings.is_production and settings.session_secret_key == (
        "change-this-to-a-secure-random-string"
    ):
        raise ValueError(
            "SESSION_SECRET_KEY must be changed from default value. "
            "Generate a secure secret with: openssl rand -hex 32"
        )
    return settings
