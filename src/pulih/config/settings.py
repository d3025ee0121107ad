"""
PULIH Application Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(env_prefix="PULIH_DB_")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="pulih_db", description="Database name")
    user: str = Field(default="pulih_user", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, le=100, description="Max overflow connections")
    url_override: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL (e.g. sqlite+aiosqlite:///:memory:), overrides host/port/name",
    )

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        if self.url_override:
            return self.url_override
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class JWTSettings(BaseSettings):
    """JWT authentication configuration."""

    model_config = SettingsConfigDict(env_prefix="PULIH_JWT_")

    secret_key: SecretStr = Field(default=SecretStr("dev_jwt_secret_key_not_for_production"), description="JWT signing secret")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=60, ge=5, le=10080)


class JournalSettings(BaseSettings):
    """Journal analytics configuration."""

    model_config = SettingsConfigDict(env_prefix="PULIH_JOURNAL_")

    timezone: str = Field(default="Asia/Jakarta", description="IANA zone used for local hours and chart labels")
    chart_locale: Literal["id", "en"] = Field(default="id", description="Month names used in chart labels")
    default_top_n: int = Field(default=3, ge=1, le=20, description="Default size of tag rankings")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown IANA zone names at startup."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class AdminBootstrapSettings(BaseSettings):
    """Default administrator created when the user store is empty."""

    model_config = SettingsConfigDict(env_prefix="PULIH_ADMIN_")

    username: str = Field(default="admin", description="Bootstrap admin username")
    email: Optional[str] = Field(default=None, description="Bootstrap admin email")
    password: Optional[SecretStr] = Field(
        default=None,
        description="Bootstrap admin password (bootstrap disabled when unset)",
    )


class SafetySettings(BaseSettings):
    """Rate limiting and account rules."""

    model_config = SettingsConfigDict(env_prefix="PULIH_")

    rate_limit_requests_per_minute: int = Field(default=20, ge=1, le=1000)
    rate_limit_burst: int = Field(default=10, ge=0, le=1000, description="Requests allowed above the per-minute rate")
    trust_forwarded_for: bool = Field(
        default=False,
        description="Key rate limits on X-Forwarded-For; enable only behind a proxy that sets it",
    )
    min_password_length: int = Field(default=6, ge=6, le=128)
    default_email_domain: str = Field(default="pulihalami.app")


class SentrySettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="PULIH_SENTRY_")

    dsn: str = Field(default="", description="Sentry DSN (tracking disabled when empty)")
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with PULIH_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        db_url = settings.database.async_url
    """

    model_config = SettingsConfigDict(
        env_prefix="PULIH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # Storage selection
    storage_backend: Literal["database", "memory"] = Field(
        default="database",
        description="Where users and journal entries are kept"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    admin: AdminBootstrapSettings = Field(default_factory=AdminBootstrapSettings)
    safety: SafetySettings = Field(default_factory=SafetySettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, use dependency injection to override.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
