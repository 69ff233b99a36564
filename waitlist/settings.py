"""Application settings using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_async_database_url(url: str) -> str:
    """Convert a database URL to an async driver URL."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://") and "+aiosqlite" not in url:
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    frontend_url: str = "http://localhost:3000"

    # Storage
    database_url: str = "sqlite+aiosqlite:///./subscribers.db"

    # Redis (optional, used for distributed rate limiting)
    redis_url: str = "redis://localhost:6379/0"
    redis_enabled: bool = False

    # Rate limiting (per client IP)
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    # Twilio (SMS)
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_from_number: str | None = None
    twilio_messaging_service_sid: str | None = None
    twilio_validate_signature: bool = False

    # SMS copy
    sms_default_region: str = "US"
    brand_name: str = "House of Reign"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def sms_enabled(self) -> bool:
        """Outbound SMS needs credentials and a sender."""
        has_sender = bool(self.twilio_messaging_service_sid or self.twilio_from_number)
        return bool(self.twilio_account_sid and self.twilio_auth_token and has_sender)

    @property
    def async_database_url(self) -> str:
        return get_async_database_url(self.database_url)


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
