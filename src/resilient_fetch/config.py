"""
Configuration settings for the resilient fetch orchestrator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Bounded retry (server-side retryable failures) ===
    FETCH_MAX_ATTEMPTS: int = 5
    FETCH_BASE_DELAY_MS: int = 200
    FETCH_MAX_DELAY_MS: int = 5000  # Backoff cap
    FETCH_BACKOFF_FACTOR: float = 2.0

    # === Network-failure retry (no response at all) ===
    NETWORK_RETRY_INTERVAL_MS: int = 2000
    OFFLINE_RETRY: bool = True  # False = one extra cycle, True = until online

    # === HTTP client ===
    HTTP_TIMEOUT: float = 60.0  # seconds, per attempt
    HTTP_FOLLOW_REDIRECTS: bool = True

    # === Upload progress ===
    UPLOAD_CHUNK_SIZE: int = 65536  # bytes per progress event
    SPEED_WINDOW_SIZE: int = 10  # samples kept by the speed estimator

    # === Request tracking ledger ===
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 10
    TRACKER_KEY_PREFIX: str = "fetch-requests"


# Global settings instance
settings = Settings()
