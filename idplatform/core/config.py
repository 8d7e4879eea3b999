"""
Configuration settings for the application.
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = "idplatform-services"  # Tagged on JSON log lines

    # Response envelope version (stamped on every UI spec response)
    APP_VERSION: str = "1.0"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # Options: "text", "json"
    LOG_INCLUDE_REQUEST_ID: bool = True  # Include X-Request-ID in logs
    LOG_MASK_PII: bool = True  # Mask emails and long digit runs in log messages

    # HTTP Client Configuration
    HTTP_CLIENT_TIMEOUT: float = 30.0  # Default timeout for HTTP clients (seconds)
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = 10  # Maximum number of keepalive connections
    HTTP_MAX_CONNECTIONS: int = 20  # Maximum total connections
    HTTP_RETRY_ATTEMPTS: int = 3  # Default retry attempts for transient errors
    HTTP_RETRY_BACKOFF_SECONDS: float = 2.0  # Base backoff for retries
    HTTP_RETRY_STATUSES: tuple[int, ...] = (429, 500, 502, 503, 504)

    # Performance Monitoring
    RESPONSE_TIME_WARNING_THRESHOLD_MS: int = 5000  # Warn if requests take longer than 5s (milliseconds)

    # Demographic Validation
    # strptime pattern used to parse the date of birth in personal info
    DATE_PATTERN: str = "%Y-%m-%d"

    # Master Data Service (UI spec persistence)
    MASTERDATA_BASE_URL: Optional[str] = None  # e.g. http://masterdata/v1/masterdata
    MASTERDATA_TIMEOUT: float = 30.0
    MASTERDATA_RETRY_ATTEMPTS: int = 1  # 1 = single attempt, no retry

    # Domain tag fixed on every UI spec this service saves and lists
    UI_SPEC_DOMAIN: str = "pre-registration"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow extra fields in .env for backward compatibility


settings = Settings()
