import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.exceptions import ConfigurationError
from app.utils.logging_helpers import sanitize_url_for_logging


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    A missing source playlist URL is reported but does not stop startup;
    playlist endpoints answer with an error until it is configured.
    """

    source_m3u_url: str | None = None
    allow_users: str = ""  # user1:pass1,user2:pass2 ; empty allows everyone
    cache_ttl_ms: int = 5 * 60 * 1000
    upstream_timeout_sec: float = 30.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("source_m3u_url", mode="before")
    @classmethod
    def normalize_source_url(cls, value):
        """Treat a blank URL as not configured."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("source_m3u_url", mode="after")
    @classmethod
    def validate_source_url(cls, value: str | None) -> str | None:
        """Validate the source playlist URL is HTTP/HTTPS."""
        if value and not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Source M3U URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("cache_ttl_ms")
    @classmethod
    def validate_cache_ttl(cls, value: int) -> int:
        """Validate cache TTL (milliseconds)."""
        if value < 0:
            raise ValueError("cache_ttl_ms must be >= 0")
        return value

    @field_validator("upstream_timeout_sec")
    @classmethod
    def validate_upstream_timeout(cls, value: float) -> float:
        """Validate upstream request timeout (seconds)."""
        if value <= 0:
            raise ValueError("upstream_timeout_sec must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @model_validator(mode="after")
    def validate_source_configuration(self):
        """Warn early about a missing source playlist."""
        if not self.source_m3u_url:
            logger.warning("No SOURCE_M3U_URL configured - playlist endpoints will fail")
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Source M3U: %s", sanitize_url_for_logging(self.source_m3u_url))
        logger.info(
            "  Allowed Users: %s",
            len([pair for pair in self.allow_users.split(",") if pair.strip()]) or "open mode",
        )
        logger.info("  Cache TTL: %sms", self.cache_ttl_ms)
        logger.info("  Upstream Timeout: %ss", self.upstream_timeout_sec)


settings = CustomSettings()


def ensure_source_configured(config: CustomSettings) -> str:
    """
    Return the configured source URL

    Raises:
        ConfigurationError: If SOURCE_M3U_URL is not set
    """
    if not config.source_m3u_url:
        raise ConfigurationError("Missing SOURCE_M3U_URL env var")
    return config.source_m3u_url


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
