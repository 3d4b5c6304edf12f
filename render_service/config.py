"""
Render Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


class RenderSettings(BaseSettings):
    """
    Render service configuration with validation.

    All settings can be overridden via environment variables
    (API_SECRET = api_secret, case-insensitive).
    """

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Security ===
    api_secret: Optional[str] = Field(
        default=None,
        min_length=16,
        description="Secret expected in x-api-secret for data uploads (min 16 chars)"
    )
    admin_secret: Optional[str] = Field(
        default=None,
        min_length=16,
        description="Secret expected in x-admin-secret for admin operations (min 16 chars)"
    )

    # === MongoDB ===
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="reports", description="MongoDB database name")
    records_collection: str = Field(default="records", description="Records collection name")

    # === Paper & pagination ===
    default_paper_width: int = Field(default=794, ge=100, le=5000, description="Default page width (px)")
    default_paper_height: int = Field(default=1123, ge=100, le=5000, description="Default page height (px)")
    footer_height: float = Field(default=40, ge=0, description="Footer zone reserved on every page (px)")
    page_margin_top: float = Field(default=15, ge=0, description="Landing offset after a page cut (px)")
    page_margin_bottom: float = Field(default=10, ge=0, description="Gap kept above the footer zone (px)")

    # === Capture (Playwright) ===
    max_concurrent_captures: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum concurrent Chromium captures (1-20)"
    )
    playwright_timeout: int = Field(default=30000, ge=1000, description="Playwright timeout (ms)")
    playwright_headless: bool = Field(default=True, description="Run Chromium headless")
    settle_timeout_ms: int = Field(
        default=10000,
        ge=100,
        description="Maximum wait for fonts/images before measuring (ms)"
    )
    settle_delay_ms: int = Field(
        default=0,
        ge=0,
        le=10000,
        description="Extra fixed delay after content settled (ms)"
    )

    # === CORS ===
    cors_origins: str = Field(default="", description="Comma-separated list of allowed CORS origins")

    # === Logging ===
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    log_format: str = Field(default="simple", description="simple or json")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("api_secret", "admin_secret")
    @classmethod
    def validate_secret_strength(cls, v: Optional[str]) -> Optional[str]:
        """Reject obviously weak secrets."""
        if v is None:
            return None
        weak_secrets = {"secret", "password", "changeme", "1234567890123456"}
        if v.lower() in weak_secrets or len(set(v)) < 4:
            raise ValueError("Secret is too weak - use a secure random string")
        return v

    @field_validator("mongodb_uri")
    @classmethod
    def validate_mongodb_uri(cls, v: str) -> str:
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"Invalid MongoDB URI: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("simple", "json"):
            raise ValueError("log_format must be 'simple' or 'json'")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production:
            if not self.api_secret:
                issues.append("CRITICAL: API_SECRET required in production")
            if not self.admin_secret:
                issues.append("CRITICAL: ADMIN_SECRET required in production")
            if "localhost" in self.mongodb_uri:
                issues.append("WARNING: Using localhost MongoDB in production")
        elif not self.admin_secret:
            issues.append("WARNING: ADMIN_SECRET not set, admin endpoints will reject every request")

        if self.footer_height + self.page_margin_top + self.page_margin_bottom >= self.default_paper_height:
            issues.append("CRITICAL: footer and margins leave no room for content on the default page")

        return issues


@lru_cache()
def get_settings() -> RenderSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    """
    return RenderSettings()


def validate_config_on_startup() -> None:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    for issue in settings.validate_production_config():
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        logger.warning(issue)

    # Log loaded configuration (redact secrets)
    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  paper={settings.default_paper_width}x{settings.default_paper_height}px")
    logger.info(f"  footer_height={settings.footer_height}px")
    logger.info(f"  max_concurrent_captures={settings.max_concurrent_captures}")
    logger.info(f"  records={settings.mongo_db_name}.{settings.records_collection}")
    logger.info(f"  mongodb_uri={'*****' if 'localhost' not in settings.mongodb_uri else settings.mongodb_uri}")
