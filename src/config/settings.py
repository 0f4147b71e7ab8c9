"""Application settings using Pydantic Settings.

Centralized configuration for the access and attribution core.

SECURITY: Production requires the following environment variables:
- APP_SECRET_KEY: Main application secret (min 32 chars)
- APP_JWT_SECRET_KEY: Session/viewing-state signing key (optional, min 32 chars)

Generate secrets with: python -c "import secrets; print(secrets.token_hex(32))"
"""

import sys
import logging
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

INSECURE_DEFAULT_SECRET = "change-me-in-production-INSECURE"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    name: str = Field(default="Tax Genius Pro", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # Security
    # CRITICAL: Must be set via APP_SECRET_KEY environment variable in production
    secret_key: str = Field(
        default=INSECURE_DEFAULT_SECRET,
        description="Secret key for signing - MUST be set in production"
    )
    jwt_secret_key: Optional[str] = Field(
        default=None,
        description="JWT signing key - falls back to secret_key when not set"
    )
    jwt_access_token_expire_hours: int = Field(
        default=8,
        description="Session token lifetime in hours"
    )
    enforce_https: bool = Field(
        default=False,
        description="Redirect plain HTTP requests to HTTPS"
    )

    # Database
    database_url: str = Field(
        default="sqlite://",
        description="SQLAlchemy URL for the profile store (in-memory SQLite by default)"
    )
    database_echo: bool = Field(default=False, description="Log SQL statements")

    # Surfaces the access gate redirects to
    signin_url: str = Field(default="/auth/signin", description="Sign-in page")
    forbidden_url: str = Field(default="/forbidden", description="Forbidden page")
    not_found_url: str = Field(default="/not-found", description="Not-found page")
    home_url: str = Field(default="/", description="Landing page after a referral link")

    # Session
    session_cookie_name: str = Field(
        default="session_token",
        description="Cookie carrying the session JWT when no bearer header is sent"
    )

    # Attribution
    attribution_cookie_name: str = Field(default="ref", description="Attribution code cookie")
    attribution_click_cookie_name: str = Field(default="ref_click", description="Click id cookie")
    attribution_cookie_max_age: int = Field(
        default=30 * 24 * 60 * 60,
        description="Attribution cookie lifetime in seconds (30 days)"
    )
    attribution_model: Literal["last_click", "first_click"] = Field(
        default="last_click",
        description="Whether a new referral link replaces an existing attribution cookie"
    )
    attribution_match_window_days: int = Field(
        default=14,
        ge=1,
        description="How far back an email or phone match may find a referral-link click"
    )

    # Role viewing (admin preview)
    viewing_cookie_name: str = Field(default="viewing_role", description="Viewing-state cookie")
    viewing_cookie_max_age: int = Field(
        default=4 * 60 * 60,
        description="Viewing-state lifetime in seconds (4 hours)"
    )

    @field_validator("attribution_model", mode="before")
    @classmethod
    def _normalize_model(cls, value):
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment in ("production", "prod", "staging")

    @property
    def cookie_secure(self) -> bool:
        """Cookies carry the Secure flag outside development."""
        return self.is_production

    @property
    def signing_key(self) -> str:
        """Key used for session and viewing-state JWTs."""
        return self.jwt_secret_key or self.secret_key

    def validate_production_security(self) -> List[str]:
        """
        Validate all security requirements for production.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.is_production:
            return errors

        if "INSECURE" in self.secret_key or self.secret_key == "change-me-in-production":
            errors.append(
                "APP_SECRET_KEY: Must be set in production. "
                "Generate with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        elif len(self.secret_key) < 32:
            errors.append("APP_SECRET_KEY: Must be at least 32 characters")

        if self.jwt_secret_key is not None and len(self.jwt_secret_key) < 32:
            errors.append("APP_JWT_SECRET_KEY: Must be at least 32 characters")

        if not self.enforce_https:
            errors.append(
                "APP_ENFORCE_HTTPS: Should be True in production for security"
            )

        return errors


# =============================================================================
# STARTUP VALIDATION
# =============================================================================

class StartupSecurityError(Exception):
    """Raised when security validation fails at startup."""
    pass


def validate_startup_security(settings: Settings, exit_on_failure: bool = True) -> bool:
    """
    Validate security settings at application startup.

    In production, fails fast if critical security settings are missing.

    Args:
        settings: Application settings instance
        exit_on_failure: If True, exit the process on failure (default)

    Returns:
        True if validation passes

    Raises:
        StartupSecurityError: If validation fails and exit_on_failure is False
    """
    errors = settings.validate_production_security()

    if not errors:
        if settings.is_production:
            logger.info("Production security validation PASSED")
        return True

    error_msg = (
        "\n" + "=" * 60 + "\n"
        "CRITICAL SECURITY CONFIGURATION ERROR\n"
        "=" * 60 + "\n\n"
        "The following security settings are missing or invalid:\n\n"
    )
    for i, err in enumerate(errors, 1):
        error_msg += f"  {i}. {err}\n\n"

    error_msg += (
        "=" * 60 + "\n"
        "APPLICATION CANNOT START IN PRODUCTION WITHOUT THESE SETTINGS\n"
        "=" * 60 + "\n"
    )

    logger.critical(error_msg)

    if exit_on_failure:
        print(error_msg, file=sys.stderr)
        sys.exit(1)
    else:
        raise StartupSecurityError(error_msg)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    return Settings()


def get_validated_settings(exit_on_failure: bool = True) -> Settings:
    """
    Get settings with security validation.

    Call this once at application startup.
    """
    settings = get_settings()
    validate_startup_security(settings, exit_on_failure)
    return settings
