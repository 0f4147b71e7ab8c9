"""Configuration module for Tax Genius Pro."""

from .settings import (
    Settings,
    StartupSecurityError,
    get_settings,
    get_validated_settings,
    validate_startup_security,
)

__all__ = [
    "Settings",
    "StartupSecurityError",
    "get_settings",
    "get_validated_settings",
    "validate_startup_security",
]
