"""Configuration module for the docacl service.

Provides centralized configuration management with type-safe enums.

Usage:
    from docacl.core.config import settings, Environment

    # Access settings
    base_url = settings.AUTHORITY_SERVICE_BASE_URL

    # Use enums for type safety
    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from docacl.core.config.enums import Environment
from docacl.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
