"""Application configuration settings.

This module provides centralized configuration management for the Logic Master
game service. All settings can be overridden via environment variables.

Environment Variables:
    DATABASE_URL: SQLAlchemy database connection URL for the local key-value store
        Default: sqlite:///data/logic_master.db

    ENVIRONMENT: Deployment environment name
        Default: development
        Options: development, production
        Affects: logging format

    LOG_LEVEL: Logging verbosity level
        Default: INFO (production), DEBUG (development)
        Options: DEBUG, INFO, WARNING, ERROR, CRITICAL

    PROFILE_STORAGE_KEY: Storage key holding the serialized player profile
        Default: logicMasterUserData

Usage:
    >>> from logic_master.config import settings
    >>> print(settings.DATABASE_URL)
    >>> if settings.is_production:
    ...     print("Running in production mode")
"""
import os


class Settings:
    """Application settings loaded from environment variables."""

    # Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///data/logic_master.db")
    """SQLAlchemy database connection URL. The store is a single key-value table."""

    PROFILE_STORAGE_KEY: str = os.getenv("PROFILE_STORAGE_KEY", "logicMasterUserData")
    """Key under which the JSON profile blob is stored."""

    # Application settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    """Deployment environment: development or production."""

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "")
    """Logging level. Empty string means auto-detect based on ENVIRONMENT."""

    @property
    def is_production(self) -> bool:
        """Check if running in production environment.

        Returns:
            True if ENVIRONMENT is 'production' (case-insensitive)
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
"""Global settings instance. Import and use throughout the application."""
