"""
Configuration module for Profile Sync Bridge.

This module provides environment variable configuration and settings management
using Pydantic Settings for type-safe configuration.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


VALID_BACKENDS = ("firebase", "local")


class ProfileSyncSettings(BaseSettings):
    """
    Configuration settings for the Profile Sync Bridge.

    All settings are loaded from environment variables with validation.
    """

    # Required environment variables
    event_bearer_token: str = Field(
        ...,
        env="EVENT_BEARER_TOKEN",
        description="Bearer token the event host presents when pushing events"
    )

    # Environment variables with defaults
    sync_backend: str = Field(
        "firebase",
        env="SYNC_BACKEND",
        description="Backend for profiles and claims: 'firebase' or 'local'"
    )

    firebase_project_id: Optional[str] = Field(
        None,
        env="FIREBASE_PROJECT_ID",
        description="Firebase project ID (defaults to the credentials' project)"
    )

    firebase_service_account_file: Optional[Path] = Field(
        None,
        env="FIREBASE_SERVICE_ACCOUNT_FILE",
        description="Service account key file; application default credentials when unset"
    )

    profiles_collection: str = Field(
        "users",
        env="PROFILES_COLLECTION",
        description="Firestore collection holding one profile document per account"
    )

    data_dir: Path = Field(
        Path("/data"),
        env="DATA_DIR",
        description="Directory for the local backend's JSON files"
    )

    log_level: str = Field(
        "INFO",
        env="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @validator("sync_backend")
    def validate_sync_backend(cls, v):
        """Validate the backend name."""
        if v.lower() not in VALID_BACKENDS:
            raise ValueError(f"SYNC_BACKEND must be one of: {', '.join(VALID_BACKENDS)}")
        return v.lower()

    @validator("profiles_collection")
    def validate_collection(cls, v):
        """A collection ID is a single path segment."""
        v = v.strip().strip("/")
        if not v or "/" in v:
            raise ValueError("PROFILES_COLLECTION must be a single collection ID")
        return v

    @validator("event_bearer_token")
    def validate_token(cls, v):
        """Validate the bearer token is not empty."""
        if not v or not v.strip():
            raise ValueError("EVENT_BEARER_TOKEN cannot be empty")
        return v.strip()

    def ensure_data_directories(self) -> None:
        """Create the local backend's data directory if it doesn't exist."""
        if self.sync_backend == "local":
            self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def profiles_file(self) -> Path:
        return self.data_dir / "profiles.json"

    @property
    def claims_file(self) -> Path:
        return self.data_dir / "claims.json"


# Global settings instance
settings: Optional[ProfileSyncSettings] = None


def get_settings() -> ProfileSyncSettings:
    """
    Get the global settings instance, creating it if necessary.

    Returns:
        ProfileSyncSettings: The global settings instance

    Raises:
        ValueError: If required environment variables are missing or invalid
    """
    global settings
    if settings is None:
        settings = ProfileSyncSettings()
        settings.ensure_data_directories()
    return settings


def reload_settings() -> ProfileSyncSettings:
    """
    Force reload settings from environment variables.

    This is useful for testing or when environment variables change.
    """
    global settings
    settings = ProfileSyncSettings()
    settings.ensure_data_directories()
    return settings
