"""
CivicReport - Configuration Management
Centralized configuration using pydantic-settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Nearby reports
    nearby_radius_km: float = 10.0

    # Reverse geocoding (Nominatim / OpenStreetMap)
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "CivicReport/1.0"
    geocoder_timeout_seconds: float = 10.0
    geocoder_language: str = "en"

    # Firebase
    firebase_credentials_path: Optional[str] = None
    firebase_project_id: Optional[str] = None
    firebase_storage_bucket: Optional[str] = None

    # Report store: "memory" or "firestore"
    report_store_backend: str = "memory"

    # Client preferences, passed in instead of read from device storage
    default_language: str = "en"
    force_show_onboarding: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def uses_firestore(self) -> bool:
        return self.report_store_backend.lower() == "firestore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
