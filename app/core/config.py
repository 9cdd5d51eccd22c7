"""
Configuration management for the Media Service.
Loads environment variables using Pydantic Settings.
"""

from typing import List, Union
from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Wedding Gallery Media Service"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS Configuration
    CORS_ORIGINS: Union[str, List[str]] = ["*"]

    # Local storage root (typically a mounted Docker volume)
    LOCAL_STORAGE_PATH: str = "/app/uploads"

    # Event access gate
    EVENT_TOKEN: str = ""                        # Blank disables the gate
    EVENT_TOKEN_COOKIE_MAX_AGE: int = 2592000    # 30 days
    EVENT_TOKEN_COOKIE_SECURE: bool = False      # Set to True behind HTTPS

    # Streaming
    STREAM_CHUNK_SIZE: int = 256 * 1024          # 256KB read buffer
    MEDIA_CACHE_MAX_AGE: int = 86400             # Uploads never change under a path

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, values):
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if isinstance(values.get("CORS_ORIGINS"), str):
            values["CORS_ORIGINS"] = [
                origin.strip() for origin in values["CORS_ORIGINS"].split(",")
            ]
        return values

    @property
    def event_token(self) -> str:
        """Configured event token with surrounding whitespace removed."""
        return self.EVENT_TOKEN.strip()

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
