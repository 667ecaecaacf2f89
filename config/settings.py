"""Logging registry settings and environment configuration."""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Centralized logging configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Main logger loaded from the environment
    log_level: Optional[str] = Field(None, alias="VELOX_LOG_LEVEL")
    log_dir: Optional[str] = Field(None, alias="VELOX_LOG_DIR")
    log_filename: Optional[str] = Field(None, alias="VELOX_LOG_FILENAME")

    # File rotation
    rotation_max_files: int = Field(120, alias="VELOX_ROTATION_MAX_FILES")
    rotation_max_bytes: int = Field(5_000_000, alias="VELOX_ROTATION_MAX_BYTES")
    rotation_date_format: str = Field("%Y-%m-%d", alias="VELOX_ROTATION_DATE_FORMAT")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


settings = get_settings()
