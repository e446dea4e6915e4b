"""
config.py

- Reads TRANSCRIPT_TRACKER_* environment variables (and an optional .env file)
- pydantic v2 / pydantic-settings v2
- Settings are passed explicitly to the loader, generator and CLI; get_settings()
  only caches the environment-derived default
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models.enums import GpaPointsPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIPT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data locations
    data_dir: Path = Path("data")
    output_dir: Path = Path("output")
    templates_dir: Optional[Path] = None  # None: packaged templates

    # Calculation
    gpa_points_policy: GpaPointsPolicy = GpaPointsPolicy.STORED

    # Rendering
    school_name: str = "Homeschool Academy"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
