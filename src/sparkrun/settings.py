"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseModel):
    """Desktop window settings."""

    width: int = Field(default=960, gt=0)
    height: int = Field(default=540, gt=0)
    fps: int = Field(default=60, gt=0)
    scale: float = Field(default=1.0, ge=1.0, le=2.25)
    resizable: bool = True


class StorageSettings(BaseModel):
    """Where best scores and preferences are kept."""

    path: Path = Field(default_factory=lambda: Path.home() / ".sparkrun" / "store.json")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPARKRUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    profile: str = "spark"
    seed: Optional[int] = None

    display: DisplaySettings = Field(default_factory=DisplaySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
