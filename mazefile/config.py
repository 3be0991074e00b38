"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="MAZEFILE_",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze File Service"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Maze storage
    maze_dir: Path = BASE_DIR / "mazes"
    maze_file_suffix: str = ".maz"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    @field_validator("maze_file_suffix")
    @classmethod
    def validate_maze_file_suffix(cls, v: str) -> str:
        """Require a suffix such as '.maz'."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("MAZEFILE_MAZE_FILE_SUFFIX must start with '.' followed by an extension")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown MAZEFILE_LOG_LEVEL '{v}'")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
