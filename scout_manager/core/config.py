"""Configuration management for Scout Manager."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Scout Manager"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    # Simulation
    default_seed: int = Field(default=42, alias="DEFAULT_SEED")
    season_length_weeks: int = Field(default=38, ge=1, alias="SEASON_LENGTH_WEEKS")
    # Week on which the board checks for unfulfilled directives
    deadline_check_week: int = Field(default=36, ge=1, alias="DEADLINE_CHECK_WEEK")
    # Lowest career tier at which the board evaluates the scout
    board_tier: int = Field(default=5, ge=1, le=5, alias="BOARD_TIER")

    # Demo world
    demo_clubs: int = Field(default=8, ge=2, alias="DEMO_CLUBS")
    demo_squad_size: int = Field(default=22, ge=11, alias="DEMO_SQUAD_SIZE")
    demo_scout_tier: int = Field(default=5, ge=1, le=5, alias="DEMO_SCOUT_TIER")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
