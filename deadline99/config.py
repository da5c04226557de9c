"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")  # noqa: S104
    port: int = Field(default=9999, description="Server port")
    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Log level for deadline99 loggers")

    # Registry capacity
    max_players: int = Field(default=600, gt=0, description="Maximum registered players")
    max_games: int = Field(default=100, gt=0, description="Maximum registered games")

    # Game Configuration
    max_players_per_game: int = Field(default=10, ge=2, description="Maximum players per game")

    # Cleanup
    cleanup_interval_seconds: float = Field(
        default=60.0, gt=0, description="Seconds between sweeps of finished games"
    )


# Global settings instance
settings = Settings()
