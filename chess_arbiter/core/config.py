"""
Application settings.

Values are read from environment variables prefixed with CHESS_ARBITER_ (or a local .env file).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Store configuration + logging. Nothing in here changes the rules of the game."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHESS_ARBITER_",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./chess_arbiter.db",
        description="SQLAlchemy URL of the session record store",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    position_max_length: int = Field(
        default=100,
        gt=0,
        description="Fixed size budget (characters) of a stored FEN position",
    )
    program_id: str = Field(
        default="chess-arbiter",
        description="Deployment identifier stamped on every stored session record",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
