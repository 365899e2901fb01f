"""
Runtime configuration.

Values are read from environment variables prefixed with MINIMATE_ (or a .env file), e.g. MINIMATE_DATABASE_URL.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MINIMATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- Local store --
    database_url: str = "sqlite:///minimate.db"
    echo_sql: bool = False

    # -- Remote store --
    games_collection: str = "games"
    # Firestore caps "in" queries on the document id at 30 values, the mobile clients use 10
    in_query_limit: int = Field(default=10, ge=1, le=30)
    batch_limit: int = Field(default=500, ge=1, le=500)
    max_workers: int = Field(default=8, ge=1)
    firebase_credentials: Optional[str] = None
    firebase_project_id: Optional[str] = None

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
        force=True,
    )
