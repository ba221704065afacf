"""playlog configuration loaded from environment variables."""

import functools
from pathlib import Path

from pydantic_settings import BaseSettings

from playlog.constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_DATABASE_PATH,
    DEFAULT_MIN_MS_PLAYED,
    LogFormat,
)


class PlaylogSettings(BaseSettings):
    """playlog configuration."""

    # Input
    PLAYLOG_DATA_DIR: str = DEFAULT_DATA_DIR

    # Database
    PLAYLOG_DATABASE_PATH: str = DEFAULT_DATABASE_PATH
    PLAYLOG_DB_ECHO: bool = False

    # Import
    PLAYLOG_MIN_MS_PLAYED: int = DEFAULT_MIN_MS_PLAYED

    # Logging
    PLAYLOG_LOG_LEVEL: str = "INFO"
    PLAYLOG_LOG_FORMAT: LogFormat = LogFormat.TEXT

    model_config = {"env_prefix": ""}

    @property
    def data_dir(self) -> Path:
        return Path(self.PLAYLOG_DATA_DIR)

    @property
    def database_path(self) -> Path:
        return Path(self.PLAYLOG_DATABASE_PATH)


@functools.lru_cache(maxsize=1)
def get_settings() -> PlaylogSettings:
    """Return cached settings singleton."""
    return PlaylogSettings()
