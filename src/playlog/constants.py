"""Centralized constants for playlog."""

import enum


class ServiceName(enum.StrEnum):
    """Service names used for logging and identification."""

    PLAYLOG = "playlog"


class LogFormat(enum.StrEnum):
    """Supported console log formats."""

    TEXT = "text"
    JSON = "json"


# --- Default locations ---

DEFAULT_DATA_DIR = "data/spotify"
DEFAULT_DATABASE_PATH = "data/db.sqlite"

# --- Import ---

# Plays shorter than this are treated as skips and never stored
DEFAULT_MIN_MS_PLAYED = 30_000

# --- Top-tracks pagination ---

DEFAULT_TOP_TRACKS_LIMIT = 50
MIN_TOP_TRACKS_LIMIT = 1
MAX_TOP_TRACKS_LIMIT = 200

# --- Logging ---

TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
