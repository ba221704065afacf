"""Database package -- convenience re-exports.

Importing this module registers all models with Base.metadata.
"""

from playlog.db.base import Base
from playlog.db.models import PLAY_IDENTITY_COLUMNS, Play
from playlog.db.operations import PlayRepository
from playlog.db.session import DatabaseManager

__all__ = [
    "Base",
    "DatabaseManager",
    "PLAY_IDENTITY_COLUMNS",
    "Play",
    "PlayRepository",
]
