"""Database operations for imported plays."""

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from playlog.db.models import PLAY_IDENTITY_COLUMNS, Play
from playlog.history_import.models import NormalizedPlay

logger = logging.getLogger(__name__)


class PlayRepository:
    """Writes normalized plays into the plays table."""

    def insert_play(self, play: NormalizedPlay, session: Session) -> bool:
        """Insert a play unless an identical one is already stored.

        Returns True if a row was added, False if it was a duplicate.
        """
        stmt = (
            sqlite_insert(Play)
            .values(**play.to_row())
            .on_conflict_do_nothing(index_elements=list(PLAY_IDENTITY_COLUMNS))
        )
        result = session.execute(stmt)
        return result.rowcount > 0

    def count_plays(self, session: Session) -> int:
        """Total number of stored plays."""
        return session.scalar(select(func.count()).select_from(Play)) or 0
