"""Play model: one canonical listening event per row."""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from playlog.db.base import Base

# Columns that identify a play; a second row with the same values is never stored
PLAY_IDENTITY_COLUMNS = ("played_at", "track_name", "artist_name", "ms_played")


class Play(Base):
    """Individual play events (unique on played_at, track_name, artist_name, ms_played).

    ``played_at`` is UTC ISO-8601 text (``2024-01-15T10:00:00Z``), so string order is
    chronological order. ``year``/``month``/``day`` are copies of its calendar date.
    """

    __tablename__ = "plays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    played_at: Mapped[str] = mapped_column(Text, nullable=False)
    track_name: Mapped[str] = mapped_column(Text, nullable=False)
    artist_name: Mapped[str] = mapped_column(Text, nullable=False)
    album_name: Mapped[str] = mapped_column(Text, nullable=False)
    ms_played: Mapped[int] = mapped_column(Integer, nullable=False)
    uri: Mapped[str | None] = mapped_column(Text)
    context: Mapped[str | None] = mapped_column(Text)
    platform: Mapped[str | None] = mapped_column(Text)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("ux_plays_unique", *PLAY_IDENTITY_COLUMNS, unique=True),
        Index("ix_plays_played_at", "played_at"),
        Index("ix_plays_artist", "artist_name"),
        Index("ix_plays_track", "track_name"),
    )
