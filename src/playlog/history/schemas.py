"""Pydantic models for the read-side history queries."""

from pydantic import BaseModel, field_validator

from playlog.constants import DEFAULT_TOP_TRACKS_LIMIT, MAX_TOP_TRACKS_LIMIT, MIN_TOP_TRACKS_LIMIT
from playlog.history_import.timestamps import canonical_timestamp


class MonthlyPlays(BaseModel):
    """Play count for one calendar month (UTC)."""

    year: int
    month: int
    plays: int


class TopTracksQuery(BaseModel):
    """Filters and paging for the top-tracks query.

    ``start``/``end`` are inclusive bounds on played_at and accept any ISO 8601 date
    or datetime; they are normalized to the stored form. ``limit`` is clamped to
    1..200 and ``offset``/``min_ms`` to >= 0 rather than rejected.
    """

    start: str | None = None
    end: str | None = None
    min_ms: int = 0
    limit: int = DEFAULT_TOP_TRACKS_LIMIT
    offset: int = 0

    @field_validator("start", "end")
    @classmethod
    def _canonical_bound(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return canonical_timestamp(value)

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return max(MIN_TOP_TRACKS_LIMIT, min(MAX_TOP_TRACKS_LIMIT, value))

    @field_validator("offset", "min_ms")
    @classmethod
    def _clamp_non_negative(cls, value: int) -> int:
        return max(0, value)


class TopTrack(BaseModel):
    """Track/artist/album group with its play count."""

    name: str
    artist: str
    album: str
    plays: int


class TopTracksPage(BaseModel):
    """One page of top tracks; ``total`` counts all matching groups."""

    total: int
    rows: list[TopTrack]
