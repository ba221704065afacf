"""Normalized data model for imported play records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from playlog.history_import.timestamps import format_utc, to_utc


class NormalizedPlay(BaseModel):
    """A single play normalized from any supported export shape.

    ``played_at`` is always aware UTC with whole seconds; the calendar fields are
    derived from it and cannot be set independently.
    """

    model_config = ConfigDict(frozen=True)

    played_at: datetime
    track_name: str
    artist_name: str
    album_name: str = ""
    ms_played: int = Field(ge=0)
    uri: str = ""
    context: str | None = None
    platform: str | None = None

    @field_validator("played_at")
    @classmethod
    def _played_at_utc(cls, value: datetime) -> datetime:
        return to_utc(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def year(self) -> int:
        return self.played_at.year

    @computed_field  # type: ignore[prop-decorator]
    @property
    def month(self) -> int:
        return self.played_at.month

    @computed_field  # type: ignore[prop-decorator]
    @property
    def day(self) -> int:
        return self.played_at.day

    @property
    def played_at_iso(self) -> str:
        """Stored text form of played_at, e.g. ``2024-01-15T10:00:00Z``."""
        return format_utc(self.played_at)

    def to_row(self) -> dict[str, object]:
        """Column values for the plays table."""
        row = self.model_dump()
        row["played_at"] = self.played_at_iso
        return row
