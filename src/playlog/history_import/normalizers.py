"""Normalizers that convert raw export records of any known shape into NormalizedPlay.

Shapes are tried in a fixed order and the first whose marker fields are present
wins; fields are never merged across shapes.
"""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from playlog.history_import.constants import (
    EXTENDED_FIELDS,
    LEGACY_FIELDS,
    MAX_MS_PLAYED,
    MINIMAL_FIELDS,
    ShapeFields,
)
from playlog.history_import.models import NormalizedPlay
from playlog.history_import.timestamps import parse_absolute_timestamp, parse_local_end_time

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class RecordShape:
    """One recognized export schema: a marker predicate plus where to find each field."""

    name: str
    matches: Callable[[RawRecord], bool]
    parse_timestamp: Callable[[object], datetime | None]
    fields: ShapeFields


def _is_legacy(raw: RawRecord) -> bool:
    return bool(raw.get("endTime")) and raw.get("msPlayed") is not None


def _is_extended(raw: RawRecord) -> bool:
    return bool(raw.get("ts")) and raw.get("ms_played") is not None


def _is_minimal(raw: RawRecord) -> bool:
    return bool(raw.get("trackName")) and bool(raw.get("artistName")) and bool(raw.get("endTime"))


SHAPES: tuple[RecordShape, ...] = (
    RecordShape("legacy", _is_legacy, parse_local_end_time, LEGACY_FIELDS),
    RecordShape("extended", _is_extended, parse_absolute_timestamp, EXTENDED_FIELDS),
    RecordShape("minimal", _is_minimal, parse_local_end_time, MINIMAL_FIELDS),
)


def detect_shape(raw: RawRecord) -> RecordShape | None:
    """Return the first shape whose markers are present, or None."""
    for shape in SHAPES:
        if shape.matches(raw):
            return shape
    return None


def _first_value(raw: RawRecord, keys: tuple[str, ...]) -> str | None:
    """First scalar value among ``keys`` that is neither missing, null, nor empty."""
    for key in keys:
        value = raw.get(key)
        if value is None or value == "" or isinstance(value, bool):
            continue
        if isinstance(value, (str, int, float, Decimal)):
            return str(value)
    return None


def _text(raw: RawRecord, keys: tuple[str, ...]) -> str:
    value = _first_value(raw, keys)
    return value.strip() if value is not None else ""


def _optional_text(raw: RawRecord, keys: tuple[str, ...]) -> str | None:
    return _text(raw, keys) or None


def coerce_ms_played(value: object) -> int:
    """Coerce a duration to whole non-negative milliseconds.

    Missing, non-numeric, NaN and infinite values become 0; huge values are capped
    at the largest SQLite INTEGER.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, min(value, MAX_MS_PLAYED))
    if isinstance(value, (float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0
    if not math.isfinite(number):
        return 0
    return max(0, min(math.floor(number), MAX_MS_PLAYED))


def normalize_record(raw: object) -> NormalizedPlay | None:
    """Normalize one raw export record.

    Returns None (never raises) when no shape matches, the timestamp is missing or
    unparseable, or both track and artist are empty.
    """
    if not isinstance(raw, Mapping):
        return None

    shape = detect_shape(raw)
    if shape is None:
        return None

    fields = shape.fields
    played_at = shape.parse_timestamp(raw.get(fields.timestamp))
    if played_at is None:
        logger.debug("Rejecting %s record with unparseable timestamp: %r", shape.name, raw.get(fields.timestamp))
        return None

    track_name = _text(raw, fields.track)
    artist_name = _text(raw, fields.artist)
    if not track_name and not artist_name:
        return None

    return NormalizedPlay(
        played_at=played_at,
        track_name=track_name,
        artist_name=artist_name,
        album_name=_text(raw, fields.album),
        ms_played=coerce_ms_played(raw.get(fields.duration)),
        uri=_text(raw, fields.uri),
        context=_optional_text(raw, fields.context),
        platform=_optional_text(raw, fields.platform),
    )
