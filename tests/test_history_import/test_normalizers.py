"""Tests for export record normalizers."""

import math
from datetime import UTC, datetime

import pytest

from playlog.history_import.normalizers import coerce_ms_played, detect_shape, normalize_record


def test_normalize_extended_record_valid() -> None:
    """Valid extended record normalizes correctly."""
    raw = {
        "ts": "2023-06-15T10:30:00Z",
        "ms_played": 180000,
        "master_metadata_track_name": "Bohemian Rhapsody",
        "master_metadata_album_artist_name": "Queen",
        "master_metadata_album_album_name": "A Night at the Opera",
        "spotify_track_uri": "spotify:track:4u7EnebtmKWzUH433cf5Qv",
        "conn_country": "GB",
        "platform": "Android OS 13",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.track_name == "Bohemian Rhapsody"
    assert play.artist_name == "Queen"
    assert play.album_name == "A Night at the Opera"
    assert play.ms_played == 180000
    assert play.played_at == datetime(2023, 6, 15, 10, 30, tzinfo=UTC)
    assert play.played_at_iso == "2023-06-15T10:30:00Z"
    assert play.uri == "spotify:track:4u7EnebtmKWzUH433cf5Qv"
    assert play.context == "GB"
    assert play.platform == "Android OS 13"
    assert (play.year, play.month, play.day) == (2023, 6, 15)


def test_normalize_legacy_record_valid() -> None:
    """Account data endTime is read as UTC wall-clock time."""
    raw = {
        "endTime": "2024-01-31 23:59",
        "msPlayed": 120000,
        "trackName": "Yesterday",
        "artistName": "The Beatles",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.played_at_iso == "2024-01-31T23:59:00Z"
    assert (play.year, play.month, play.day) == (2024, 1, 31)
    assert play.album_name == ""
    assert play.uri == ""
    assert play.context is None
    assert play.platform is None


def test_normalize_minimal_record_without_duration() -> None:
    """Minimal shape defaults a missing duration to 0."""
    raw = {"endTime": "2022-12-31 08:05", "trackName": "Song", "artistName": "Band", "albumName": "LP"}
    play = normalize_record(raw)
    assert play is not None
    assert detect_shape(raw).name == "minimal"  # type: ignore[union-attr]
    assert play.ms_played == 0
    assert play.album_name == "LP"
    assert (play.year, play.month, play.day) == (2022, 12, 31)


def test_shape_priority_legacy_before_extended() -> None:
    """A record carrying both marker sets is read as legacy only."""
    raw = {
        "endTime": "2024-03-01 12:00",
        "msPlayed": 45000,
        "ts": "2020-01-01T00:00:00Z",
        "ms_played": 1,
        "trackName": "Legacy Track",
        "master_metadata_track_name": "Extended Track",
        "artistName": "Artist",
    }
    play = normalize_record(raw)
    assert play is not None
    assert detect_shape(raw).name == "legacy"  # type: ignore[union-attr]
    assert play.played_at_iso == "2024-03-01T12:00:00Z"
    assert play.ms_played == 45000
    assert play.track_name == "Legacy Track"


def test_legacy_fallback_fields() -> None:
    """Legacy shape falls back through alternative field names, skipping empty ones."""
    raw = {
        "endTime": "2024-03-01 12:00",
        "msPlayed": 45000,
        "trackName": "",
        "track": "Fallback Track",
        "master_metadata_artist_name": "Fallback Artist",
        "master_metadata_album_album_name": "Fallback Album",
        "spotify_track_uri": "spotify:track:XYZ",
        "reason_start": "clickrow",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.track_name == "Fallback Track"
    assert play.artist_name == "Fallback Artist"
    assert play.album_name == "Fallback Album"
    assert play.uri == "spotify:track:XYZ"
    assert play.context == "clickrow"


def test_extended_context_prefers_country_over_reason() -> None:
    raw = {
        "ts": "2023-06-15T10:30:00Z",
        "ms_played": 60000,
        "master_metadata_track_name": "Track",
        "master_metadata_artist_name": "Artist",
        "conn_country": "",
        "reason_start": "trackdone",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.artist_name == "Artist"
    assert play.context == "trackdone"


def test_strings_are_trimmed() -> None:
    raw = {
        "ts": "2023-06-15T10:30:00Z",
        "ms_played": 60000,
        "master_metadata_track_name": "  Track  ",
        "master_metadata_album_artist_name": "\tArtist\n",
        "master_metadata_album_album_name": " Album ",
        "platform": "   ",
    }
    play = normalize_record(raw)
    assert play is not None
    assert (play.track_name, play.artist_name, play.album_name) == ("Track", "Artist", "Album")
    assert play.platform is None


def test_offset_timestamp_converted_to_utc() -> None:
    """An absolute timestamp with an offset can land on another UTC day."""
    raw = {
        "ts": "2024-01-01T01:30:00+02:00",
        "ms_played": 60000,
        "master_metadata_track_name": "Track",
        "master_metadata_album_artist_name": "Artist",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.played_at_iso == "2023-12-31T23:30:00Z"
    assert (play.year, play.month, play.day) == (2023, 12, 31)


def test_fractional_seconds_truncated() -> None:
    raw = {
        "ts": "2024-05-05T05:05:05.987Z",
        "ms_played": 60000,
        "master_metadata_track_name": "Track",
        "master_metadata_album_artist_name": "Artist",
    }
    play = normalize_record(raw)
    assert play is not None
    assert play.played_at_iso == "2024-05-05T05:05:05Z"


@pytest.mark.parametrize(
    "raw",
    [
        {"ts": "2023-06-15T10:30:00Z", "ms_played": 60000},
        {"ts": "2023-06-15T10:30:00Z", "ms_played": 60000, "master_metadata_track_name": " ", "artist": ""},
        {"endTime": "2023-06-15 10:30", "msPlayed": 60000, "trackName": "", "artistName": ""},
        {"endTime": "2023-06-15 10:30", "msPlayed": 60000, "trackName": None, "artistName": None},
    ],
)
def test_empty_track_and_artist_rejected(raw: dict[str, object]) -> None:
    """Record without track and artist names is rejected whatever the shape."""
    assert normalize_record(raw) is None


def test_track_without_artist_accepted() -> None:
    raw = {"ts": "2023-06-15T10:30:00Z", "ms_played": 60000, "master_metadata_track_name": "Only Track"}
    play = normalize_record(raw)
    assert play is not None
    assert play.artist_name == ""


@pytest.mark.parametrize(
    "raw",
    [
        {"ts": "not-a-date", "ms_played": 60000, "master_metadata_track_name": "T", "artist": "A"},
        {"endTime": "not-a-date", "msPlayed": 60000, "trackName": "T", "artistName": "A"},
        {"endTime": "2023-13-45 99:99", "trackName": "T", "artistName": "A"},
        {"ts": 1700000000, "ms_played": 60000, "master_metadata_track_name": "T", "artist": "A"},
        {"ts": "0001-01-01T00:00:00+01:00", "ms_played": 60000, "master_metadata_track_name": "T", "artist": "A"},
        {"ts": "9999-12-31T23:59:59-01:00", "ms_played": 60000, "master_metadata_track_name": "T", "artist": "A"},
        {"endTime": "0001-01-01T00:00:00+01:00", "msPlayed": 60000, "trackName": "T", "artistName": "A"},
    ],
)
def test_unparseable_timestamp_rejected(raw: dict[str, object]) -> None:
    """Record with an invalid timestamp is rejected, never raises."""
    assert normalize_record(raw) is None


@pytest.mark.parametrize(
    "raw",
    [
        {"trackName": "T", "artistName": "A"},
        {"ts": "2023-06-15T10:30:00Z", "master_metadata_track_name": "T"},
        {"endTime": "", "msPlayed": 1000, "trackName": "T", "artistName": "A"},
        {},
    ],
)
def test_no_shape_matched_rejected(raw: dict[str, object]) -> None:
    assert detect_shape(raw) is None
    assert normalize_record(raw) is None


@pytest.mark.parametrize("raw", [None, "string", 42, ["ts", "ms_played"]])
def test_non_mapping_rejected(raw: object) -> None:
    assert normalize_record(raw) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (60000, 60000),
        (60000.9, 60000),
        ("31000.5", 31000),
        (" 42 ", 42),
        (-5, 0),
        (-0.5, 0),
        (None, 0),
        ("abc", 0),
        ("", 0),
        (True, 0),
        (math.nan, 0),
        (math.inf, 0),
        ([1], 0),
        (10**20, 2**63 - 1),
        (1e300, 2**63 - 1),
        ("1e300", 2**63 - 1),
    ],
)
def test_coerce_ms_played(value: object, expected: int) -> None:
    assert coerce_ms_played(value) == expected


def test_invalid_duration_defaults_to_zero() -> None:
    raw = {"ts": "2023-06-15T10:30:00Z", "ms_played": "n/a", "master_metadata_track_name": "T"}
    play = normalize_record(raw)
    assert play is not None
    assert play.ms_played == 0
