"""Constants for export import processing."""

from dataclasses import dataclass

# Export files are recognized by extension only (case-insensitive)
EXPORT_FILE_SUFFIX = ".json"

# Key that wraps the record list in some exports: {"payload": [...]}
PAYLOAD_KEY = "payload"

# Largest value a SQLite INTEGER column can hold
MAX_MS_PLAYED = 2**63 - 1


@dataclass(frozen=True, slots=True)
class ShapeFields:
    """Source keys for each canonical field, in fallback order."""

    timestamp: str
    duration: str
    track: tuple[str, ...]
    artist: tuple[str, ...]
    album: tuple[str, ...]
    uri: tuple[str, ...]
    context: tuple[str, ...]
    platform: tuple[str, ...]


# Account data (StreamingHistory*.json): local endTime + msPlayed
LEGACY_FIELDS = ShapeFields(
    timestamp="endTime",
    duration="msPlayed",
    track=("trackName", "track", "master_metadata_track_name"),
    artist=(
        "artistName",
        "artist",
        "master_metadata_album_artist_name",
        "master_metadata_artist_name",
    ),
    album=("albumName", "master_metadata_album_album_name"),
    uri=("spotifyTrackUri", "trackUri", "spotify_track_uri"),
    context=("context", "reason_start"),
    platform=("platform",),
)

# Extended streaming history (endsong_*.json, Streaming_History_Audio_*.json): ts + ms_played
EXTENDED_FIELDS = ShapeFields(
    timestamp="ts",
    duration="ms_played",
    track=("master_metadata_track_name", "track"),
    artist=("master_metadata_album_artist_name", "master_metadata_artist_name", "artist"),
    album=("master_metadata_album_album_name", "album"),
    uri=("spotify_track_uri", "track_uri"),
    context=("conn_country", "reason_start"),
    platform=("platform",),
)

# trackName + artistName + endTime, duration optional
MINIMAL_FIELDS = ShapeFields(
    timestamp="endTime",
    duration="msPlayed",
    track=("trackName",),
    artist=("artistName",),
    album=("albumName",),
    uri=("spotifyTrackUri",),
    context=("context",),
    platform=("platform",),
)
