"""Reads export files from a directory and extracts raw records from each."""

import logging
from collections.abc import Iterator
from pathlib import Path

import ijson  # type: ignore[import-untyped]

from playlog.exceptions import ExportFileError, InputDirectoryError
from playlog.history_import.constants import EXPORT_FILE_SUFFIX, PAYLOAD_KEY

logger = logging.getLogger(__name__)


def iter_export_files(directory: Path) -> list[Path]:
    """Return the export files in ``directory`` sorted by name.

    Only regular files ending in ``.json`` (any case) are returned.
    Raises InputDirectoryError if the directory cannot be listed.
    """
    if not directory.exists():
        raise InputDirectoryError(directory, "does not exist")
    if not directory.is_dir():
        raise InputDirectoryError(directory, "not a directory")
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise InputDirectoryError(directory, str(exc)) from exc

    files = sorted(
        (p for p in entries if p.name.lower().endswith(EXPORT_FILE_SUFFIX) and p.is_file()),
        key=lambda p: p.name,
    )
    logger.debug("Found %d export file(s) in %s", len(files), directory)
    return files


def load_document(path: Path) -> object:
    """Parse the whole file as a single JSON document.

    Raises ExportFileError for unreadable files, empty files, malformed JSON and
    trailing data after the document.
    """
    try:
        with path.open("rb") as f:
            documents = list(ijson.items(f, "", use_float=True))
    except ijson.JSONError as exc:
        raise ExportFileError(path, f"invalid JSON ({exc})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ExportFileError(path, str(exc)) from exc

    if not documents:
        raise ExportFileError(path, "empty document")
    return documents[0]


def extract_records(document: object) -> Iterator[object]:
    """Yield raw records from a parsed export document.

    A list yields its elements, an object with a list ``payload`` yields the
    payload's elements, and anything else is a single record.
    """
    if isinstance(document, list):
        yield from document
    elif isinstance(document, dict) and isinstance(document.get(PAYLOAD_KEY), list):
        yield from document[PAYLOAD_KEY]
    else:
        yield document
