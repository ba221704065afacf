"""playlog exceptions."""

from pathlib import Path


class PlaylogError(Exception):
    """Base exception for playlog errors."""


class ExportFileError(PlaylogError):
    """A single export file could not be read or parsed.

    Recoverable: the import skips the file and moves on.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read export file {path}: {reason}")


class InputDirectoryError(PlaylogError):
    """The input directory is missing, not a directory, or unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Input directory {path} is not usable: {reason}")


class StorageError(PlaylogError):
    """The database file or its directory could not be created or opened."""
