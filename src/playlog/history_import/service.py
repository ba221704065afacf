"""Export import service: reads a directory of export files into the plays table."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from sqlalchemy.orm import Session

from playlog.constants import DEFAULT_MIN_MS_PLAYED
from playlog.db.operations import PlayRepository
from playlog.db.session import DatabaseManager
from playlog.exceptions import ExportFileError
from playlog.history_import.models import NormalizedPlay
from playlog.history_import.normalizers import normalize_record
from playlog.history_import.reader import extract_records, iter_export_files, load_document

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImportResult:
    """Counts for one import run.

    Every raw record is counted in ``seen`` and then in exactly one of
    ``inserted`` or ``skipped``.
    """

    seen: int = 0
    inserted: int = 0
    skipped: int = 0
    files_processed: int = 0
    failed_files: list[Path] = field(default_factory=list)
    earliest_played_at: datetime | None = None
    latest_played_at: datetime | None = None

    def record_inserted(self, play: NormalizedPlay) -> None:
        self.inserted += 1
        if self.earliest_played_at is None or play.played_at < self.earliest_played_at:
            self.earliest_played_at = play.played_at
        if self.latest_played_at is None or play.played_at > self.latest_played_at:
            self.latest_played_at = play.played_at

    def summary(self) -> str:
        return f"Processed {self.seen} records. Inserted {self.inserted}. Skipped {self.skipped}."


class HistoryImportService:
    """Normalizes, filters and stores every record found in a directory of exports.

    Safe to re-run: plays already stored are counted as skipped, never duplicated.
    """

    def __init__(
        self,
        min_ms_played: int = DEFAULT_MIN_MS_PLAYED,
        repository: PlayRepository | None = None,
    ) -> None:
        self._min_ms_played = min_ms_played
        self._repository = repository or PlayRepository()

    def ingest_directory(self, directory: Path, db_manager: DatabaseManager) -> ImportResult:
        """Import all export files in ``directory``.

        A file that cannot be parsed is logged and skipped. Each file's plays are
        committed once the file is done. Raises InputDirectoryError if the
        directory itself cannot be read.
        """
        result = ImportResult()
        files = iter_export_files(directory)
        logger.info("Importing %d export file(s) from %s", len(files), directory)

        for path in files:
            try:
                document = load_document(path)
            except ExportFileError as exc:
                logger.warning("Skipping %s: %s", path.name, exc.reason, extra={"import_file": str(path)})
                result.failed_files.append(path)
                continue

            seen_before = result.seen
            inserted_before = result.inserted
            with db_manager.session() as session:
                self.ingest_records(extract_records(document), session, result)
            result.files_processed += 1

            logger.info(
                "Imported %s: %d records, %d inserted",
                path.name,
                result.seen - seen_before,
                result.inserted - inserted_before,
                extra={"import_file": str(path)},
            )

        logger.info(
            "%s Files: %d processed, %d failed. Range: %s to %s",
            result.summary(),
            result.files_processed,
            len(result.failed_files),
            result.earliest_played_at,
            result.latest_played_at,
        )
        return result

    def ingest_records(self, records: Iterable[object], session: Session, result: ImportResult) -> None:
        """Normalize, filter and insert raw records, updating ``result`` in place."""
        for raw in records:
            result.seen += 1

            play = normalize_record(raw)
            if play is None:
                result.skipped += 1
                continue

            if play.ms_played < self._min_ms_played:
                result.skipped += 1
                continue

            if self._repository.insert_play(play, session):
                result.record_inserted(play)
            else:
                result.skipped += 1
