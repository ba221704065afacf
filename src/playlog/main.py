"""playlog CLI: import exports and print listening stats.

Maps argparse subcommands onto the import service and history queries.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from playlog.db.session import DatabaseManager
from playlog.exceptions import PlaylogError
from playlog.history.queries import HistoryQueries
from playlog.history.schemas import TopTracksQuery
from playlog.history_import.service import HistoryImportService
from playlog.logging import configure_logging
from playlog.settings import PlaylogSettings, get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="playlog", description="Spotify listening-history importer")
    parser.add_argument("--database", type=Path, help="Override PLAYLOG_DATABASE_PATH for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Import every .json export in a directory")
    ingest.add_argument("--data-dir", type=Path, help="Override PLAYLOG_DATA_DIR for this command")

    subparsers.add_parser("months", help="Print play counts per month")

    top = subparsers.add_parser("top-tracks", help="Print the most played tracks")
    top.add_argument("--start", help="Inclusive lower bound on played_at (ISO 8601)")
    top.add_argument("--end", help="Inclusive upper bound on played_at (ISO 8601)")
    top.add_argument("--min-ms", type=int, default=0, help="Only count plays at least this long")
    top.add_argument("--limit", type=int, default=50, help="Page size (1-200)")
    top.add_argument("--offset", type=int, default=0, help="Rows to skip")
    return parser


def main(argv: Sequence[str] | None = None, settings: PlaylogSettings | None = None) -> int:
    """Run the playlog CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or get_settings()
    configure_logging(settings.PLAYLOG_LOG_LEVEL.upper(), settings.PLAYLOG_LOG_FORMAT)

    database_path = args.database or settings.database_path
    try:
        with DatabaseManager.for_file(database_path, echo=settings.PLAYLOG_DB_ECHO) as db_manager:
            db_manager.initialize()
            if args.command == "ingest":
                return _run_ingest(db_manager, args.data_dir or settings.data_dir, settings)
            if args.command == "months":
                return _run_months(db_manager)
            if args.command == "top-tracks":
                return _run_top_tracks(db_manager, args)
    except PlaylogError as exc:
        logger.error("%s", exc)
        return 1
    return 2


def _run_ingest(db_manager: DatabaseManager, data_dir: Path, settings: PlaylogSettings) -> int:
    service = HistoryImportService(min_ms_played=settings.PLAYLOG_MIN_MS_PLAYED)
    result = service.ingest_directory(data_dir, db_manager)
    print(result.summary())
    return 0


def _run_months(db_manager: DatabaseManager) -> int:
    with db_manager.session() as session:
        rows = HistoryQueries.plays_per_month(session)
    print(json.dumps({"rows": [row.model_dump() for row in rows]}, indent=2))
    return 0


def _run_top_tracks(db_manager: DatabaseManager, args: argparse.Namespace) -> int:
    try:
        query = TopTracksQuery(
            start=args.start,
            end=args.end,
            min_ms=args.min_ms,
            limit=args.limit,
            offset=args.offset,
        )
    except ValueError as exc:
        print(f"Invalid top-tracks arguments: {exc}", file=sys.stderr)
        return 2

    with db_manager.session() as session:
        page = HistoryQueries.top_tracks(session, query)
    print(page.model_dump_json(indent=2))
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
