"""Shared test configuration and fixtures."""

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from sqlalchemy.orm import Session

from playlog.db.session import DatabaseManager

WriteExport = Callable[[str, object], Path]


@pytest.fixture
def db_manager(tmp_path: Path) -> Generator[DatabaseManager]:
    """File-backed SQLite database with the schema created."""
    with DatabaseManager.for_file(tmp_path / "db" / "plays.sqlite") as manager:
        manager.initialize()
        yield manager


@pytest.fixture
def session(db_manager: DatabaseManager) -> Generator[Session]:
    with db_manager.session() as session:
        yield session


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    path = tmp_path / "exports"
    path.mkdir()
    return path


@pytest.fixture
def write_export(export_dir: Path) -> WriteExport:
    """Write a JSON document into export_dir and return its path."""

    def _write(name: str, document: object) -> Path:
        path = export_dir / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logging() -> Generator[None]:
    """Undo configure_logging() changes made by CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
