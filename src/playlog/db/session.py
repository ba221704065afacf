"""Database engine and session lifecycle via DatabaseManager."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Any, Self

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from playlog.db.base import Base
from playlog.exceptions import StorageError
from playlog.settings import PlaylogSettings

logger = logging.getLogger(__name__)


def _configure_sqlite_connection(dbapi_connection: Any, _connection_record: Any) -> None:
    """WAL lets readers query the file while an import is writing to it."""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
    finally:
        cursor.close()


class DatabaseManager:
    """Owns the SQLite engine and hands out scoped sessions.

    Usage:
        with DatabaseManager.for_file(Path("data/db.sqlite")) as db:
            db.initialize()
            with db.session() as session:
                session.execute(query)

    Leaving the ``with`` block disposes of the engine.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self._engine = create_engine(database_url, echo=echo)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine, "connect", _configure_sqlite_connection)
        self._session_factory = sessionmaker(
            self._engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def for_file(cls, path: Path, echo: bool = False) -> Self:
        """Create a manager for a SQLite file, creating its directory if needed."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create database directory {path.parent}: {exc}") from exc
        return cls(f"sqlite:///{path}", echo=echo)

    @classmethod
    def from_settings(cls, settings: PlaylogSettings) -> Self:
        """Create a DatabaseManager from PlaylogSettings."""
        return cls.for_file(settings.database_path, echo=settings.PLAYLOG_DB_ECHO)

    def initialize(self) -> None:
        """Open the database and create the plays table and its indexes if missing."""
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot open database {self._engine.url}: {exc}") from exc
        logger.info("Database ready at %s", self._engine.url)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a database session with automatic commit/rollback.

        Commits on success, rolls back on exception.
        """
        with self._session_factory() as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def dispose(self) -> None:
        """Dispose of the engine and release all connections."""
        self._engine.dispose()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()
