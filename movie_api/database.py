import sqlite3
import os
import logging
import threading
from pathlib import Path
from typing import Any, List, Optional, Sequence

from movie_api.config import Settings

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(RuntimeError):
    pass


class SQLiteStore:
    """A read-only handle on a single SQLite file.

    The connection is opened once and shared by the worker threads that
    FastAPI runs sync handlers on, so every statement goes through a lock.
    """

    def __init__(self, path: str, name: str):
        self.path = path
        self.name = name
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def open(self) -> None:
        if self._conn is not None:
            return
        if not os.path.exists(self.path):
            raise DatabaseUnavailableError(f"{self.name} database not found at {self.path}")
        uri = Path(self.path).resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        self._conn = conn
        logger.info(f"Opened {self.name} database at {self.path}")

    def close(self) -> None:
        if self._conn is None:
            return
        with self._lock:
            self._conn.close()
            self._conn = None
        logger.info(f"Closed {self.name} database")

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseUnavailableError(f"{self.name} database is not open")
        return self._conn

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        with self._lock:
            return self._require_conn().execute(sql, tuple(params)).fetchone()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        with self._lock:
            return self._require_conn().execute(sql, tuple(params)).fetchall()

    def __enter__(self) -> "SQLiteStore":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class Databases:
    """The movies catalog and the ratings store, opened and closed together."""

    def __init__(self, movies: SQLiteStore, ratings: SQLiteStore):
        self.movies = movies
        self.ratings = ratings

    @classmethod
    def from_settings(cls, settings: Settings) -> "Databases":
        return cls(
            movies=SQLiteStore(settings.movies_db_path, "movies"),
            ratings=SQLiteStore(settings.ratings_db_path, "ratings"),
        )

    def open(self) -> None:
        self.movies.open()
        try:
            self.ratings.open()
        except DatabaseUnavailableError:
            self.movies.close()
            raise

    def close(self) -> None:
        self.movies.close()
        self.ratings.close()
