"""SQLite database manager — per-operation connections, schema, transactions.

Creates 4 tables on first run:
  clients, client_details, agents, drivers.

Every repository call opens its own connection through :meth:`connection`
and releases it on exit. Connections run in autocommit mode; multi-statement
units use :meth:`transaction`. ``sqlite3`` failures are re-raised as the
typed errors of :mod:`lampreas.database.errors`.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from lampreas.database.config import DatabaseConfig
from lampreas.database.errors import (
    ConstraintViolationError,
    DataAccessError,
    StoreConnectionError,
)

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """
-- Clients
CREATE TABLE IF NOT EXISTS clients (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL
);

-- Client details (1:1, shares the client's id)
CREATE TABLE IF NOT EXISTS client_details (
    id INTEGER PRIMARY KEY,
    address TEXT,
    phone TEXT,
    notes TEXT,
    FOREIGN KEY (id) REFERENCES clients(id) ON DELETE CASCADE
);

-- Commercial agents
CREATE TABLE IF NOT EXISTS agents (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    phone TEXT NOT NULL
);

-- Delivery drivers
CREATE TABLE IF NOT EXISTS drivers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    phone TEXT NOT NULL,
    plate TEXT NOT NULL
);
"""

EXPECTED_TABLES = [
    "agents",
    "client_details",
    "clients",
    "drivers",
]


def _casefold(value):
    """SQL ``CASEFOLD(x)``: Unicode case folding, NULL-preserving."""
    if value is None:
        return None
    return str(value).casefold()


class DatabaseManager:
    """Opens SQLite connections from a :class:`DatabaseConfig`."""

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._db_path = config.database_path

    @classmethod
    def for_path(cls, db_path: Path | str) -> DatabaseManager:
        """Manager for a bare SQLite file (tests and tooling)."""
        return cls(DatabaseConfig(url=str(db_path), user="local", password=""))

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    def _open(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), isolation_level=None)
            conn.execute("PRAGMA foreign_keys=ON")
        except sqlite3.Error as exc:
            raise StoreConnectionError(
                f"Cannot open database {self._db_path}: {exc}"
            ) from exc
        conn.create_function("CASEFOLD", 1, _casefold, deterministic=True)
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a fresh autocommit connection, closed on every exit path."""
        conn = self._open()
        try:
            yield conn
        except sqlite3.IntegrityError as exc:
            raise ConstraintViolationError(str(exc)) from exc
        except sqlite3.Error as exc:
            raise DataAccessError(str(exc)) from exc
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside an explicit transaction.

        Commits when the block completes, rolls back and re-raises when it
        raises. The connection returns to autocommit and is closed either way.
        """
        with self.connection() as conn:
            conn.execute("BEGIN")
            logger.debug("Transaction started on %s", self._db_path)
            try:
                yield conn
            except BaseException:
                self._rollback(conn)
                raise
            conn.execute("COMMIT")
            logger.debug("Transaction committed on %s", self._db_path)

    def _rollback(self, conn: sqlite3.Connection) -> None:
        # A failed ROLLBACK is logged only; the caller re-raises the error
        # that aborted the transaction.
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("Rollback failed on %s", self._db_path)
        else:
            logger.warning("Transaction rolled back on %s", self._db_path)

    def initialize_database(self) -> None:
        """Create all tables if they don't exist."""
        with self.connection() as conn:
            conn.executescript(_SCHEMA_SQL)
        logger.info("Database schema ready at %s", self._db_path)

    def get_tables(self) -> list[str]:
        """Return list of table names in the database."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
            )
            return [row[0] for row in cursor.fetchall()]
