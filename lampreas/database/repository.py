"""Generic table repository — CRUD and search for one entity table.

A :class:`TableSpec` describes the table (name, ordered columns with the
integer key first, searchable text columns, row mapping). One
:class:`TableRepository` implementation serves every entity.

Every method accepts an optional ``conn``: with it, the statement runs on
the caller's connection (e.g. inside a transaction); without it, a
connection is acquired for the call and released afterwards.
"""

from __future__ import annotations

import dataclasses
import logging
import sqlite3
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, TypeVar

from lampreas.database.db_manager import DatabaseManager

logger = logging.getLogger(__name__)

E = TypeVar("E")

_LIKE_ESCAPE = "\\"


def like_pattern(text: str) -> str:
    """``%text%`` with LIKE wildcards in *text* escaped, casefolded."""
    escaped = (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped.casefold()}%"


@dataclass(frozen=True)
class TableSpec(Generic[E]):
    """Table metadata for a :class:`TableRepository`."""
    table: str
    columns: tuple[str, ...]
    search_columns: tuple[str, ...]
    from_row: Callable[..., E]

    @property
    def key(self) -> str:
        return self.columns[0]

    @property
    def value_columns(self) -> tuple[str, ...]:
        return self.columns[1:]

    @classmethod
    def for_dataclass(
        cls, table: str, entity_type: type[E], search_columns: Sequence[str],
    ) -> TableSpec[E]:
        """Columns named and ordered after the dataclass fields."""
        columns = tuple(f.name for f in dataclasses.fields(entity_type))
        unknown = set(search_columns) - set(columns)
        if unknown:
            raise ValueError(f"Unknown search columns for {table}: {sorted(unknown)}")
        return cls(
            table=table,
            columns=columns,
            search_columns=tuple(search_columns),
            from_row=entity_type,
        )


class TableRepository(Generic[E]):
    """CRUD + search repository over one table."""

    def __init__(self, db: DatabaseManager, spec: TableSpec[E]):
        self._db = db
        self._spec = spec

        cols = ", ".join(spec.columns)
        placeholders = ", ".join("?" for _ in spec.columns)
        assignments = ", ".join(f"{c} = ?" for c in spec.value_columns)
        matches = " OR ".join(
            [f"CAST({spec.key} AS TEXT) LIKE :pattern ESCAPE '{_LIKE_ESCAPE}'"]
            + [
                f"CASEFOLD({c}) LIKE :pattern ESCAPE '{_LIKE_ESCAPE}'"
                for c in spec.search_columns
            ]
        )

        self._insert_sql = f"INSERT INTO {spec.table} ({cols}) VALUES ({placeholders})"
        self._select_by_id_sql = f"SELECT {cols} FROM {spec.table} WHERE {spec.key} = ?"
        self._select_all_sql = f"SELECT {cols} FROM {spec.table} ORDER BY {spec.key}"
        self._update_sql = f"UPDATE {spec.table} SET {assignments} WHERE {spec.key} = ?"
        self._delete_sql = f"DELETE FROM {spec.table} WHERE {spec.key} = ?"
        self._search_sql = (
            f"SELECT {cols} FROM {spec.table} WHERE {matches} ORDER BY {spec.key}"
        )

    @property
    def spec(self) -> TableSpec[E]:
        return self._spec

    @contextmanager
    def _use(self, conn: sqlite3.Connection | None) -> Iterator[sqlite3.Connection]:
        if conn is not None:
            yield conn
        else:
            with self._db.connection() as own:
                yield own

    def _values(self, entity: E) -> tuple:
        return tuple(getattr(entity, c) for c in self._spec.columns)

    def _map(self, row: Sequence) -> E:
        return self._spec.from_row(*row)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def insert(self, entity: E, conn: sqlite3.Connection | None = None) -> None:
        """Insert a row with every column bound. Duplicate id raises."""
        with self._use(conn) as c:
            c.execute(self._insert_sql, self._values(entity))
        logger.debug("Inserted %s id=%s", self._spec.table, getattr(entity, self._spec.key))

    def find_by_id(
        self, entity_id: int, conn: sqlite3.Connection | None = None,
    ) -> E | None:
        """Row with this id, or None."""
        with self._use(conn) as c:
            row = c.execute(self._select_by_id_sql, (entity_id,)).fetchone()
        return self._map(row) if row is not None else None

    def exists(self, entity_id: int, conn: sqlite3.Connection | None = None) -> bool:
        return self.find_by_id(entity_id, conn) is not None

    def find_all(self, conn: sqlite3.Connection | None = None) -> list[E]:
        """All rows ordered by id."""
        with self._use(conn) as c:
            rows = c.execute(self._select_all_sql).fetchall()
        return [self._map(r) for r in rows]

    def update(self, entity: E, conn: sqlite3.Connection | None = None) -> int:
        """Update non-key columns by id. Returns rows affected (0 or 1)."""
        values = self._values(entity)
        with self._use(conn) as c:
            cursor = c.execute(self._update_sql, (*values[1:], values[0]))
            count = cursor.rowcount
        logger.debug("Updated %s id=%s (%d row)", self._spec.table, values[0], count)
        return count

    def delete_by_id(self, entity_id: int, conn: sqlite3.Connection | None = None) -> int:
        """Delete by id. Returns rows affected (0 or 1)."""
        with self._use(conn) as c:
            count = c.execute(self._delete_sql, (entity_id,)).rowcount
        logger.debug("Deleted %s id=%s (%d row)", self._spec.table, entity_id, count)
        return count

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, text: str, conn: sqlite3.Connection | None = None) -> list[E]:
        """Rows whose id or any text column contains *text*, any case.

        The text is matched literally; an empty string matches every row.
        """
        with self._use(conn) as c:
            rows = c.execute(self._search_sql, {"pattern": like_pattern(text)}).fetchall()
        return [self._map(r) for r in rows]
