"""In-memory, schema-less multi-table store.

Rows are plain ``dict`` objects keyed by a caller-supplied string id and
partitioned by table name.  There is no schema, no type checking and no
cross-table constraint of any kind.  Everything lives for the lifetime of the
process and is lost on restart.

Every value crossing the API boundary is a shallow copy, so neither the
caller's dict nor a returned row aliases the stored one.
"""

from __future__ import annotations

from typing import Any

TableRow = dict[str, Any]


class DatabaseService:
    """Process-local table store used by generated repositories."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, TableRow]] = {}

    def _rows(self, name: str) -> dict[str, TableRow]:
        return self._tables.get(name, {})

    # -- CRUD --------------------------------------------------------------

    def insert(self, table: str, id: str, data: TableRow) -> TableRow:
        """Store a copy of *data* under *id*, replacing any existing row."""
        rows = self._tables.setdefault(table, {})
        rows[id] = dict(data)
        return dict(rows[id])

    def find_by_id(self, table: str, id: str) -> TableRow | None:
        """Return a copy of the row stored under *id*, or ``None``."""
        row = self._rows(table).get(id)
        return dict(row) if row is not None else None

    def update(self, table: str, id: str, data: TableRow) -> TableRow | None:
        """Merge *data* into an existing row.

        Fields in *data* overwrite, fields not mentioned persist.  Returns the
        merged row, or ``None`` when *id* is absent (no row is created).
        """
        rows = self._rows(table)
        if id not in rows:
            return None
        rows[id] = {**rows[id], **data}
        return dict(rows[id])

    def remove(self, table: str, id: str) -> TableRow | None:
        """Delete the row under *id* and return it, or ``None`` if absent."""
        return self._rows(table).pop(id, None)

    def find_all(self, table: str) -> list[TableRow]:
        """Return every row of *table* with its id merged in under ``"id"``.

        A new list is built on every call, in insertion order.
        """
        return [{"id": id, **row} for id, row in self._rows(table).items()]

    # -- Housekeeping ------------------------------------------------------

    def tables(self) -> list[str]:
        """Names of every table that has received an insert."""
        return list(self._tables)

    def clear(self, table: str | None = None) -> None:
        """Drop all rows of *table*, or of every table when omitted."""
        if table is None:
            self._tables.clear()
        else:
            self._tables.pop(table, None)
