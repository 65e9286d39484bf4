"""In-memory record store, used for tests and small embedded datasets."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from ..params import Exclude, RowFilter, Where

logger = logging.getLogger(__name__)


def _same(left: Any, right: Any) -> bool:
    # Bound parameters arrive as strings; SQL engines coerce, so do we.
    if left is None or right is None:
        return left is right
    if left == right:
        return True
    return str(left) == str(right)


class MemoryRecordStore:
    """Tables held as lists of row dicts."""

    def __init__(self, tables: dict[str, Iterable[dict[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        for name, rows in (tables or {}).items():
            self._tables[name] = [dict(r) for r in rows]

    def insert(self, table: str, row: dict[str, Any]) -> None:
        self._tables.setdefault(table, []).append(dict(row))

    def rows(self, table: str) -> list[dict[str, Any]]:
        """Copy of the rows in ``table`` (empty if the table is unknown)."""
        return copy.deepcopy(self._tables.get(table, []))

    def exists(
        self,
        table: str,
        column: str,
        value: Any,
        *,
        row_filter: RowFilter = None,
    ) -> bool:
        logger.debug("memory exists: %s.%s=%r filter=%r", table, column, value, row_filter)
        for row in self._tables.get(table, []):
            if column not in row or not _same(row[column], value):
                continue
            if isinstance(row_filter, Exclude):
                # col != value is never true for NULL, so those rows drop out too.
                excluded = row.get(row_filter.column)
                if excluded is None or _same(excluded, row_filter.value):
                    continue
            if isinstance(row_filter, Where) and not _same(row.get(row_filter.column), row_filter.value):
                continue
            return True
        return False
