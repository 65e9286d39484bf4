"""
Read contract for stores consulted by uniqueness rules.

Rules only ever ask one question of a store: does at least one row in
``table`` have ``column == value``, optionally narrowed or excluded by a
second column. Stores must not write, and must let their own failures
propagate.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..params import RowFilter


@runtime_checkable
class RecordStore(Protocol):
    """Anything that can answer an existence query."""

    def exists(
        self,
        table: str,
        column: str,
        value: Any,
        *,
        row_filter: RowFilter = None,
    ) -> bool:
        """Return True if any row matches ``column == value`` and the row filter."""
        ...
