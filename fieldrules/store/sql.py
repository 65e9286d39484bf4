"""
SQL record store on SQLAlchemy Core.

Queries are built per call as ``SELECT 1 FROM table WHERE column = :value
[AND filter] LIMIT 1`` against a lightweight ``table()`` construct, so no
schema reflection or ORM models are needed. Errors raised by SQLAlchemy
are not caught here.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import column as sa_column
from sqlalchemy import create_engine, literal, select
from sqlalchemy import table as sa_table
from sqlalchemy.engine import Engine

from ..params import Exclude, RowFilter, Where

logger = logging.getLogger(__name__)


class SqlRecordStore:
    """Existence queries against a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, **engine_options: Any) -> "SqlRecordStore":
        return cls(create_engine(url, **engine_options))

    def build_query(self, table: str, column: str, value: Any, row_filter: RowFilter = None):
        columns = [sa_column(column)]
        if row_filter is not None and row_filter.column != column:
            columns.append(sa_column(row_filter.column))
        target = sa_table(table, *columns)

        stmt = select(literal(1)).select_from(target).where(target.c[column] == value)
        if isinstance(row_filter, Exclude):
            stmt = stmt.where(target.c[row_filter.column] != row_filter.value)
        elif isinstance(row_filter, Where):
            stmt = stmt.where(target.c[row_filter.column] == row_filter.value)
        return stmt.limit(1)

    def exists(
        self,
        table: str,
        column: str,
        value: Any,
        *,
        row_filter: RowFilter = None,
    ) -> bool:
        stmt = self.build_query(table, column, value, row_filter)
        logger.debug("sql exists: %s", stmt)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).first()
        return row is not None

    def dispose(self) -> None:
        self.engine.dispose()
