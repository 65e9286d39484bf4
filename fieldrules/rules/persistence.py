"""
Rules backed by a record store.

Examples::

    is_unique(value, "users.email,id,5", data, stores)     # ignore row id=5
    is_not_unique(value, "menu.id,active,1", data, stores)  # only active rows

The submission may carry a connection group under ``DBGroup``; the store
for that group is taken from the registry passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..params import Exclude, TableSpec, Where, parse_table_spec
from ..store.base import RecordStore
from ..store.registry import StoreRegistry

logger = logging.getLogger(__name__)

DB_GROUP_KEY = "DBGroup"


def _connect(stores: StoreRegistry | RecordStore, data: Mapping[str, Any] | None) -> RecordStore:
    if isinstance(stores, StoreRegistry):
        group = (data or {}).get(DB_GROUP_KEY)
        return stores.connect(group if isinstance(group, str) else None)
    return stores


def _row_exists(value: Any, spec: TableSpec, store: RecordStore) -> bool:
    found = store.exists(spec.table, spec.column, value, row_filter=spec.row_filter)
    logger.debug("%s.%s=%r filter=%r -> exists=%s", spec.table, spec.column, value, spec.row_filter, found)
    return found


def is_unique(
    value: str | None,
    spec: str,
    data: Mapping[str, Any] | None,
    stores: StoreRegistry | RecordStore,
) -> bool:
    """No row has ``column == value``, apart from an optionally excluded row."""
    target = parse_table_spec(spec, rule="is_unique", filter_type=Exclude)
    return not _row_exists(value, target, _connect(stores, data))


def is_not_unique(
    value: str | None,
    spec: str,
    data: Mapping[str, Any] | None,
    stores: StoreRegistry | RecordStore,
) -> bool:
    """At least one row has ``column == value`` and satisfies the optional where pair."""
    target = parse_table_spec(spec, rule="is_not_unique", filter_type=Where)
    return _row_exists(value, target, _connect(stores, data))
