"""
Connection-group registry for store-backed rules.

A submission can name the store it should be checked against under the
reserved ``DBGroup`` key. Rules receive a StoreRegistry explicitly and ask
it to ``connect()`` to that group, or to the default group when none is
named.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import StoreNotConfigured
from .base import RecordStore
from .config import StoreConfig

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"

StoreFactory = Callable[[], RecordStore]


class StoreRegistry:
    """Maps connection-group names to record stores."""

    def __init__(self, default_group: str = DEFAULT_GROUP) -> None:
        self.default_group = default_group
        self._stores: dict[str, RecordStore] = {}
        self._factories: dict[str, StoreFactory] = {}

    @classmethod
    def single(cls, store: RecordStore, group: str = DEFAULT_GROUP) -> "StoreRegistry":
        """Registry with one store serving as the default group."""
        registry = cls(default_group=group)
        registry.register(group, store)
        return registry

    @classmethod
    def from_config(cls, config: StoreConfig) -> "StoreRegistry":
        """Registry whose SQL stores are created on first use."""
        from .sql import SqlRecordStore

        registry = cls(default_group=config.default_group)
        for name, group in config.groups.items():
            registry.register_factory(
                name,
                lambda group=group: SqlRecordStore.from_url(group.url, **group.options),
            )
        return registry

    def register(self, group: str, store: RecordStore) -> None:
        self._stores[group] = store
        self._factories.pop(group, None)

    def register_factory(self, group: str, factory: StoreFactory) -> None:
        self._factories[group] = factory
        self._stores.pop(group, None)

    def groups(self) -> list[str]:
        return sorted(set(self._stores) | set(self._factories))

    def connect(self, group: str | None = None) -> RecordStore:
        """Return the store for ``group`` (the default group when None or blank)."""
        name = (group or "").strip() or self.default_group
        store = self._stores.get(name)
        if store is not None:
            return store

        factory = self._factories.get(name)
        if factory is None:
            raise StoreNotConfigured(name, self.groups())

        logger.debug("opening store for group %r", name)
        store = factory()
        self._stores[name] = store
        del self._factories[name]
        return store
