"""Record stores consulted by uniqueness rules."""

from .base import RecordStore
from .config import GroupConfig, StoreConfig, load_store_config
from .memory import MemoryRecordStore
from .registry import DEFAULT_GROUP, StoreRegistry

__all__ = [
    "DEFAULT_GROUP",
    "GroupConfig",
    "MemoryRecordStore",
    "RecordStore",
    "StoreConfig",
    "StoreRegistry",
    "load_store_config",
]
