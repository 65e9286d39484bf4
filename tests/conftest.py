"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from fieldrules.store import MemoryRecordStore, StoreRegistry


@pytest.fixture
def users_store() -> MemoryRecordStore:
    """Two users; only id=5 owns a@b.com."""
    return MemoryRecordStore(
        {
            "users": [
                {"id": 5, "email": "a@b.com", "active": 1},
                {"id": 6, "email": "c@d.com", "active": 0},
            ]
        }
    )


@pytest.fixture
def users_registry(users_store: MemoryRecordStore) -> StoreRegistry:
    return StoreRegistry.single(users_store)


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """SQLite database file with the same users as users_store."""
    url = f"sqlite:///{tmp_path / 'app.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, active INTEGER)"))
        conn.execute(
            text("INSERT INTO users (id, email, active) VALUES (5, 'a@b.com', 1), (6, 'c@d.com', 0)")
        )
    engine.dispose()
    return url
