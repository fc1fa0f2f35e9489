from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from usersdb.services.record_store import RecordStore


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "UsersDB.sqlite"


@pytest.fixture
def database_url(db_path) -> str:
    return f"sqlite:///{db_path}"


@pytest.fixture
def store(database_url) -> RecordStore:
    store = RecordStore(database_url, echo=False)
    result = store.open()
    assert result.ok, result.message
    yield store
    store.close()


@pytest.fixture
def raw_conn(store, db_path):
    """Side connection to the same file, for tampering with the schema."""
    conn = sqlite3.connect(str(db_path))
    yield conn
    conn.close()
