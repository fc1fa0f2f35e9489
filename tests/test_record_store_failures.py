"""Typed failure results from RecordStore."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
    StatementError,
)

from usersdb import RecordStore, StoreStatus
from usersdb.services.record_store import classify_error


class TestOpenFailures:
    def test_malformed_url_is_unavailable(self):
        store = RecordStore("not a database url")

        result = store.open()

        assert result.status is StoreStatus.STORE_UNAVAILABLE
        assert not store.is_open
        with store:
            assert store.open_result.status is StoreStatus.STORE_UNAVAILABLE

    def test_missing_driver_is_unavailable(self, monkeypatch):
        def no_driver(*args, **kwargs):
            raise ModuleNotFoundError("No module named 'psycopg2'")

        monkeypatch.setattr("usersdb.services.record_store.create_db_engine", no_driver)
        store = RecordStore("postgresql://user@localhost/users")

        result = store.open()

        assert result.status is StoreStatus.STORE_UNAVAILABLE
        assert "psycopg2" in result.message
        assert store.fetch_all().status is StoreStatus.STORE_UNAVAILABLE

    def test_directory_instead_of_file_is_unavailable(self, tmp_path):
        store = RecordStore(f"sqlite:///{tmp_path}")

        result = store.open()

        assert result.status is StoreStatus.STORE_UNAVAILABLE
        assert result.operation == "open"
        assert result.message
        assert not store.is_open
        assert store.insert("Alice", 30).status is StoreStatus.STORE_UNAVAILABLE

    def test_parent_is_a_file_is_unavailable(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = RecordStore(f"sqlite:///{blocker / 'UsersDB.sqlite'}")

        assert store.open().status is StoreStatus.STORE_UNAVAILABLE
        assert store.fetch_all().status is StoreStatus.STORE_UNAVAILABLE

    def test_corrupt_file_fails_to_open(self, tmp_path):
        path = tmp_path / "UsersDB.sqlite"
        path.write_bytes(b"this is not a sqlite database " * 64)
        store = RecordStore(f"sqlite:///{path}")

        result = store.open()

        assert not result.ok
        assert result.status in (
            StoreStatus.STORE_UNAVAILABLE,
            StoreStatus.SCHEMA_SETUP_FAILED,
        )
        assert not store.is_open

    def test_schema_failure(self, monkeypatch, database_url):
        def boom(engine):
            raise OperationalError("CREATE TABLE Users", {}, Exception("disk I/O error"))

        monkeypatch.setattr("usersdb.services.record_store.ensure_schema", boom)
        store = RecordStore(database_url)

        result = store.open()

        assert result.status is StoreStatus.SCHEMA_SETUP_FAILED
        assert result.message == "disk I/O error"
        assert not store.is_open
        assert store.delete(1).status is StoreStatus.STORE_UNAVAILABLE

    def test_open_can_be_retried_after_failure(self, monkeypatch, database_url):
        def boom(engine):
            raise OperationalError("CREATE TABLE Users", {}, Exception("locked"))

        store = RecordStore(database_url)
        with monkeypatch.context() as m:
            m.setattr("usersdb.services.record_store.ensure_schema", boom)
            assert not store.open().ok

        assert store.open().ok
        assert store.insert("Alice", 30).ok
        store.close()


class TestBindFailures:
    @pytest.mark.parametrize(
        "name, age",
        [
            ("Alice", "30"),
            ("Alice", 30.5),
            ("Alice", True),
            ("Alice", None),
            ("Alice", 2 ** 63),
            (42, 30),
            (b"Alice", 30),
        ],
    )
    def test_insert_rejects_unbindable_values(self, store, name, age):
        result = store.insert(name, age)

        assert result.status is StoreStatus.BIND_FAILED
        assert result.rows_affected == 0
        assert store.fetch_all().records == ()

    def test_update_rejects_non_integer_id(self, store):
        store.insert("Alice", 30)

        result = store.update("1", "Alicia", 31)

        assert result.status is StoreStatus.BIND_FAILED
        assert store.fetch_all().records[0].name == "Alice"

    def test_delete_rejects_non_integer_id(self, store):
        store.insert("Alice", 30)

        assert store.delete(1.0).status is StoreStatus.BIND_FAILED
        assert len(store.fetch_all().records) == 1

    def test_extreme_integers_are_accepted(self, store):
        assert store.insert("max", 2 ** 63 - 1).ok
        assert store.insert("min", -(2 ** 63)).ok
        assert [r.age for r in store.fetch_all().records] == [2 ** 63 - 1, -(2 ** 63)]


class TestStatementFailures:
    def test_missing_table_is_prepare_failure(self, store, raw_conn):
        raw_conn.execute("DROP TABLE Users")
        raw_conn.commit()

        for result in (
            store.fetch_all(),
            store.insert("Alice", 30),
            store.update(1, "A", 1),
            store.delete(1),
        ):
            assert result.status is StoreStatus.STATEMENT_PREPARE_FAILED
            assert "no such table" in result.message

    def test_aborting_trigger_is_execution_failure(self, store, raw_conn):
        raw_conn.execute(
            "CREATE TRIGGER users_no_minors BEFORE INSERT ON Users "
            "WHEN NEW.age < 18 BEGIN SELECT RAISE(ABORT, 'too young'); END"
        )
        raw_conn.commit()

        result = store.insert("Kid", 9)

        assert result.status is StoreStatus.EXECUTION_FAILED
        assert "too young" in result.message
        assert store.fetch_all().records == ()
        assert store.insert("Adult", 30).ok

    def test_failure_rolls_back_and_store_keeps_working(self, store, raw_conn):
        store.insert("Alice", 30)
        raw_conn.execute(
            "CREATE TRIGGER users_frozen BEFORE UPDATE ON Users "
            "BEGIN SELECT RAISE(ABORT, 'frozen'); END"
        )
        raw_conn.commit()

        assert store.update(1, "Alicia", 31).status is StoreStatus.EXECUTION_FAILED
        assert store.fetch_all().records[0].name == "Alice"
        assert store.delete(1).ok


class TestClassifyError:
    @pytest.mark.parametrize(
        "exc, status",
        [
            (IntegrityError("INSERT", {}, Exception("UNIQUE")), StoreStatus.EXECUTION_FAILED),
            (DataError("INSERT", {}, Exception("bad")), StoreStatus.EXECUTION_FAILED),
            (InterfaceError("INSERT", {}, Exception("bind")), StoreStatus.BIND_FAILED),
            (OperationalError("SELECT", {}, Exception("syntax")), StoreStatus.STATEMENT_PREPARE_FAILED),
            (ProgrammingError("SELECT", {}, Exception("prep")), StoreStatus.STATEMENT_PREPARE_FAILED),
            (DBAPIError("SELECT", {}, Exception("other")), StoreStatus.EXECUTION_FAILED),
            (StatementError("type", "INSERT", {}, None), StoreStatus.BIND_FAILED),
        ],
    )
    def test_mapping(self, exc, status):
        assert classify_error(exc) is status
