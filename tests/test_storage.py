#!/usr/bin/env python3
"""Tests for the SQLite history sink."""
import sqlite3
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from clipsniff.errors import StorageError
from clipsniff.records import StorageRecord
from clipsniff.storage import SqliteSink


def read_rows(path: Path) -> list[tuple]:
    conn = sqlite3.connect(path)
    try:
        return conn.execute("SELECT ts, name, owner, data FROM clipboard").fetchall()
    finally:
        conn.close()


class TestOpen:
    """Tests for opening the database."""

    def test_missing_table_raises(self, tmp_path: Path) -> None:
        """The table is not created unless asked for."""
        sink = SqliteSink(str(tmp_path / "empty.db"))
        with pytest.raises(StorageError) as exc_info:
            sink.open()
        assert "clipboard" in str(exc_info.value)

    def test_create_table(self, tmp_path: Path) -> None:
        path = tmp_path / "new.db"
        with SqliteSink(str(path), create_table=True):
            pass
        assert read_rows(path) == []

    def test_wrong_columns_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "other.db"
        conn = sqlite3.connect(path)
        conn.execute("CREATE TABLE clipboard (id INTEGER, text TEXT)")
        conn.commit()
        conn.close()

        with pytest.raises(StorageError):
            SqliteSink(str(path)).open()

    def test_unopenable_path_raises(self, tmp_path: Path) -> None:
        sink = SqliteSink(str(tmp_path / "missing-dir" / "db.sqlite"))
        with pytest.raises(StorageError):
            sink.open()


class TestStore:
    """Tests for appending records."""

    def test_appends_rows_in_order(self, history_db: Path) -> None:
        first = StorageRecord("2024-01-02 03:04:05", "PRIMARY", "AppX", "a")
        second = StorageRecord("2024-01-02 03:04:05", "CLIPBOARD", "AppY", "b")

        with SqliteSink(str(history_db)) as sink:
            sink.store(first)
            sink.store(second)

        assert read_rows(history_db) == [first.as_row(), second.as_row()]

    def test_rows_committed_immediately(self, history_db: Path) -> None:
        """Another connection sees a stored row before the sink is closed."""
        record = StorageRecord("2024-01-02 03:04:05", "PRIMARY", "", "hello")
        with SqliteSink(str(history_db)) as sink:
            sink.store(record)
            assert read_rows(history_db) == [record.as_row()]

    def test_store_before_open_raises(self, history_db: Path) -> None:
        record = StorageRecord("2024-01-02 03:04:05", "PRIMARY", "", "")
        with pytest.raises(StorageError):
            SqliteSink(str(history_db)).store(record)

    def test_retries_locked_database(self, history_db: Path) -> None:
        """A transient lock is retried and the insert then succeeds."""
        sink = SqliteSink(str(history_db))
        mock_conn = MagicMock()
        mock_conn.execute.side_effect = [
            sqlite3.OperationalError("database is locked"),
            sqlite3.OperationalError("database is locked"),
            MagicMock(),
        ]
        sink._conn = mock_conn

        sink.store(StorageRecord("2024-01-02 03:04:05", "PRIMARY", "", "x"))

        assert mock_conn.execute.call_count == 3

    def test_other_errors_are_not_retried(self, history_db: Path) -> None:
        sink = SqliteSink(str(history_db))
        mock_conn = MagicMock()
        mock_conn.execute.side_effect = sqlite3.IntegrityError("constraint failed")
        sink._conn = mock_conn

        with pytest.raises(StorageError):
            sink.store(StorageRecord("2024-01-02 03:04:05", "PRIMARY", "", "x"))

        assert mock_conn.execute.call_count == 1

    def test_persistent_lock_raises(self, history_db: Path) -> None:
        sink = SqliteSink(str(history_db))
        mock_conn = MagicMock()
        mock_conn.execute.side_effect = sqlite3.OperationalError("database is locked")
        sink._conn = mock_conn

        with pytest.raises(StorageError) as exc_info:
            sink.store(StorageRecord("2024-01-02 03:04:05", "PRIMARY", "", "x"))

        assert "locked" in str(exc_info.value)
