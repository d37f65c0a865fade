#!/usr/bin/env python3
"""SQLite history sink.

SqliteSink appends StorageRecord rows to the clipboard table of a SQLite
database. The table is expected to exist with columns (ts, name, owner,
data); it is only created when explicitly asked for.

Inserts that find the database locked by another process are retried
with tenacity using exponential backoff. Every other database error is
raised as StorageError.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Protocol

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from clipsniff.constants import (
    CREATE_TABLE_SQL,
    INSERT_SQL,
    SCHEMA_CHECK_SQL,
    STORE_ATTEMPTS,
    STORE_INITIAL_WAIT,
    STORE_MAX_WAIT,
    STORE_WAIT_MULTIPLIER,
)
from clipsniff.errors import StorageError
from clipsniff.records import StorageRecord

logger = logging.getLogger(__name__)


class RecordSink(Protocol):
    """Anything that accepts StorageRecords."""

    def store(self, record: StorageRecord) -> None: ...


def _is_locked(exc: BaseException) -> bool:
    """Return True for the transient 'database is locked' error."""
    return isinstance(exc, sqlite3.OperationalError) and "locked" in str(exc)


def _log_retry(retry_state: RetryCallState) -> None:
    logger.warning(
        "Database locked, retrying insert (attempt %d)",
        retry_state.attempt_number,
    )


class SqliteSink:
    """Append-only writer for the clipboard history table.

    Args:
        path: Path of the SQLite database file.
        create_table: Create the clipboard table if it does not exist.
    """

    def __init__(self, path: str, create_table: bool = False) -> None:
        self.path = path
        self.create_table = create_table
        self._conn: sqlite3.Connection | None = None

    def open(self) -> None:
        """Open the database and check the clipboard table is usable.

        Raises:
            StorageError: If the file cannot be opened or the table is
                missing or has the wrong columns.
        """
        try:
            self._conn = sqlite3.connect(self.path)
            if self.create_table:
                with self._conn:
                    self._conn.execute(CREATE_TABLE_SQL)
            self._conn.execute(SCHEMA_CHECK_SQL)
        except sqlite3.Error as e:
            self.close()
            raise StorageError(f"Cannot use database {self.path}: {e}") from e
        logger.debug("Opened history database %s", self.path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> SqliteSink:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @retry(
        retry=retry_if_exception(_is_locked),
        stop=stop_after_attempt(STORE_ATTEMPTS),
        wait=wait_exponential(
            multiplier=STORE_WAIT_MULTIPLIER,
            min=STORE_INITIAL_WAIT,
            max=STORE_MAX_WAIT,
        ),
        before_sleep=_log_retry,
        reraise=True,
    )
    def _insert(self, row: tuple[str, str, str, str]) -> None:
        # Same SQL text every time, so sqlite3 reuses the prepared statement.
        with self._conn:
            self._conn.execute(INSERT_SQL, row)

    def store(self, record: StorageRecord) -> None:
        """Append record to the clipboard table and commit.

        Raises:
            StorageError: If the database is not open or the insert fails.
        """
        if self._conn is None:
            raise StorageError("Database is not open")
        try:
            self._insert(record.as_row())
        except sqlite3.Error as e:
            raise StorageError(f"Failed to store {record.selection} record: {e}") from e
        logger.debug(
            "Stored %s change owned by %r (%d chars)",
            record.selection, record.owner, len(record.content),
        )
