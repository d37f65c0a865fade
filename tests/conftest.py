#!/usr/bin/env python3
"""Pytest fixtures for clipsniff tests.

Provides mock X11 connections, SelectionNotify event builders and
temporary history databases.
"""

import os
import sqlite3
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from Xlib import X

from clipsniff.constants import CREATE_TABLE_SQL

# Atom ids the mock server knows about.
ATOMS: dict[str, int] = {
    "PRIMARY": 1,
    "STRING": 31,
    "CLIPBOARD": 300,
    "UTF8_STRING": 301,
}


def has_display() -> bool:
    """Return True if a real X11 display is configured."""
    return bool(os.environ.get("DISPLAY"))


def make_selection_notify(
    window: MagicMock, selection: int, prop: int | None = None
) -> MagicMock:
    """Create a mock SelectionNotify event addressed to window.

    The reply property defaults to the selection atom, which is the
    property SelectionClient asks the owner to use.
    """
    event = MagicMock()
    event.type = X.SelectionNotify
    event.requestor = window
    event.selection = selection
    event.property = selection if prop is None else prop
    return event


def make_property(value: bytes, property_type: int = 31, fmt: int = 8) -> MagicMock:
    """Create a mock property as returned by get_full_property."""
    prop = MagicMock()
    prop.value = value
    prop.property_type = property_type
    prop.format = fmt
    return prop


def intern_atom(name: str, only_if_exists: bool = False) -> int:
    """Mock InternAtom: unknown names resolve to X.NONE."""
    return ATOMS.get(name, X.NONE)


@pytest.fixture
def mock_connection() -> MagicMock:
    """Create a mock SelectionConnection with an idle event queue."""
    connection = MagicMock()
    connection.display.intern_atom.side_effect = intern_atom
    connection.display.pending_events.return_value = 0
    connection.window.id = 0x400001
    return connection


@pytest.fixture
def history_db(tmp_path: Path) -> Path:
    """Create an SQLite database with an empty clipboard table."""
    path = tmp_path / "history.db"
    conn = sqlite3.connect(path)
    conn.execute(CREATE_TABLE_SQL)
    conn.commit()
    conn.close()
    return path
