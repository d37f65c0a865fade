#!/usr/bin/env python3
"""Snapshot and record types for selection history.

ContentSnapshot holds the last observed content of both selections and
StorageRecord is one row appended to the history database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple

from clipsniff.constants import TIMESTAMP_FORMAT


class ContentSnapshot(NamedTuple):
    """Content of PRIMARY and CLIPBOARD observed in one poll."""

    primary: str = ""
    clipboard: str = ""

    def changed_since(self, other: ContentSnapshot) -> list[int]:
        """Return the indexes of the fields that differ from other."""
        return [i for i, (new, old) in enumerate(zip(self, other)) if new != old]


@dataclass(frozen=True)
class StorageRecord:
    """One change of one selection.

    Attributes:
        timestamp: Local time of the poll, "YYYY-MM-DD HH:MM:SS".
        selection: "PRIMARY" or "CLIPBOARD".
        owner: Name of the owning window, may be empty.
        content: The new selection content.
    """

    timestamp: str
    selection: str
    owner: str
    content: str

    @classmethod
    def now(cls, selection: str, owner: str, content: str) -> StorageRecord:
        """Create a record stamped with the current local time."""
        return cls(datetime.now().strftime(TIMESTAMP_FORMAT), selection, owner, content)

    def as_row(self) -> tuple[str, str, str, str]:
        """Return the record in INSERT column order (ts, name, owner, data)."""
        return (self.timestamp, self.selection, self.owner, self.content)
