#!/usr/bin/env python3
"""Constants for clipsniff.

Fixed protocol names, polling and timeout defaults, and the SQL used by
the history database.
"""

VERSION: str = "0.1.0"

# Selections sampled on every poll, in the order they are reported and stored.
SELECTION_NAMES: tuple[str, str] = ("PRIMARY", "CLIPBOARD")

# Seconds to sleep after a poll that found no change.
POLL_INTERVAL: float = 1.0

# Seconds to wait for a SelectionNotify before giving up on an owner
# that never replies.
SELECTION_TIMEOUT: float = 2.0

# Plain-text targets the owner may be asked to convert to.
TEXT_TARGETS: tuple[str, str] = ("STRING", "UTF8_STRING")
DEFAULT_TARGET: str = "STRING"

# Local time, second precision.
TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

INSERT_SQL: str = "INSERT INTO clipboard (ts,name,owner,data) VALUES(?,?,?,?)"

SCHEMA_CHECK_SQL: str = "SELECT ts, name, owner, data FROM clipboard LIMIT 0"

CREATE_TABLE_SQL: str = (
    "CREATE TABLE IF NOT EXISTS clipboard ("
    "ts TEXT NOT NULL, "
    "name TEXT NOT NULL, "
    "owner TEXT, "
    "data BLOB)"
)

# Retry parameters for inserts that hit a locked database.
STORE_ATTEMPTS: int = 5
STORE_INITIAL_WAIT: float = 0.05
STORE_MAX_WAIT: float = 1.0
STORE_WAIT_MULTIPLIER: float = 0.05
