#!/usr/bin/env python3
"""Selection change polling.

SelectionPoller samples both selections, compares them with the last
snapshot and stores one record for every selection whose content
changed. Owners are only looked up once a change has been seen, so an
idle poll costs two conversion round trips and nothing else.
"""

from __future__ import annotations

import logging
import threading

from clipsniff.constants import POLL_INTERVAL, SELECTION_NAMES
from clipsniff.records import ContentSnapshot, StorageRecord

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clipsniff.selection import SelectionClient
    from clipsniff.storage import RecordSink

logger = logging.getLogger(__name__)

# Owner recorded for a changed selection whose owner has gone away.
UNKNOWN_OWNER: str = ""


class SelectionPoller:
    """Poll PRIMARY and CLIPBOARD and store their changes.

    Args:
        client: Source of selection content and owners.
        sink: Receives one StorageRecord per changed selection.
        interval: Seconds to sleep after a poll without changes.
        stop_event: Event that ends run(); a new one is created if omitted.
    """

    def __init__(
        self,
        client: SelectionClient,
        sink: RecordSink,
        interval: float = POLL_INTERVAL,
        stop_event: threading.Event | None = None,
    ) -> None:
        self.client = client
        self.sink = sink
        self.interval = interval
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.last_snapshot = ContentSnapshot()

    def poll_once(self) -> list[StorageRecord]:
        """Sample both selections once and store what changed.

        Returns:
            The records stored, in PRIMARY, CLIPBOARD order. Empty if
            nothing changed.

        Raises:
            StorageError: If the sink fails.
            UnknownAtomError: If a selection name is unknown to the server.
        """
        current = ContentSnapshot(*self.client.get())
        if current == self.last_snapshot:
            return []

        owners = self.client.get_owners(missing=UNKNOWN_OWNER)
        records = []
        for index in current.changed_since(self.last_snapshot):
            record = StorageRecord.now(
                SELECTION_NAMES[index], owners[index], current[index]
            )
            self.sink.store(record)
            records.append(record)

        self.last_snapshot = current
        return records

    def run(self) -> None:
        """Poll until stop() is called.

        Sleeps for interval only after an unchanged poll, so a burst of
        changes is picked up without delay.
        """
        logger.debug("Polling selections every %s seconds", self.interval)
        while not self.stop_event.is_set():
            if self.poll_once():
                continue
            self.stop_event.wait(self.interval)
        logger.debug("Polling stopped")

    def stop(self) -> None:
        self.stop_event.set()
