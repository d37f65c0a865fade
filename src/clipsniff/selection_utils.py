#!/usr/bin/env python3
"""X11 selection utility functions.

This module provides the event wait used after a ConvertSelection
request and the decoding of the property the owner delivered.
"""

from __future__ import annotations

import logging
import select
import time

from Xlib import X, Xatom

from clipsniff.errors import SelectionTimeout

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.protocol.rq import Event
    from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)


def _resource_id(resource: object) -> object:
    return getattr(resource, "id", resource)


def is_selection_reply(event: Event, window: Window, selection_atom: int) -> bool:
    """Return True if event answers our ConvertSelection for selection_atom."""
    return (
        event.type == X.SelectionNotify
        and event.selection == selection_atom
        and _resource_id(event.requestor) == _resource_id(window)
    )


def discard_pending_events(display: Display) -> int:
    """Drop every event already queued on the connection.

    Replies to an earlier request that timed out may still arrive later;
    they must not be taken for the answer to the next request.

    Args:
        display: The X11 display connection.

    Returns:
        Number of events discarded.
    """
    discarded = 0
    while display.pending_events():
        event = display.next_event()
        logger.debug("Discarding stale event type %s", event.type)
        discarded += 1
    return discarded


def wait_for_selection_notify(
    display: Display,
    window: Window,
    selection_atom: int,
    selection_name: str,
    timeout: float | None,
) -> Event:
    """Wait for the SelectionNotify answering our request.

    Reads events from the display until a SelectionNotify for
    selection_atom addressed to window arrives. Any other event is
    discarded. Between reads the display socket is watched with select()
    so the wait never exceeds timeout.

    Args:
        display: The X11 display connection.
        window: The window that issued the ConvertSelection request.
        selection_atom: The selection that was requested.
        selection_name: Name of the selection, for the timeout error.
        timeout: Seconds to wait, or None to wait forever.

    Returns:
        The matching SelectionNotify event.

    Raises:
        SelectionTimeout: If no reply arrives within timeout.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    while True:
        while display.pending_events():
            event = display.next_event()
            if is_selection_reply(event, window, selection_atom):
                return event
            logger.debug("Ignoring event type %s while waiting", event.type)

        remaining = None
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise SelectionTimeout(selection_name, timeout)

        readable, _, _ = select.select([display], [], [], remaining)
        if not readable:
            raise SelectionTimeout(selection_name, timeout)


def decode_property(prop: object) -> str:
    """Decode a fetched selection property as text.

    Decoding is lenient: the property type is not checked against the
    requested target. STRING data is Latin-1 as ICCCM defines it, every
    other 8-bit type is read as UTF-8 with undecodable bytes replaced.
    Properties that are not 8-bit (INCR announcements, atom lists) carry
    no text and decode to "".

    Args:
        prop: The property returned by Window.get_full_property, or None.

    Returns:
        The decoded text.
    """
    if prop is None:
        logger.debug("Selection property was empty")
        return ""

    if prop.format != 8:
        logger.warning(
            "Ignoring %d-bit selection property of type %s",
            prop.format, prop.property_type,
        )
        return ""

    data = prop.value
    if isinstance(data, str):
        return data
    data = bytes(data)
    if prop.property_type == Xatom.STRING:
        return data.decode("latin-1")
    return data.decode("utf-8", errors="replace")
