"""X11 display connection and message window.

This module opens the connection to the X server and creates the
invisible window that receives SelectionNotify events and hosts the
properties selection owners write their data into.

The module handles:
- Opening the named display, or $DISPLAY when no name is given
- Creating a 1x1 unmapped message window
- Releasing both again through SelectionConnection.close()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from Xlib import error as Xerror

from clipsniff.errors import ConnectError, SurfaceError

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)


def resolve_display_name(display_name: str = "") -> str:
    """Return the display name that will actually be used.

    Args:
        display_name: Name given on the command line, possibly empty.

    Returns:
        display_name, or the value of $DISPLAY when it is empty.
    """
    return display_name or os.environ.get("DISPLAY", "")


def open_display(display_name: str = "") -> Display:
    """Open a connection to the X server.

    Args:
        display_name: Display to connect to. Empty means $DISPLAY.

    Returns:
        Display object for X11 operations.

    Raises:
        ConnectError: If the name is invalid or the server is unreachable.
    """
    from Xlib.display import Display as XDisplay

    resolved = resolve_display_name(display_name)
    try:
        display = XDisplay(display_name or None)
    except (Xerror.DisplayError, OSError) as e:
        raise ConnectError(resolved, str(e)) from e
    logger.debug("Connected to display %s", resolved)
    return display


def create_message_window(display: Display) -> Window:
    """Create a 1x1 unmapped window to receive selection replies.

    The window is never mapped, so nothing is rendered. Creation errors
    are reported asynchronously by the server, so the request is synced
    before checking for them.

    Args:
        display: The X11 display connection.

    Returns:
        The message window.

    Raises:
        SurfaceError: If the server rejects the window.
    """
    catcher = Xerror.CatchError()
    screen = display.screen()
    window = screen.root.create_window(
        0, 0, 1, 1, 0, screen.root_depth, onerror=catcher,
    )
    display.sync()
    if catcher.get_error():
        raise SurfaceError(f"Failed to create window: {catcher.get_error()}")
    logger.debug("Created message window %s", window.id)
    return window


@dataclass
class SelectionConnection:
    """The display connection and message window used for one session.

    Attributes:
        display: The X11 display connection.
        window: The unmapped message window.
        display_name: The resolved display name, for diagnostics.
    """

    display: Display
    window: Window
    display_name: str = ""
    closed: bool = False

    @classmethod
    def open(cls, display_name: str = "") -> SelectionConnection:
        """Connect to a display and create the message window."""
        display = open_display(display_name)
        try:
            window = create_message_window(display)
        except SurfaceError:
            display.close()
            raise
        return cls(display, window, resolve_display_name(display_name))

    def close(self) -> None:
        """Destroy the message window and close the display."""
        if self.closed:
            return
        self.closed = True
        try:
            self.window.destroy()
            self.display.flush()
        except (Xerror.XError, Xerror.ConnectionClosedError) as e:
            logger.debug("Failed to destroy message window: %s", e)
        try:
            self.display.close()
        except Xerror.ConnectionClosedError as e:
            logger.debug("Display connection already closed: %s", e)


@contextmanager
def open_connection(display_name: str = "") -> Iterator[SelectionConnection]:
    """Open a SelectionConnection and close it when the block exits."""
    connection = SelectionConnection.open(display_name)
    try:
        yield connection
    finally:
        connection.close()

