#!/usr/bin/env python3
"""Reading selection content and owners.

SelectionClient implements the requesting side of the ICCCM selection
protocol over one SelectionConnection: it asks the owner of PRIMARY or
CLIPBOARD to convert its data to a plain-text target, waits for the
SelectionNotify and reads the delivered property back from the message
window. It also reports the name of the window owning a selection.
"""

from __future__ import annotations

import logging

from Xlib import X
from Xlib import error as Xerror

from clipsniff.atoms import atom_name, resolve_atom
from clipsniff.constants import DEFAULT_TARGET, SELECTION_NAMES, SELECTION_TIMEOUT
from clipsniff.errors import NoOwnerError, SelectionTimeout
from clipsniff.selection_utils import (
    decode_property,
    discard_pending_events,
    wait_for_selection_notify,
)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display
    from Xlib.xobject.drawable import Window

    from clipsniff.display import SelectionConnection

logger = logging.getLogger(__name__)


def window_name(window: Window) -> str:
    """Return the WM_NAME of window, or "" if it has none.

    Selection owners are often unmapped helper windows without a name,
    and the owner may be destroyed before the name is fetched.
    """
    try:
        name = window.get_wm_name()
    except Xerror.BadWindow:
        logger.debug("Owner window %s disappeared", window.id)
        return ""
    if name is None:
        return ""
    if isinstance(name, bytes):
        return name.decode("latin-1")
    return name


class SelectionClient:
    """Read selection content and owner names over one connection.

    Args:
        connection: The display connection and message window.
        target: Text target requested from the owner, "STRING" or
            "UTF8_STRING".
        timeout: Seconds to wait for each reply, or None to wait forever.
    """

    def __init__(
        self,
        connection: SelectionConnection,
        target: str = DEFAULT_TARGET,
        timeout: float | None = SELECTION_TIMEOUT,
    ) -> None:
        self.connection = connection
        self.target = target
        self.timeout = timeout

    @property
    def display(self) -> Display:
        return self.connection.display

    @property
    def window(self) -> Window:
        return self.connection.window

    def get_data(self, selection: str = "PRIMARY") -> str:
        """Return the text content of selection.

        A selection without owner, an owner that refuses the conversion
        and an owner that does not answer within the timeout all yield
        "". These cases cannot be told apart from an empty selection.

        Args:
            selection: "PRIMARY" or "CLIPBOARD".

        Returns:
            The selection text, possibly empty.

        Raises:
            UnknownAtomError: If the selection or target name is unknown.
        """
        selection_atom = resolve_atom(self.display, selection)
        target_atom = resolve_atom(self.display, self.target)

        discard_pending_events(self.display)
        # One reply property per selection, named after the selection.
        self.window.convert_selection(
            selection_atom, target_atom, selection_atom, X.CurrentTime
        )
        self.display.flush()

        try:
            event = wait_for_selection_notify(
                self.display, self.window, selection_atom, selection, self.timeout
            )
        except SelectionTimeout as e:
            logger.warning("%s, treating as empty", e)
            return ""

        if event.property == X.NONE:
            logger.debug("Owner of %s declined conversion", selection)
            return ""

        prop = self.window.get_full_property(event.property, X.AnyPropertyType)
        return decode_property(prop)

    def get_owner(self, selection: str = "PRIMARY") -> str:
        """Return the name of the window owning selection.

        Args:
            selection: "PRIMARY" or "CLIPBOARD".

        Returns:
            The owner's WM_NAME, "" if the window has none.

        Raises:
            UnknownAtomError: If the selection name is unknown.
            NoOwnerError: If no window owns the selection.
        """
        selection_atom = resolve_atom(self.display, selection)
        owner = self.display.get_selection_owner(selection_atom)
        if owner == X.NONE:
            raise NoOwnerError(selection)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Selection %s owned by window %s",
                atom_name(self.display, selection_atom), owner.id,
            )
        return window_name(owner)

    def get(self) -> tuple[str, str]:
        """Return the content of PRIMARY and CLIPBOARD, in that order."""
        primary, clipboard = SELECTION_NAMES
        return self.get_data(primary), self.get_data(clipboard)

    def get_owners(self, missing: str | None = None) -> tuple[str, str]:
        """Return the owner names of PRIMARY and CLIPBOARD, in that order.

        Args:
            missing: Name to report for a selection without owner. If None,
                NoOwnerError propagates instead.

        Raises:
            NoOwnerError: If a selection has no owner and missing is None.
        """
        owners = []
        for selection in SELECTION_NAMES:
            try:
                owners.append(self.get_owner(selection))
            except NoOwnerError:
                if missing is None:
                    raise
                logger.warning("Selection %s has no owner", selection)
                owners.append(missing)
        return owners[0], owners[1]
