#!/usr/bin/env python3
"""Atom lookup without creation.

Selection and target names are looked up with only_if_exists set, so a
name the server has never seen is reported as an error instead of being
interned as a side effect.
"""

from __future__ import annotations

import logging

from Xlib import X

from clipsniff.errors import UnknownAtomError

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Xlib.display import Display

logger = logging.getLogger(__name__)


def resolve_atom(display: Display, name: str) -> int:
    """Return the atom for name without creating it.

    Args:
        display: The X11 display connection.
        name: Atom name, e.g. "PRIMARY" or "CLIPBOARD".

    Returns:
        The atom id.

    Raises:
        UnknownAtomError: If the server does not know the name.
    """
    atom = display.intern_atom(name, only_if_exists=True)
    if atom == X.NONE:
        raise UnknownAtomError(name)
    logger.debug("Resolved atom %s = %s", name, atom)
    return atom


def atom_name(display: Display, atom: int) -> str:
    """Return the name of atom. Used for diagnostics only."""
    return display.get_atom_name(atom)
