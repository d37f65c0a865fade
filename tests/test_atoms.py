#!/usr/bin/env python3
"""Tests for atom lookup."""
from unittest.mock import MagicMock

import pytest
from Xlib import X

from clipsniff.atoms import atom_name, resolve_atom
from clipsniff.errors import UnknownAtomError


class TestResolveAtom:
    """Tests for resolve_atom function."""

    def test_returns_known_atom(self) -> None:
        """Known names resolve to their atom id."""
        mock_display = MagicMock()
        mock_display.intern_atom.return_value = 300

        assert resolve_atom(mock_display, "CLIPBOARD") == 300

    def test_lookup_never_creates_atom(self) -> None:
        """The lookup is made with only_if_exists set."""
        mock_display = MagicMock()
        mock_display.intern_atom.return_value = 300

        resolve_atom(mock_display, "CLIPBOARD")

        mock_display.intern_atom.assert_called_once_with(
            "CLIPBOARD", only_if_exists=True
        )

    def test_unknown_atom_raises(self) -> None:
        """A name the server has never seen raises UnknownAtomError."""
        mock_display = MagicMock()
        mock_display.intern_atom.return_value = X.NONE

        with pytest.raises(UnknownAtomError) as exc_info:
            resolve_atom(mock_display, "NO_SUCH_SELECTION")

        assert exc_info.value.name == "NO_SUCH_SELECTION"
        assert "Can't find atom: NO_SUCH_SELECTION" in str(exc_info.value)


def test_atom_name_uses_reverse_lookup() -> None:
    """atom_name returns the server's name for the atom."""
    mock_display = MagicMock()
    mock_display.get_atom_name.return_value = "PRIMARY"

    assert atom_name(mock_display, 1) == "PRIMARY"
    mock_display.get_atom_name.assert_called_once_with(1)
