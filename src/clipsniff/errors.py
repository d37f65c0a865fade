#!/usr/bin/env python3
"""Exception hierarchy for clipsniff.

Every failure the program detects is raised as a subclass of
ClipSniffError at the point of detection and propagates to the CLI,
which reports it as a fatal exception. The few recoverable cases
(NoOwnerError while polling, SelectionTimeout) are handled by the
callers that know how to recover.
"""


class ClipSniffError(Exception):
    """Base class for all clipsniff errors."""

    pass


class ConnectError(ClipSniffError):
    """Raised when the X display cannot be opened.

    Attributes:
        display_name: The display that was tried, after falling back to
            $DISPLAY for an empty name.
        reason: The underlying error text.
    """

    def __init__(self, display_name: str, reason: str = "") -> None:
        self.display_name = display_name
        self.reason = reason
        message = f"Error opening display: {display_name}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class SurfaceError(ClipSniffError):
    """Raised when the message window cannot be created."""

    pass


class UnknownAtomError(ClipSniffError):
    """Raised when the server has no atom by the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Can't find atom: {name}")


class NoOwnerError(ClipSniffError):
    """Raised when a selection has no owning window."""

    def __init__(self, selection: str) -> None:
        self.selection = selection
        super().__init__(f"Can't get selection owner: {selection}")


class SelectionTimeout(ClipSniffError):
    """Raised when no SelectionNotify arrives within the timeout."""

    def __init__(self, selection: str, timeout: float) -> None:
        self.selection = selection
        self.timeout = timeout
        super().__init__(
            f"No reply for selection {selection} after {timeout} seconds"
        )


class StorageError(ClipSniffError):
    """Raised for any failure opening or writing the history database."""

    pass
