"""Logging configuration for the clipsniff CLI."""
import logging


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, DEBUG with --verbose, WARNING otherwise.

    The Xlib package logs nothing useful below WARNING, so it stays at
    WARNING even in verbose mode.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        if verbose
        else "%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("Xlib").setLevel(logging.WARNING)
