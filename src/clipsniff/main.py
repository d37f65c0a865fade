"""CLI handling for clipsniff.

This module provides the command-line interface for clipsniff, handling
argument parsing via click, logging configuration, and dispatching to
one-shot or continuous mode depending on whether an output database was
given.

Usage:
    clipsniff [-d DISPLAY]
    clipsniff [-d DISPLAY] -w FILE [--init-db] [--interval SECONDS]
"""

from __future__ import annotations

import logging
import signal
import sys

import click
from Xlib import error as Xerror

from typing import TYPE_CHECKING

from clipsniff.constants import (
    DEFAULT_TARGET,
    POLL_INTERVAL,
    SELECTION_TIMEOUT,
    TEXT_TARGETS,
    VERSION,
)
from clipsniff.errors import ClipSniffError
from clipsniff.main_logging import configure_logging

if TYPE_CHECKING:
    from clipsniff.selection import SelectionClient
    from clipsniff.storage import RecordSink

logger = logging.getLogger(__name__)

VERSION_MESSAGE = (
    "%(prog)s %(version)s\n"
    "License GPLv2: GNU GPL version 2 or later "
    "<http://gnu.org/licenses/gpl-2.0.html>\n"
    "This is free software: you are free to change and redistribute it.\n"
    "There is NO WARRANTY, to the extent permitted by law."
)

# Errors that end the program with a "fatal exception" diagnostic.
FATAL_ERRORS = (ClipSniffError, Xerror.XError, Xerror.ConnectionClosedError)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-d",
    "--display",
    "display_name",
    default="",
    metavar="DISPLAY",
    help="Select display. Defaults to $DISPLAY.",
)
@click.option(
    "-w",
    "--write",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Record selection changes into this SQLite database.",
)
@click.option(
    "--init-db",
    is_flag=True,
    help="Create the clipboard table in the database if it is missing.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=SELECTION_TIMEOUT,
    show_default=True,
    help="Seconds to wait for a selection owner to reply (0 waits forever).",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=POLL_INTERVAL,
    show_default=True,
    help="Seconds between polls while nothing changes.",
)
@click.option(
    "--target",
    type=click.Choice(TEXT_TARGETS),
    default=DEFAULT_TARGET,
    show_default=True,
    help="Text format requested from selection owners.",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
@click.version_option(VERSION, "-V", "--version", message=VERSION_MESSAGE)
def main(
    display_name: str,
    output_file: str | None,
    init_db: bool,
    timeout: float,
    interval: float,
    target: str,
    verbose: bool,
) -> None:
    """Show the X11 PRIMARY and CLIPBOARD selections and their owners.

    With -w, keep running and record every change into the database.
    """
    if init_db and not output_file:
        raise click.UsageError("--init-db requires -w/--write")

    configure_logging(verbose)
    click.echo(f"ClipSniff {VERSION}")

    prog = click.get_current_context().info_name
    try:
        _run_mode(display_name, output_file, init_db, timeout or None, interval, target)
    except FATAL_ERRORS as e:
        click.echo(f"{prog}: fatal exception: {e}", err=True)
        sys.exit(1)


def _run_mode(
    display_name: str,
    output_file: str | None,
    init_db: bool,
    timeout: float | None,
    interval: float,
    target: str,
) -> None:
    """Run one-shot mode, or continuous mode when output_file is set.

    Args:
        display_name: Display to connect to, empty for $DISPLAY.
        output_file: SQLite database path, or None for one-shot mode.
        init_db: Create the clipboard table if missing.
        timeout: Reply timeout in seconds, None to wait forever.
        interval: Idle poll interval in seconds.
        target: Text target requested from owners.
    """
    from clipsniff.display import open_connection
    from clipsniff.selection import SelectionClient

    if output_file is None:
        with open_connection(display_name) as connection:
            from clipsniff.report import print_report

            print_report(SelectionClient(connection, target, timeout))
        return

    from clipsniff.storage import SqliteSink

    with SqliteSink(output_file, create_table=init_db) as sink:
        with open_connection(display_name) as connection:
            client = SelectionClient(connection, target, timeout)
            _run_poller(client, sink, interval)


def _run_poller(
    client: SelectionClient, sink: RecordSink, interval: float
) -> None:
    """Poll until SIGINT or SIGTERM.

    Args:
        client: The SelectionClient to sample.
        sink: The record sink.
        interval: Idle poll interval in seconds.
    """
    from clipsniff.poller import SelectionPoller

    poller = SelectionPoller(client, sink, interval)

    def request_stop(signum, frame) -> None:
        logger.debug("Received signal %d, stopping", signum)
        poller.stop()

    previous = {
        signum: signal.signal(signum, request_stop)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        poller.run()
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
