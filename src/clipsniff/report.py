#!/usr/bin/env python3
"""One-shot report of both selections."""

from __future__ import annotations

import click

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clipsniff.selection import SelectionClient


def format_report(
    contents: tuple[str, str], owners: tuple[str, str]
) -> str:
    """Format owners and content of PRIMARY and CLIPBOARD for display."""
    return (
        f"Primary owner:   {owners[0]}\n"
        f"Data:            {contents[0]}\n"
        f"Clipboard owner: {owners[1]}\n"
        f"Data:            {contents[1]}"
    )


def print_report(client: SelectionClient) -> None:
    """Print owner and content of both selections to stdout.

    Raises:
        NoOwnerError: If either selection has no owner.
    """
    contents = client.get()
    owners = client.get_owners()
    click.echo(format_report(contents, owners))
