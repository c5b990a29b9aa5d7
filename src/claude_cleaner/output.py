"""Output helpers separating user-facing text from machine-readable output.

user_output() writes to stderr so that stdout stays clean for anything a
script might consume; machine_output() writes to stdout.
"""

from typing import Any

import click


def user_output(message: Any = "", *, nl: bool = True, color: bool | None = None) -> None:
    """Print a message meant for a human (stderr)."""
    click.echo(message, nl=nl, err=True, color=color)


def machine_output(message: Any = "", *, nl: bool = True) -> None:
    """Print a message meant for scripts (stdout)."""
    click.echo(message, nl=nl)


def format_error(code: str, message: str) -> str:
    """Format an application error as a styled single line."""
    return click.style("Error: ", fg="red") + f"{code}: {message}"
