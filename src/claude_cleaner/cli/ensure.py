"""Helpers that turn application errors into CLI exits."""

from typing import NoReturn

import click

from claude_cleaner.errors import CleanerError
from claude_cleaner.output import format_error, user_output


def exit_with_error(error: CleanerError, *, verbose: bool) -> NoReturn:
    """Print a CleanerError as `Error: CODE: message` and exit with status 1.

    With verbose, the underlying cause is printed as well.
    """
    user_output(format_error(error.code, error.message))
    if verbose and error.cause is not None:
        user_output(click.style(f"Caused by: {error.cause!r}", dim=True))
    raise SystemExit(1)
