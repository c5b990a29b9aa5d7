"""Base class for printing gateway wrappers.

Printing wrappers echo each mutating command before delegating to the wrapped
implementation, which may be a real or a dry-run gateway.
"""

from typing import Any

import click

from claude_cleaner.output import user_output


class PrintingBase:
    """Shared constructor and formatting for Printing* gateway wrappers."""

    def __init__(self, wrapped: Any, *, dry_run: bool = False) -> None:
        """Create a printing wrapper.

        Args:
            wrapped: The gateway implementation to delegate to
            dry_run: Prefix printed commands with a [DRY RUN] marker
        """
        self._wrapped = wrapped
        self._dry_run = dry_run

    def _format_command(self, command: str) -> str:
        prefix = click.style("[DRY RUN] ", fg="yellow") if self._dry_run else ""
        return prefix + click.style("Running: ", dim=True) + click.style(command, fg="cyan")

    def _emit(self, message: str) -> None:
        user_output(message)
