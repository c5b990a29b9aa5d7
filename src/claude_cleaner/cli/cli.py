import logging

import click

from claude_cleaner.cli.commands.check_deps import check_deps_cmd
from claude_cleaner.cli.commands.clean import clean_cmd
from claude_cleaner.cli.commands.patterns import patterns_cmd
from claude_cleaner.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="claude-cleaner")
@click.option(
    "-v",
    "--verbose",
    "--debug",
    "verbose",
    is_flag=True,
    help="Enable debug logging and echo every git/BFG command",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Remove Claude artifacts (marker files and commit trailers) from Git repositories.

    Every command that changes a repository runs as a dry run unless
    --execute is given.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=False, verbose=verbose)


cli.add_command(clean_cmd)
cli.add_command(check_deps_cmd)
cli.add_command(patterns_cmd)


def main() -> None:
    """CLI entry point used by the `claude-cleaner` console script."""
    cli()
