"""Patterns command: show the active artifact pattern table."""

import click
from rich.console import Console
from rich.table import Table

from claude_cleaner.cli.ensure import exit_with_error
from claude_cleaner.config import validate_directory_patterns
from claude_cleaner.context import CleanerContext
from claude_cleaner.errors import CleanerError
from claude_cleaner.patterns import PatternTable, build_pattern_table


def _render_table(table: PatternTable) -> Table:
    rendered = Table(show_header=True, header_style="bold", box=None)
    rendered.add_column("id", style="cyan", no_wrap=True)
    rendered.add_column("kind", no_wrap=True)
    rendered.add_column("matcher", overflow="fold")
    rendered.add_column("reason", style="dim")
    for pattern in table.patterns:
        rendered.add_row(
            pattern.pattern_id,
            f"{pattern.kind.value}/{pattern.syntax.value}",
            pattern.matcher,
            pattern.reason,
        )
    return rendered


@click.command("patterns")
@click.option("--include-dirs", multiple=True, metavar="NAME", help="Extra directory name")
@click.option("--no-defaults", is_flag=True, help="Leave out the default patterns")
@click.option(
    "--include-all-common-patterns", is_flag=True, help="Include the extended patterns"
)
@click.pass_obj
def patterns_cmd(
    ctx: CleanerContext,
    include_dirs: tuple[str, ...],
    no_defaults: bool,
    include_all_common_patterns: bool,
) -> None:
    """List the patterns a clean run with the same flags would use.

    Rules are listed in match order: the first matching rule decides the
    reason shown for a path.
    """
    try:
        validate_directory_patterns(include_dirs)
        table = build_pattern_table(
            include_dirs=include_dirs,
            use_defaults=not no_defaults,
            include_all_common_patterns=include_all_common_patterns,
        )
    except CleanerError as e:
        exit_with_error(e, verbose=ctx.verbose)

    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(_render_table(table))
    console.print(f"\n{len(table.patterns)} patterns", style="dim")
