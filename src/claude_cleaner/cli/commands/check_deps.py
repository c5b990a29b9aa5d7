"""Check-deps command: report git, Java, BFG and mise availability."""

import click

from claude_cleaner.cli.ensure import exit_with_error
from claude_cleaner.context import CleanerContext
from claude_cleaner.dependency_manager import check_all, format_check_result, install_all
from claude_cleaner.errors import CleanerError
from claude_cleaner.output import user_output


@click.command("check-deps")
@click.option("--auto-install", is_flag=True, help="Install missing Java and BFG")
@click.pass_obj
def check_deps_cmd(ctx: CleanerContext, auto_install: bool) -> None:
    """Check that the tools needed for cleaning are installed.

    Exits with status 1 when a required tool is missing. mise is only used
    to install Java and is never required.
    """
    user_output(click.style("Checking dependencies...", bold=True))
    user_output("")

    try:
        results = check_all(ctx.tools, cache_dir=ctx.cache_dir)
        if auto_install and any(r.required and not r.available for r in results):
            results = install_all(ctx.tools, cache_dir=ctx.cache_dir)
    except CleanerError as e:
        exit_with_error(e, verbose=ctx.verbose)

    for result in results:
        user_output(format_check_result(result))
    user_output("")

    missing = [r.tool for r in results if r.required and not r.available]
    if missing:
        user_output(
            click.style("Missing required tools: ", fg="red")
            + ", ".join(missing)
            + ". Run "
            + click.style("claude-cleaner check-deps --auto-install", fg="cyan")
            + " to install them."
        )
        raise SystemExit(1)

    user_output(click.style("✓ All required dependencies are available", fg="green"))
