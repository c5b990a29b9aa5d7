"""Clean command: remove Claude files and commit trailers from a repository."""

from pathlib import Path

import click

from claude_cleaner.cli.ensure import exit_with_error
from claude_cleaner.commit_cleaner import clean_commits, display_analysis
from claude_cleaner.config import (
    CleanOptions,
    load_repo_config,
    resolve_options,
    validate_directory_patterns,
)
from claude_cleaner.context import CleanerContext
from claude_cleaner.dependency_manager import (
    REQUIRED_TOOLS,
    check_all,
    check_for_missing_dependencies,
    install_all,
)
from claude_cleaner.errors import CleanerError
from claude_cleaner.file_cleaner import ArtifactEntry, clean_files
from claude_cleaner.output import user_output
from claude_cleaner.patterns import build_pattern_table
from claude_cleaner.selector import display_selection_summary, select_entries


def _select_interactively(entries: list[ArtifactEntry]) -> list[ArtifactEntry]:
    selected = select_entries(entries)
    display_selection_summary(selected)
    return selected


def _ensure_dependencies(ctx: CleanerContext, options: CleanOptions) -> None:
    required = ("git",) if options.commits_only else REQUIRED_TOOLS
    results = check_all(ctx.tools, cache_dir=ctx.cache_dir)
    missing = [r for r in results if r.tool in required and not r.available]
    if missing and options.auto_install and options.execute:
        results = install_all(ctx.tools, cache_dir=ctx.cache_dir)
    check_for_missing_dependencies(
        [r for r in results if r.tool in required], dry_run=options.dry_run
    )


def run_clean(ctx: CleanerContext, repo: Path, options: CleanOptions) -> None:
    options = resolve_options(options, load_repo_config(repo))
    for warning in validate_directory_patterns(options.include_dirs):
        user_output(click.style("Warning: ", fg="yellow") + warning)

    table = build_pattern_table(
        include_dirs=options.include_dirs,
        use_defaults=options.use_defaults is not False,
        include_all_common_patterns=options.include_all_common_patterns,
    )

    if options.dry_run:
        ctx = ctx.for_dry_run()
        user_output(
            click.style("DRY RUN: ", fg="yellow", bold=True)
            + "no changes will be made. Use --execute to apply them."
        )

    _ensure_dependencies(ctx, options)

    if not options.commits_only:
        user_output(click.style("\nStep 1: Removing Claude files", bold=True))
        clean_files(
            ctx,
            repo,
            table=table,
            select=_select_interactively if options.interactive else None,
        )

    if not options.files_only:
        user_output(click.style("\nStep 2: Cleaning commit messages", bold=True))
        analysis = clean_commits(ctx, repo, branch=options.branch, table=table)
        display_analysis(analysis, dry_run=options.dry_run)

    if options.dry_run:
        user_output(
            "\nDry run complete. Re-run with "
            + click.style("--execute", fg="cyan")
            + " to apply these changes."
        )
    else:
        user_output(click.style("\n✓ Cleaning complete", fg="green", bold=True))


@click.command("clean")
@click.argument(
    "repo_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)
@click.option("-x", "--execute", is_flag=True, help="Apply changes (default is a dry run)")
@click.option("--files-only", is_flag=True, help="Only remove Claude files")
@click.option("--commits-only", is_flag=True, help="Only clean commit messages")
@click.option("--branch", help="Branch whose commits are cleaned (default: HEAD)")
@click.option(
    "--include-dirs",
    multiple=True,
    metavar="NAME",
    help="Extra directory name to remove wherever it appears (repeatable)",
)
@click.option(
    "--include-dirs-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File listing extra directory names, one per line",
)
@click.option(
    "--no-defaults",
    is_flag=True,
    help="Skip the default patterns (CLAUDE.md, .claude/, ...)",
)
@click.option(
    "--include-all-common-patterns",
    is_flag=True,
    help="Also match every known Claude file pattern, including rare ones",
)
@click.option("--auto-install", is_flag=True, help="Install missing Java and BFG automatically")
@click.option("-i", "--interactive", is_flag=True, help="Choose which files to remove")
@click.pass_obj
def clean_cmd(
    ctx: CleanerContext,
    repo_path: Path,
    execute: bool,
    files_only: bool,
    commits_only: bool,
    branch: str | None,
    include_dirs: tuple[str, ...],
    include_dirs_file: Path | None,
    no_defaults: bool,
    include_all_common_patterns: bool,
    auto_install: bool,
    interactive: bool,
) -> None:
    """Remove Claude artifacts from REPO_PATH (default: current directory).

    Runs in two steps: removing Claude files from the whole history with
    BFG Repo-Cleaner, then stripping Claude trailers from commit messages.

    Examples:

    \b
      # Preview everything that would be removed
      claude-cleaner clean

    \b
      # Remove files and trailers
      claude-cleaner clean --execute

    \b
      # Only commit messages on a specific branch
      claude-cleaner clean --commits-only --branch main -x
    """
    options = CleanOptions(
        execute=execute,
        files_only=files_only,
        commits_only=commits_only,
        branch=branch,
        include_dirs=include_dirs,
        include_dirs_file=include_dirs_file,
        use_defaults=False if no_defaults else None,
        include_all_common_patterns=include_all_common_patterns,
        interactive=interactive,
        auto_install=auto_install,
    )
    repo = (ctx.cwd / repo_path).resolve()
    try:
        run_clean(ctx, repo, options)
    except CleanerError as e:
        exit_with_error(e, verbose=ctx.verbose)
