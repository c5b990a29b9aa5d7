"""Strip Claude trailers from commit messages by rewriting history.

The rewrite runs `git filter-branch --msg-filter` with this package's own
msg_filter module as the filter, so the cleaning rules used during the
rewrite are the same ones used for the preview.
"""

import logging
import shlex
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import click

from claude_cleaner.classifier import strip_trailers
from claude_cleaner.context import CleanerContext
from claude_cleaner.errors import CleanerError
from claude_cleaner.file_cleaner import ensure_clean_working_tree
from claude_cleaner.gateway.git.abc import Git
from claude_cleaner.output import user_output
from claude_cleaner.patterns import DEFAULT_PATTERN_TABLE, PatternTable

logger = logging.getLogger(__name__)

_PREVIEW_LIMIT = 5
_PREVIEW_WIDTH = 60


@dataclass(frozen=True)
class CommitPreview:
    sha: str
    short_sha: str
    original: str
    cleaned: str
    trailers: tuple[str, ...]


@dataclass(frozen=True)
class CommitAnalysis:
    """Trailer statistics for the commits reachable from a branch.

    Attributes:
        total_commits: Commits examined
        commits_with_trailers: Commits whose message would change
        trailers_removed: Trailer occurrences across all commits
        earliest_commit_with_trailer: Oldest affected commit, if any
        previews: One entry per affected commit, newest first
    """

    total_commits: int
    commits_with_trailers: int
    trailers_removed: int
    earliest_commit_with_trailer: str | None
    previews: list[CommitPreview]


def clean_commit_message(
    message: str, *, table: PatternTable = DEFAULT_PATTERN_TABLE
) -> tuple[str, list[str]]:
    """Remove Claude trailers from a commit message.

    Returns:
        (cleaned message, trailer text that was removed)
    """
    result = strip_trailers(message, table=table)
    return result.cleaned, list(result.trailers)


def analyze_commits(
    git: Git, repo: Path, *, branch: str = "HEAD", table: PatternTable = DEFAULT_PATTERN_TABLE
) -> CommitAnalysis:
    try:
        commits = git.list_commit_messages(repo, branch)
    except RuntimeError as e:
        raise CleanerError(
            f"Failed to list commits on {branch}: {e}", "COMMIT_LIST_FAILED", e
        ) from e

    previews: list[CommitPreview] = []
    for commit in commits:
        cleaned, trailers = clean_commit_message(commit.message, table=table)
        if not trailers:
            continue
        previews.append(
            CommitPreview(
                sha=commit.sha,
                short_sha=commit.sha[:7],
                original=commit.message,
                cleaned=cleaned,
                trailers=tuple(trailers),
            )
        )

    return CommitAnalysis(
        total_commits=len(commits),
        commits_with_trailers=len(previews),
        trailers_removed=sum(len(p.trailers) for p in previews),
        earliest_commit_with_trailer=previews[-1].sha if previews else None,
        previews=previews,
    )


def build_msg_filter_command() -> str:
    return f"{shlex.quote(sys.executable)} -m claude_cleaner.msg_filter"


def create_backup_branch(git: Git, repo: Path, *, now: datetime | None = None) -> str:
    timestamp = (now if now is not None else datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    name = f"backup/pre-claude-clean-{timestamp}"
    try:
        git.create_branch(repo, name)
    except RuntimeError as e:
        raise CleanerError(
            f"Failed to create backup branch: {e}", "BACKUP_CREATION_FAILED", e
        ) from e
    user_output(f"Created backup branch: {name}")
    return name


def ensure_branch_checked_out(git: Git, repo: Path, branch: str) -> None:
    """Require branch to be the checked-out branch.

    The backup branch is taken at HEAD and filter-branch rewrites the
    current branch, so any other branch would be rewritten without a backup.
    """
    try:
        current = git.get_current_branch(repo)
    except RuntimeError as e:
        raise CleanerError(f"Failed to get current branch: {e}", "GET_BRANCH_FAILED", e) from e
    if branch not in ("HEAD", current):
        raise CleanerError(
            f"Branch '{branch}' is not checked out (current: {current or 'detached HEAD'}). "
            f"Run 'git checkout {branch}' before cleaning its commits",
            "BRANCH_NOT_CHECKED_OUT",
        )


def rewrite_commit_messages(git: Git, repo: Path, earliest: str) -> str:
    """Run filter-branch from the parent of earliest up to the current branch.

    Returns:
        The revision range that was rewritten
    """
    try:
        branch = git.get_current_branch(repo)
    except RuntimeError as e:
        raise CleanerError(f"Failed to get current branch: {e}", "GET_BRANCH_FAILED", e) from e
    if branch is None:
        raise CleanerError(
            "HEAD is detached; check out a branch before cleaning commits", "GET_BRANCH_FAILED"
        )

    parent = git.get_parent(repo, earliest)
    if parent is not None:
        rev_range = f"{parent}..{branch}"
        user_output(f"Optimizing: rewriting from {earliest[:7]} to {branch}")
    else:
        rev_range = branch
        user_output(
            f"Earliest commit {earliest[:7]} is the first commit, "
            "rewriting entire branch history"
        )

    try:
        git.filter_branch_messages(repo, build_msg_filter_command(), rev_range)
    except RuntimeError as e:
        raise CleanerError(f"git filter-branch failed: {e}", "FILTER_BRANCH_FAILED", e) from e
    logger.debug("filter-branch rewrote %s", rev_range)
    return rev_range


def clean_commits(
    ctx: CleanerContext,
    repo: Path,
    *,
    branch: str | None = None,
    table: PatternTable = DEFAULT_PATTERN_TABLE,
) -> CommitAnalysis:
    """Analyze commits on branch and, outside dry-run, rewrite their messages.

    Execute mode requires a clean working tree and creates a backup branch
    before rewriting.
    """
    target = branch or "HEAD"
    user_output(f"Starting commit cleaning for branch: {target}")
    analysis = analyze_commits(ctx.git, repo, branch=target, table=table)

    if ctx.dry_run:
        return analysis

    if analysis.commits_with_trailers == 0:
        user_output("No Claude trailers found in commit messages")
        return analysis

    if branch is not None:
        ensure_branch_checked_out(ctx.git, repo, branch)
    ensure_clean_working_tree(ctx.git, repo)
    create_backup_branch(ctx.git, repo)

    user_output(f"Found {analysis.commits_with_trailers} commits with Claude trailers")
    assert analysis.earliest_commit_with_trailer is not None
    rewrite_commit_messages(ctx.git, repo, analysis.earliest_commit_with_trailer)
    return analysis


def _first_line(message: str) -> str:
    return message.split("\n", 1)[0][:_PREVIEW_WIDTH]


def display_analysis(analysis: CommitAnalysis, *, dry_run: bool) -> None:
    if not dry_run:
        if analysis.commits_with_trailers == 0:
            return
        user_output(click.style("\n✓ Commit cleaning completed successfully!", fg="green"))
        user_output(f"Processed {analysis.total_commits} commits")
        user_output(f"Cleaned {analysis.commits_with_trailers} commits")
        user_output(f"Removed {analysis.trailers_removed} Claude trailers")
        return

    user_output(click.style("\nCommit Analysis Results:", bold=True))
    user_output(f"Total commits analyzed: {analysis.total_commits}")
    user_output(f"Commits with Claude trailers: {analysis.commits_with_trailers}")
    user_output(f"Total trailers to remove: {analysis.trailers_removed}")

    if not analysis.previews:
        return

    user_output("\nPreview of changes:")
    for preview in analysis.previews[:_PREVIEW_LIMIT]:
        user_output(f"\n  Commit: {click.style(preview.short_sha, fg='yellow')}")
        user_output(f"  Trailers found: {len(preview.trailers)}")
        for trailer in preview.trailers:
            escaped = trailer.replace("\n", "\\n")
            user_output(f'    - "{escaped}"')
        user_output(f'  Original message preview: "{_first_line(preview.original)}"')
        user_output(f'  Cleaned message preview: "{_first_line(preview.cleaned)}"')

    remaining = len(analysis.previews) - _PREVIEW_LIMIT
    if remaining > 0:
        user_output(f"\n  ... and {remaining} more commits")

    user_output(
        "\nTo apply these changes, run: "
        + click.style("claude-cleaner clean --commits-only --execute", fg="cyan")
    )
