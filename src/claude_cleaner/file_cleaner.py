"""Remove Claude artifact files from a repository's entire history.

Detection walks every path ever added on any ref and classifies it against a
PatternTable. Removal hands basenames to BFG Repo-Cleaner, batched into one
invocation per kind, then expires reflogs and garbage-collects so the
rewritten objects are really gone.
"""

import logging
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal

import click

from claude_cleaner.batch import (
    BATCH_FORBIDDEN_CHARS,
    FilenameValidationError,
    build_batch_spec,
    validate_filenames_for_batch,
)
from claude_cleaner.classifier import classify
from claude_cleaner.context import CleanerContext
from claude_cleaner.errors import CleanerError
from claude_cleaner.gateway.bfg.real import bfg_command
from claude_cleaner.gateway.git.abc import CommitInfo, Git
from claude_cleaner.output import user_output
from claude_cleaner.patterns import PatternTable, basename

logger = logging.getLogger(__name__)

ArtifactType = Literal["file", "directory"]

_MAX_SUBJECT_LENGTH = 60


@dataclass(frozen=True)
class ArtifactEntry:
    """A path found in history that matched an artifact rule.

    Attributes:
        path: Repository-relative path
        type: "directory" for directory entries, "file" otherwise
        reason: Reason of the matching rule
        pattern_id: Id of the matching rule
        first_commit: Earliest commit that added the path, if known
    """

    path: str
    type: ArtifactType
    reason: str
    pattern_id: str
    first_commit: CommitInfo | None = None


@dataclass(frozen=True)
class RemovalPlan:
    """BFG arguments derived from a list of entries.

    Attributes:
        directory_names: Unique basenames passed to --delete-folders
        file_names: Unique basenames passed to --delete-files; files beneath
            a targeted directory are left out since the folder deletion
            already covers them
    """

    directory_names: list[str]
    file_names: list[str]


@dataclass(frozen=True)
class RemovalResult:
    dry_run: bool
    plan: RemovalPlan
    manual_removal: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FileCleanResult:
    entries: list[ArtifactEntry]
    selected: list[ArtifactEntry]
    backup_path: Path | None
    removal: RemovalResult | None


def validate_repository(git: Git, repo: Path) -> None:
    """Check that repo is a git repository with at least one commit.

    Raises:
        CleanerError: NOT_GIT_REPO or EMPTY_REPO
    """
    if not git.has_git_dir(repo):
        raise CleanerError(f"Not a Git repository: {repo}", "NOT_GIT_REPO")
    if not git.has_head(repo):
        raise CleanerError(
            "Repository has no commits. Cannot clean an empty repository.", "EMPTY_REPO"
        )
    logger.debug("Repository validation passed for %s", repo)


def ensure_clean_working_tree(git: Git, repo: Path) -> None:
    """Refuse to rewrite history over uncommitted work.

    Both cleaners finish by resetting the checkout, which would discard
    staged, unstaged and untracked changes alike.

    Raises:
        CleanerError: WORKING_TREE_DIRTY, or WORKING_TREE_CHECK_FAILED if git fails
    """
    try:
        dirty = git.has_uncommitted_changes(repo)
    except RuntimeError as e:
        raise CleanerError(
            f"Failed to check working tree status: {e}", "WORKING_TREE_CHECK_FAILED", e
        ) from e
    if dirty:
        raise CleanerError(
            "Working tree is not clean. Please commit or stash your changes before cleaning",
            "WORKING_TREE_DIRTY",
        )


def _truncate_subject(commit: CommitInfo | None) -> CommitInfo | None:
    if commit is None or len(commit.subject) <= _MAX_SUBJECT_LENGTH:
        return commit
    return CommitInfo(
        sha=commit.sha,
        date=commit.date,
        subject=commit.subject[: _MAX_SUBJECT_LENGTH - 3] + "...",
    )


def is_beneath(path: str, directory: str) -> bool:
    return path.startswith(directory + "/")


def detect_artifacts(git: Git, repo: Path, *, table: PatternTable) -> list[ArtifactEntry]:
    """Find every artifact path in the repository's history.

    For each matching path, the outermost matching ancestor directory is
    listed first; the path itself follows. Ancestors nested inside an
    already-matching directory are not listed, since deleting them by name
    would hit unrelated folders of the same name.

    Raises:
        CleanerError: SCAN_ERROR if git fails
    """
    try:
        paths = git.list_added_paths(repo)
    except RuntimeError as e:
        raise CleanerError(f"Failed to scan repository history: {e}", "SCAN_ERROR", e) from e

    parent_dirs: set[str] = set()
    for path in paths:
        parts = path.split("/")
        parent_dirs.update("/".join(parts[:i]) for i in range(1, len(parts)))

    found: dict[str, tuple[ArtifactType, str, str]] = {}
    for path in paths:
        match = classify(path, None, table=table)
        if match is None:
            continue

        parts = path.split("/")
        for i in range(1, len(parts)):
            ancestor = "/".join(parts[:i])
            ancestor_match = classify(ancestor, None, table=table)
            if ancestor_match is None:
                continue
            if ancestor not in found:
                found[ancestor] = ("directory", ancestor_match.reason, ancestor_match.pattern_id)
            break

        if path not in found:
            kind: ArtifactType = "directory" if path in parent_dirs else "file"
            found[path] = (kind, match.reason, match.pattern_id)

    entries: list[ArtifactEntry] = []
    try:
        for path, (kind, reason, pattern_id) in found.items():
            first_commit = _truncate_subject(git.get_first_commit_for_path(repo, path))
            entries.append(
                ArtifactEntry(
                    path=path,
                    type=kind,
                    reason=reason,
                    pattern_id=pattern_id,
                    first_commit=first_commit,
                )
            )
    except RuntimeError as e:
        raise CleanerError(f"Failed to scan repository history: {e}", "SCAN_ERROR", e) from e

    logger.debug("Detected %d artifact entries in %s", len(entries), repo)
    return entries


def create_backup(ctx: CleanerContext, repo: Path, *, now: datetime | None = None) -> Path:
    """Create a bare clone next to the repository.

    In dry-run mode only the intended location is reported.

    Raises:
        CleanerError: BACKUP_ERROR if the clone fails
    """
    timestamp = (now if now is not None else datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    backup_path = repo.parent / f"claude-cleaner-backup-{timestamp}"

    user_output(f"Creating backup: {backup_path.name}")
    if ctx.dry_run:
        user_output(f"[DRY RUN] Would create backup at: {backup_path}")
        return backup_path

    try:
        ctx.git.clone_bare(repo, backup_path)
    except RuntimeError as e:
        raise CleanerError(f"Failed to create backup: {e}", "BACKUP_ERROR", e) from e
    logger.debug("Backup created at %s", backup_path)
    return backup_path


def plan_removal(entries: Sequence[ArtifactEntry]) -> RemovalPlan:
    directories = [e.path for e in entries if e.type == "directory"]
    files = [
        e.path
        for e in entries
        if e.type == "file" and not any(is_beneath(e.path, d) for d in directories)
    ]
    return RemovalPlan(
        directory_names=list(dict.fromkeys(basename(p) for p in directories)),
        file_names=list(dict.fromkeys(basename(p) for p in files)),
    )


def _format_entry(entry: ArtifactEntry) -> str:
    line = f"  - {entry.path} ({entry.reason})"
    if entry.first_commit is not None:
        commit = entry.first_commit
        line += f"\n    First appeared in: {commit.sha[:8]} ({commit.date})"
        line += f"\n    Commit: {commit.subject}"
    return line


def _split_batch(names: list[str]) -> tuple[list[str], list[str]]:
    """Turn names into BFG specs, warning when the batch is rejected.

    A valid list becomes one brace-list spec. Otherwise each name free of
    forbidden characters becomes its own spec.

    Returns:
        (specs, names needing manual removal)
    """
    if not names:
        return [], []

    try:
        validate_filenames_for_batch(names)
    except FilenameValidationError as e:
        user_output(click.style("Warning: ", fg="yellow") + e.reason)
        specs = [n for n in names if not BATCH_FORBIDDEN_CHARS.intersection(n)]
        manual = [n for n in names if BATCH_FORBIDDEN_CHARS.intersection(n)]
        return specs, manual

    return [build_batch_spec(names)], []


def _report_manual_removal(names: Sequence[str], *, dry_run: bool) -> None:
    prefix = "[DRY RUN] " if dry_run else ""
    verb = "would be" if dry_run else "was"
    for name in names:
        user_output(
            prefix
            + click.style("Manual removal required: ", fg="yellow")
            + f"'{name}' {verb} skipped. Remove it with "
            + click.style(f"git rm -r --cached '{name}'", fg="cyan")
            + " and rewrite history separately."
        )


def _planned_commands(plan: RemovalPlan, jar: str, repo: Path) -> tuple[list[str], list[str]]:
    commands: list[str] = []
    manual: list[str] = []
    for flag, names in (
        ("--delete-folders", plan.directory_names),
        ("--delete-files", plan.file_names),
    ):
        specs, skipped = _split_batch(names)
        manual += skipped
        commands.extend(" ".join(bfg_command(Path(jar), flag, spec, repo)) for spec in specs)
    commands.append("git reflog expire --expire=now --all")
    commands.append("git gc --prune=now --aggressive")
    return commands, manual


BfgOperation = Callable[[Path, Path, str], None]


def _run_batched(operation: BfgOperation, names: list[str], repo: Path, jar: Path) -> list[str]:
    """Run one batched BFG call, or individual calls if the batch is rejected.

    Returns:
        Names that could not be passed to BFG and need manual removal
    """
    specs, manual = _split_batch(names)
    for spec in specs:
        operation(repo, jar, spec)
    return manual


def _delete_leftovers(repo: Path, entries: Sequence[ArtifactEntry]) -> None:
    directories = [e.path for e in entries if e.type == "directory"]
    for entry in entries:
        if entry.type == "file" and any(is_beneath(entry.path, d) for d in directories):
            continue
        target = repo / entry.path
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        else:
            continue
        logger.debug("Removed leftover %s", target)


def remove_artifacts(
    ctx: CleanerContext, repo: Path, entries: Sequence[ArtifactEntry]
) -> RemovalResult | None:
    """Remove entries from history with BFG, then from the working tree.

    Returns None when there is nothing to remove.

    Raises:
        CleanerError: WORKING_TREE_DIRTY before anything runs on a dirty
            checkout, BFG_NOT_FOUND when the jar is missing, BFG_ERROR when a
            BFG or git cleanup command fails
    """
    if not entries:
        user_output("No Claude files found to remove")
        return None

    plan = plan_removal(entries)
    user_output(f"Removing {len(entries)} Claude artifacts from Git history...")

    if ctx.dry_run:
        user_output("[DRY RUN] Would remove the following files:")
        for entry in entries:
            user_output(_format_entry(entry))
        jar = str(ctx.bfg_jar) if ctx.tools.file_exists(ctx.bfg_jar) else "<bfg-path>"
        user_output("\n[DRY RUN] Commands that would be executed:")
        commands, manual = _planned_commands(plan, jar, repo)
        for command in commands:
            user_output(f"  {command}")
        _report_manual_removal(manual, dry_run=True)
        return RemovalResult(dry_run=True, plan=plan, manual_removal=manual)

    ensure_clean_working_tree(ctx.git, repo)
    if not ctx.tools.file_exists(ctx.bfg_jar):
        raise CleanerError(
            "BFG Repo-Cleaner not found. Please install it or use --auto-install",
            "BFG_NOT_FOUND",
        )

    try:
        manual = _run_batched(ctx.bfg.delete_folders, plan.directory_names, repo, ctx.bfg_jar)
        manual += _run_batched(ctx.bfg.delete_files, plan.file_names, repo, ctx.bfg_jar)
        ctx.git.expire_reflog(repo)
        ctx.git.gc_prune(repo)
        ctx.git.reset_hard(repo)
    except RuntimeError as e:
        raise CleanerError(f"Failed to remove files with BFG: {e}", "BFG_ERROR", e) from e

    _delete_leftovers(repo, entries)

    _report_manual_removal(manual, dry_run=False)
    user_output(click.style("✓ ", fg="green") + "Files successfully removed from Git history")
    return RemovalResult(dry_run=False, plan=plan, manual_removal=manual)


Selector = Callable[[list[ArtifactEntry]], list[ArtifactEntry]]


def clean_files(
    ctx: CleanerContext,
    repo: Path,
    *,
    table: PatternTable,
    select: Selector | None = None,
) -> FileCleanResult:
    """Validate, detect, back up and remove, in that order.

    Execute mode refuses a dirty working tree before the backup is taken.

    Args:
        select: Optional hook that narrows the detected entries, used for
            interactive selection
    """
    validate_repository(ctx.git, repo)
    entries = detect_artifacts(ctx.git, repo, table=table)
    user_output(f"Found {len(entries)} Claude artifacts")

    selected = entries
    if select is not None and entries:
        selected = select(entries)
        if not selected:
            user_output("No files selected; skipping file removal")
            return FileCleanResult(entries=entries, selected=[], backup_path=None, removal=None)

    if not selected:
        return FileCleanResult(entries=entries, selected=[], backup_path=None, removal=None)

    if not ctx.dry_run:
        ensure_clean_working_tree(ctx.git, repo)
    backup_path = create_backup(ctx, repo)
    removal = remove_artifacts(ctx, repo, selected)
    return FileCleanResult(
        entries=entries, selected=selected, backup_path=backup_path, removal=removal
    )
