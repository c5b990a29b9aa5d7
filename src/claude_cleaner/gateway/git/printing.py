"""Printing Git wrapper for verbose output."""

from pathlib import Path

from claude_cleaner.gateway.git.abc import CommitInfo, CommitMessage, Git
from claude_cleaner.printing import PrintingBase


class PrintingGit(PrintingBase, Git):
    """Wrapper that prints Git mutations before delegating to inner implementation.

    Usage:
        # For production
        printing_git = PrintingGit(RealGit(), dry_run=False)

        # For dry-run
        printing_git = PrintingGit(DryRunGit(RealGit()), dry_run=True)
    """

    # ============================================================================
    # Query Operations (delegate without printing)
    # ============================================================================

    def has_git_dir(self, repo: Path) -> bool:
        return self._wrapped.has_git_dir(repo)

    def has_head(self, repo: Path) -> bool:
        return self._wrapped.has_head(repo)

    def list_added_paths(self, repo: Path) -> list[str]:
        return self._wrapped.list_added_paths(repo)

    def get_first_commit_for_path(self, repo: Path, path: str) -> CommitInfo | None:
        return self._wrapped.get_first_commit_for_path(repo, path)

    def list_commit_messages(self, repo: Path, ref: str) -> list[CommitMessage]:
        return self._wrapped.list_commit_messages(repo, ref)

    def get_parent(self, repo: Path, sha: str) -> str | None:
        return self._wrapped.get_parent(repo, sha)

    def get_current_branch(self, repo: Path) -> str | None:
        return self._wrapped.get_current_branch(repo)

    def has_uncommitted_changes(self, repo: Path) -> bool:
        return self._wrapped.has_uncommitted_changes(repo)

    # ============================================================================
    # Mutation Operations (print before delegating)
    # ============================================================================

    def create_branch(self, repo: Path, name: str) -> None:
        self._emit(self._format_command(f"git branch {name}"))
        self._wrapped.create_branch(repo, name)

    def clone_bare(self, repo: Path, destination: Path) -> None:
        self._emit(self._format_command(f"git clone --bare {repo} {destination}"))
        self._wrapped.clone_bare(repo, destination)

    def filter_branch_messages(self, repo: Path, msg_filter: str, rev_range: str) -> None:
        self._emit(
            self._format_command(f"git filter-branch -f --msg-filter '{msg_filter}' {rev_range}")
        )
        self._wrapped.filter_branch_messages(repo, msg_filter, rev_range)

    def expire_reflog(self, repo: Path) -> None:
        self._emit(self._format_command("git reflog expire --expire=now --all"))
        self._wrapped.expire_reflog(repo)

    def gc_prune(self, repo: Path) -> None:
        self._emit(self._format_command("git gc --prune=now --aggressive"))
        self._wrapped.gc_prune(repo)

    def reset_hard(self, repo: Path) -> None:
        self._emit(self._format_command("git reset --hard HEAD"))
        self._wrapped.reset_hard(repo)
