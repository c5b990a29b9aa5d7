"""No-op Git wrapper for dry-run mode.

Prevents execution of history-rewriting operations while delegating
read-only operations to the wrapped implementation.
"""

from pathlib import Path

from claude_cleaner.gateway.git.abc import CommitInfo, CommitMessage, Git


class DryRunGit(Git):
    """No-op wrapper that prevents execution of destructive Git operations.

    Usage:
        noop_git = DryRunGit(RealGit())

        # Query operations work normally
        paths = noop_git.list_added_paths(repo)

        # Mutation operations are no-ops
        noop_git.gc_prune(repo)
    """

    def __init__(self, wrapped: Git) -> None:
        self._wrapped = wrapped

    # ============================================================================
    # Query Operations (delegate to wrapped implementation)
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
    # Mutation Operations (no-ops in dry-run mode)
    # ============================================================================

    def create_branch(self, repo: Path, name: str) -> None:
        pass

    def clone_bare(self, repo: Path, destination: Path) -> None:
        pass

    def filter_branch_messages(self, repo: Path, msg_filter: str, rev_range: str) -> None:
        pass

    def expire_reflog(self, repo: Path) -> None:
        pass

    def gc_prune(self, repo: Path) -> None:
        pass

    def reset_hard(self, repo: Path) -> None:
        pass
