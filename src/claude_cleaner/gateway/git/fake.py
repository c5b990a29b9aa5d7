"""Fake implementation of Git operations for testing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from claude_cleaner.gateway.git.abc import CommitInfo, CommitMessage, Git


@dataclass(frozen=True)
class FilterBranchCall:
    """Record of a filter_branch_messages() call."""

    repo: Path
    msg_filter: str
    rev_range: str


class FakeGit(Git):
    """In-memory fake implementation of Git operations.

    This fake accepts pre-configured state in its constructor and tracks
    mutations for test assertions.

    Constructor Injection:
    ---------------------
    - git_dirs: Repositories that have a .git entry
    - empty_repos: Repositories whose HEAD does not resolve
    - added_paths: Mapping of repo -> paths added in history
    - first_commits: Mapping of path -> earliest commit that added it
    - commit_messages: Mapping of (repo, ref) -> commits, newest first
    - parents: Mapping of sha -> parent sha (None for root commits)
    - current_branches: Mapping of repo -> checked-out branch
    - dirty_repos: Repositories with uncommitted changes
    - list_added_paths_raises / filter_branch_raises / clone_bare_raises /
      create_branch_raises: Exceptions raised by those operations

    Mutation Tracking:
    -----------------
    - created_branches: (repo, name) pairs from create_branch()
    - bare_clones: (repo, destination) pairs from clone_bare()
    - filter_branch_calls: FilterBranchCall records
    - reflog_expired / gc_pruned / hard_resets: repos passed to those operations
    """

    def __init__(
        self,
        *,
        git_dirs: set[Path] | None = None,
        empty_repos: set[Path] | None = None,
        added_paths: dict[Path, list[str]] | None = None,
        first_commits: dict[str, CommitInfo] | None = None,
        commit_messages: dict[tuple[Path, str], list[CommitMessage]] | None = None,
        parents: dict[str, str | None] | None = None,
        current_branches: dict[Path, str] | None = None,
        dirty_repos: set[Path] | None = None,
        list_added_paths_raises: Exception | None = None,
        filter_branch_raises: Exception | None = None,
        clone_bare_raises: Exception | None = None,
        create_branch_raises: Exception | None = None,
    ) -> None:
        self._git_dirs = git_dirs if git_dirs is not None else set()
        self._empty_repos = empty_repos if empty_repos is not None else set()
        self._added_paths = added_paths if added_paths is not None else {}
        self._first_commits = first_commits if first_commits is not None else {}
        self._commit_messages = commit_messages if commit_messages is not None else {}
        self._parents = parents if parents is not None else {}
        self._current_branches = current_branches if current_branches is not None else {}
        self._dirty_repos = dirty_repos if dirty_repos is not None else set()
        self._list_added_paths_raises = list_added_paths_raises
        self._filter_branch_raises = filter_branch_raises
        self._clone_bare_raises = clone_bare_raises
        self._create_branch_raises = create_branch_raises

        self._created_branches: list[tuple[Path, str]] = []
        self._bare_clones: list[tuple[Path, Path]] = []
        self._filter_branch_calls: list[FilterBranchCall] = []
        self._reflog_expired: list[Path] = []
        self._gc_pruned: list[Path] = []
        self._hard_resets: list[Path] = []

    # ============================================================================
    # Query Operations
    # ============================================================================

    def has_git_dir(self, repo: Path) -> bool:
        return repo in self._git_dirs

    def has_head(self, repo: Path) -> bool:
        return repo in self._git_dirs and repo not in self._empty_repos

    def list_added_paths(self, repo: Path) -> list[str]:
        if self._list_added_paths_raises is not None:
            raise self._list_added_paths_raises
        return list(self._added_paths.get(repo, []))

    def get_first_commit_for_path(self, repo: Path, path: str) -> CommitInfo | None:
        return self._first_commits.get(path)

    def list_commit_messages(self, repo: Path, ref: str) -> list[CommitMessage]:
        return list(self._commit_messages.get((repo, ref), []))

    def get_parent(self, repo: Path, sha: str) -> str | None:
        return self._parents.get(sha)

    def get_current_branch(self, repo: Path) -> str | None:
        return self._current_branches.get(repo)

    def has_uncommitted_changes(self, repo: Path) -> bool:
        return repo in self._dirty_repos

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def create_branch(self, repo: Path, name: str) -> None:
        if self._create_branch_raises is not None:
            raise self._create_branch_raises
        self._created_branches.append((repo, name))

    def clone_bare(self, repo: Path, destination: Path) -> None:
        if self._clone_bare_raises is not None:
            raise self._clone_bare_raises
        self._bare_clones.append((repo, destination))

    def filter_branch_messages(self, repo: Path, msg_filter: str, rev_range: str) -> None:
        if self._filter_branch_raises is not None:
            raise self._filter_branch_raises
        self._filter_branch_calls.append(
            FilterBranchCall(repo=repo, msg_filter=msg_filter, rev_range=rev_range)
        )

    def expire_reflog(self, repo: Path) -> None:
        self._reflog_expired.append(repo)

    def gc_prune(self, repo: Path) -> None:
        self._gc_pruned.append(repo)

    def reset_hard(self, repo: Path) -> None:
        self._hard_resets.append(repo)

    # ============================================================================
    # Mutation Tracking
    # ============================================================================

    @property
    def created_branches(self) -> list[tuple[Path, str]]:
        return list(self._created_branches)

    @property
    def bare_clones(self) -> list[tuple[Path, Path]]:
        return list(self._bare_clones)

    @property
    def filter_branch_calls(self) -> list[FilterBranchCall]:
        return list(self._filter_branch_calls)

    @property
    def reflog_expired(self) -> list[Path]:
        return list(self._reflog_expired)

    @property
    def gc_pruned(self) -> list[Path]:
        return list(self._gc_pruned)

    @property
    def hard_resets(self) -> list[Path]:
        return list(self._hard_resets)
