"""Abstract base class for Git operations used by the cleaners.

Covers the repository queries needed to find artifacts in history and the
mutations needed to back up and rewrite that history.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommitInfo:
    """Commit summary used to show where an artifact was introduced.

    Attributes:
        sha: Full commit hash
        date: Author date in ISO 8601 format
        subject: First line of the commit message
    """

    sha: str
    date: str
    subject: str


@dataclass(frozen=True)
class CommitMessage:
    sha: str
    message: str


class Git(ABC):
    """Abstract interface for Git operations.

    All implementations (real, fake, dry-run, printing) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def has_git_dir(self, repo: Path) -> bool:
        """Check whether repo contains a .git entry."""
        ...

    @abstractmethod
    def has_head(self, repo: Path) -> bool:
        """Check whether HEAD resolves to a commit (false for an empty repository)."""
        ...

    @abstractmethod
    def list_added_paths(self, repo: Path) -> list[str]:
        """List every path added in any commit on any ref.

        Paths are returned in `git log` order with duplicates removed.

        Raises:
            RuntimeError: If git command fails
        """
        ...

    @abstractmethod
    def get_first_commit_for_path(self, repo: Path, path: str) -> CommitInfo | None:
        """Get the earliest commit that added path, or None if none did."""
        ...

    @abstractmethod
    def list_commit_messages(self, repo: Path, ref: str) -> list[CommitMessage]:
        """List commits reachable from ref, newest first, with full messages.

        Raises:
            RuntimeError: If git command fails
        """
        ...

    @abstractmethod
    def get_parent(self, repo: Path, sha: str) -> str | None:
        """Get the first parent of a commit, or None for a root commit."""
        ...

    @abstractmethod
    def get_current_branch(self, repo: Path) -> str | None:
        """Get the checked-out branch name, or None when HEAD is detached."""
        ...

    @abstractmethod
    def has_uncommitted_changes(self, repo: Path) -> bool:
        """Check for staged, unstaged or untracked changes."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def create_branch(self, repo: Path, name: str) -> None:
        """Create a branch at HEAD without checking it out.

        Raises:
            RuntimeError: If git command fails
        """
        ...

    @abstractmethod
    def clone_bare(self, repo: Path, destination: Path) -> None:
        """Create a bare clone of repo at destination.

        Raises:
            RuntimeError: If git command fails
        """
        ...

    @abstractmethod
    def filter_branch_messages(self, repo: Path, msg_filter: str, rev_range: str) -> None:
        """Rewrite commit messages in rev_range through a shell filter command.

        Raises:
            RuntimeError: If git command fails
        """
        ...

    @abstractmethod
    def expire_reflog(self, repo: Path) -> None:
        """Expire every reflog entry immediately (git reflog expire --expire=now --all)."""
        ...

    @abstractmethod
    def gc_prune(self, repo: Path) -> None:
        """Prune unreachable objects (git gc --prune=now --aggressive)."""
        ...

    @abstractmethod
    def reset_hard(self, repo: Path) -> None:
        """Reset the index and working tree to HEAD."""
        ...
