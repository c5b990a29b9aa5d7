"""Abstract base class for BFG Repo-Cleaner invocations."""

from abc import ABC, abstractmethod
from pathlib import Path


class Bfg(ABC):
    """Abstract interface for BFG Repo-Cleaner.

    Both operations rewrite every commit in the repository, including HEAD,
    and take a name spec that is either a bare name or a brace list
    (`{a,b}`) built by claude_cleaner.batch.build_batch_spec().
    """

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def delete_files(self, repo: Path, jar: Path, spec: str) -> None:
        """Delete files whose basename matches spec from all of history.

        Raises:
            RuntimeError: If the BFG process fails
        """
        ...

    @abstractmethod
    def delete_folders(self, repo: Path, jar: Path, spec: str) -> None:
        """Delete folders whose name matches spec from all of history.

        Raises:
            RuntimeError: If the BFG process fails
        """
        ...
