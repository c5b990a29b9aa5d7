"""Abstract base class for the tool environment.

Covers everything the dependency manager needs from the host: locating
executables, probing versions, running installers and downloading files.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class ToolEnvironment(ABC):
    """Abstract interface for host tool operations.

    All implementations (real, fake, dry-run, printing) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Locate an executable on PATH."""
        ...

    @abstractmethod
    def get_version_output(self, cmd: list[str]) -> str | None:
        """Run a version probe and return its trimmed stdout, falling back to stderr.

        Returns None when the command cannot be run, fails or times out.
        """
        ...

    @abstractmethod
    def file_exists(self, path: Path) -> bool: ...

    @abstractmethod
    def platform(self) -> str:
        """Return the host platform in sys.platform form ("linux", "darwin", ...)."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def run_command(self, cmd: list[str], *, description: str) -> None:
        """Run an install step.

        Raises:
            RuntimeError: If the command fails
        """
        ...

    @abstractmethod
    def run_shell(self, script: str, *, description: str) -> None:
        """Run an install step that needs a shell pipeline.

        Raises:
            RuntimeError: If the command fails
        """
        ...

    @abstractmethod
    def download(self, url: str, destination: Path) -> None:
        """Download url to destination, creating parent directories.

        Raises:
            RuntimeError: If the download fails
        """
        ...
