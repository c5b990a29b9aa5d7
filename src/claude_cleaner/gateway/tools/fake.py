"""Fake tool environment for testing."""

from pathlib import Path

from claude_cleaner.gateway.tools.abc import ToolEnvironment


class FakeToolEnvironment(ToolEnvironment):
    """In-memory fake tool environment.

    Constructor Injection:
    ---------------------
    - executables: Mapping of executable name -> path on PATH
    - version_outputs: Mapping of command tuple -> version probe output
    - files: Paths that exist
    - platform_name: Value returned by platform()
    - failing_commands: Descriptions whose run_command/run_shell raise
    - download_raises: Exception raised by download()
    - installs: Mapping of description -> executables that become available
      once that install step runs

    Mutation Tracking:
    -----------------
    - commands_run: Descriptions of run_command/run_shell calls, in order
    - downloads: (url, destination) pairs
    """

    def __init__(
        self,
        *,
        executables: dict[str, str] | None = None,
        version_outputs: dict[tuple[str, ...], str] | None = None,
        files: set[Path] | None = None,
        platform_name: str = "linux",
        failing_commands: set[str] | None = None,
        download_raises: Exception | None = None,
        installs: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._executables = dict(executables) if executables is not None else {}
        self._version_outputs = version_outputs if version_outputs is not None else {}
        self._files = set(files) if files is not None else set()
        self._platform_name = platform_name
        self._failing_commands = failing_commands if failing_commands is not None else set()
        self._download_raises = download_raises
        self._installs = installs if installs is not None else {}
        self._commands_run: list[str] = []
        self._downloads: list[tuple[str, Path]] = []

    def which(self, name: str) -> str | None:
        return self._executables.get(name)

    def get_version_output(self, cmd: list[str]) -> str | None:
        return self._version_outputs.get(tuple(cmd))

    def file_exists(self, path: Path) -> bool:
        return path in self._files

    def platform(self) -> str:
        return self._platform_name

    def run_command(self, cmd: list[str], *, description: str) -> None:
        self._run(description)

    def run_shell(self, script: str, *, description: str) -> None:
        self._run(description)

    def download(self, url: str, destination: Path) -> None:
        if self._download_raises is not None:
            raise self._download_raises
        self._downloads.append((url, destination))
        self._files.add(destination)

    def _run(self, description: str) -> None:
        self._commands_run.append(description)
        if description in self._failing_commands:
            raise RuntimeError(f"Failed to {description}\nExit code: 1")
        self._executables.update(self._installs.get(description, {}))

    @property
    def commands_run(self) -> list[str]:
        return list(self._commands_run)

    @property
    def downloads(self) -> list[tuple[str, Path]]:
        return list(self._downloads)
