"""No-op tool environment wrapper for dry-run mode."""

from pathlib import Path

from claude_cleaner.gateway.tools.abc import ToolEnvironment


class DryRunToolEnvironment(ToolEnvironment):
    """Delegates lookups and version probes; skips installs and downloads."""

    def __init__(self, wrapped: ToolEnvironment) -> None:
        self._wrapped = wrapped

    def which(self, name: str) -> str | None:
        return self._wrapped.which(name)

    def get_version_output(self, cmd: list[str]) -> str | None:
        return self._wrapped.get_version_output(cmd)

    def file_exists(self, path: Path) -> bool:
        return self._wrapped.file_exists(path)

    def platform(self) -> str:
        return self._wrapped.platform()

    def run_command(self, cmd: list[str], *, description: str) -> None:
        pass

    def run_shell(self, script: str, *, description: str) -> None:
        pass

    def download(self, url: str, destination: Path) -> None:
        pass
