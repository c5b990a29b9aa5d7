"""Printing tool environment wrapper for verbose output."""

from pathlib import Path

from claude_cleaner.gateway.tools.abc import ToolEnvironment
from claude_cleaner.printing import PrintingBase


class PrintingToolEnvironment(PrintingBase, ToolEnvironment):
    """Prints install steps and downloads before delegating."""

    def which(self, name: str) -> str | None:
        return self._wrapped.which(name)

    def get_version_output(self, cmd: list[str]) -> str | None:
        return self._wrapped.get_version_output(cmd)

    def file_exists(self, path: Path) -> bool:
        return self._wrapped.file_exists(path)

    def platform(self) -> str:
        return self._wrapped.platform()

    def run_command(self, cmd: list[str], *, description: str) -> None:
        self._emit(self._format_command(" ".join(cmd)))
        self._wrapped.run_command(cmd, description=description)

    def run_shell(self, script: str, *, description: str) -> None:
        self._emit(self._format_command(script))
        self._wrapped.run_shell(script, description=description)

    def download(self, url: str, destination: Path) -> None:
        self._emit(self._format_command(f"download {url} -> {destination}"))
        self._wrapped.download(url, destination)
