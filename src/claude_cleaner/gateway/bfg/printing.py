"""Printing BFG wrapper for verbose output."""

from pathlib import Path

from claude_cleaner.gateway.bfg.abc import Bfg
from claude_cleaner.gateway.bfg.real import bfg_command
from claude_cleaner.printing import PrintingBase


class PrintingBfg(PrintingBase, Bfg):
    """Wrapper that prints each BFG command before delegating."""

    def delete_files(self, repo: Path, jar: Path, spec: str) -> None:
        self._emit(self._format_command(" ".join(bfg_command(jar, "--delete-files", spec, repo))))
        self._wrapped.delete_files(repo, jar, spec)

    def delete_folders(self, repo: Path, jar: Path, spec: str) -> None:
        self._emit(
            self._format_command(" ".join(bfg_command(jar, "--delete-folders", spec, repo)))
        )
        self._wrapped.delete_folders(repo, jar, spec)
