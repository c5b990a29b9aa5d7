"""No-op BFG wrapper for dry-run mode."""

from pathlib import Path

from claude_cleaner.gateway.bfg.abc import Bfg


class DryRunBfg(Bfg):
    """No-op wrapper: BFG only rewrites history, so every operation is skipped."""

    def __init__(self, wrapped: Bfg) -> None:
        self._wrapped = wrapped

    def delete_files(self, repo: Path, jar: Path, spec: str) -> None:
        pass

    def delete_folders(self, repo: Path, jar: Path, spec: str) -> None:
        pass
