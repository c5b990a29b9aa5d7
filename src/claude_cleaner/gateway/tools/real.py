"""Production implementation of the tool environment."""

import logging
import shutil
import subprocess
import sys
import urllib.error
import urllib.request
from pathlib import Path

from claude_cleaner.gateway.tools.abc import ToolEnvironment
from claude_cleaner.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealToolEnvironment(ToolEnvironment):
    # ============================================================================
    # Query Operations
    # ============================================================================

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def get_version_output(self, cmd: list[str]) -> str | None:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Version probe %s failed: %s", " ".join(cmd), e)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or result.stderr.strip()

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def platform(self) -> str:
        return sys.platform

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def run_command(self, cmd: list[str], *, description: str) -> None:
        run_subprocess_with_context(cmd=cmd, operation_context=description, timeout=600)

    def run_shell(self, script: str, *, description: str) -> None:
        run_subprocess_with_context(
            cmd=["sh", "-c", script], operation_context=description, timeout=600
        )

    def download(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")
        try:
            with urllib.request.urlopen(url, timeout=60) as response:
                partial.write_bytes(response.read())
        except urllib.error.URLError as e:
            partial.unlink(missing_ok=True)
            raise RuntimeError(f"Failed to download {url}: {e}") from e
        partial.replace(destination)
