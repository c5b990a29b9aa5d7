"""Production implementation of BFG invocations using java subprocesses."""

from pathlib import Path

from claude_cleaner.gateway.bfg.abc import Bfg
from claude_cleaner.subprocess_utils import run_subprocess_with_context


def bfg_command(jar: Path, flag: str, spec: str, repo: Path) -> list[str]:
    return ["java", "-jar", str(jar), flag, spec, "--no-blob-protection", str(repo)]


class RealBfg(Bfg):
    def delete_files(self, repo: Path, jar: Path, spec: str) -> None:
        run_subprocess_with_context(
            cmd=bfg_command(jar, "--delete-files", spec, repo),
            operation_context=f"delete files {spec} with BFG",
            cwd=repo,
        )

    def delete_folders(self, repo: Path, jar: Path, spec: str) -> None:
        run_subprocess_with_context(
            cmd=bfg_command(jar, "--delete-folders", spec, repo),
            operation_context=f"delete folders {spec} with BFG",
            cwd=repo,
        )
