"""Production implementation of Git operations using subprocess."""

import logging
import subprocess
from pathlib import Path

from claude_cleaner.gateway.git.abc import CommitInfo, CommitMessage, Git
from claude_cleaner.subprocess_utils import (
    copied_env_for_git_subprocess,
    run_subprocess_with_context,
)

logger = logging.getLogger(__name__)

_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x00"


class RealGit(Git):
    """Real implementation of Git operations using subprocess."""

    # ============================================================================
    # Query Operations
    # ============================================================================

    def has_git_dir(self, repo: Path) -> bool:
        return (repo / ".git").exists()

    def has_head(self, repo: Path) -> bool:
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "HEAD"],
            cwd=repo,
            capture_output=True,
            text=True,
            check=False,
            env=copied_env_for_git_subprocess(),
        )
        return result.returncode == 0

    def list_added_paths(self, repo: Path) -> list[str]:
        result = run_subprocess_with_context(
            cmd=[
                "git",
                "log",
                "--all",
                "-z",
                "--pretty=format:",
                "--name-only",
                "--diff-filter=A",
            ],
            operation_context="list files added in history",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        # -z leaves names unquoted; commits may also be separated by a newline
        names = (record.lstrip("\n") for record in result.stdout.split(_FIELD_SEP))
        return list(dict.fromkeys(name for name in names if name))

    def get_first_commit_for_path(self, repo: Path, path: str) -> CommitInfo | None:
        result = run_subprocess_with_context(
            cmd=[
                "git",
                "--literal-pathspecs",
                "log",
                "--all",
                "--reverse",
                "--diff-filter=A",
                "--format=%H|%aI|%s",
                "--",
                path,
            ],
            operation_context=f"find first commit for {path}",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        # --max-count applies before --reverse, so take the first line ourselves
        lines = result.stdout.strip().splitlines()
        if not lines:
            return None
        sha, date, subject = lines[0].split("|", 2)
        return CommitInfo(sha=sha, date=date, subject=subject)

    def list_commit_messages(self, repo: Path, ref: str) -> list[CommitMessage]:
        result = run_subprocess_with_context(
            cmd=["git", "log", "--format=%H%x00%B%x1e", ref],
            operation_context=f"list commits on {ref}",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        commits: list[CommitMessage] = []
        for record in result.stdout.split(_RECORD_SEP):
            record = record.lstrip("\n")
            if not record:
                continue
            sha, _, message = record.partition(_FIELD_SEP)
            commits.append(CommitMessage(sha=sha, message=message.rstrip("\n") + "\n"))
        return commits

    def get_parent(self, repo: Path, sha: str) -> str | None:
        result = run_subprocess_with_context(
            cmd=["git", "rev-list", "--parents", "-n", "1", sha],
            operation_context=f"get parent of {sha}",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        parts = result.stdout.split()
        if len(parts) < 2:
            return None
        return parts[1]

    def get_current_branch(self, repo: Path) -> str | None:
        result = run_subprocess_with_context(
            cmd=["git", "rev-parse", "--abbrev-ref", "HEAD"],
            operation_context="get current branch",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        branch = result.stdout.strip()
        if branch == "HEAD":
            return None
        return branch

    def has_uncommitted_changes(self, repo: Path) -> bool:
        result = run_subprocess_with_context(
            cmd=["git", "status", "--porcelain"],
            operation_context="check working tree status",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
        return bool(result.stdout.strip())

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def create_branch(self, repo: Path, name: str) -> None:
        run_subprocess_with_context(
            cmd=["git", "branch", name],
            operation_context=f"create branch {name}",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )

    def clone_bare(self, repo: Path, destination: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "clone", "--bare", str(repo), str(destination)],
            operation_context=f"create bare clone at {destination}",
            env=copied_env_for_git_subprocess(),
        )

    def filter_branch_messages(self, repo: Path, msg_filter: str, rev_range: str) -> None:
        env = copied_env_for_git_subprocess()
        env["FILTER_BRANCH_SQUELCH_WARNING"] = "1"
        logger.debug("Running filter-branch on %s with filter %s", rev_range, msg_filter)
        run_subprocess_with_context(
            cmd=["git", "filter-branch", "-f", "--msg-filter", msg_filter, rev_range],
            operation_context="rewrite commit messages",
            cwd=repo,
            env=env,
        )

    def expire_reflog(self, repo: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "reflog", "expire", "--expire=now", "--all"],
            operation_context="expire reflog",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )

    def gc_prune(self, repo: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "gc", "--prune=now", "--aggressive"],
            operation_context="garbage collect repository",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )

    def reset_hard(self, repo: Path) -> None:
        run_subprocess_with_context(
            cmd=["git", "reset", "--hard", "HEAD"],
            operation_context="reset working tree",
            cwd=repo,
            env=copied_env_for_git_subprocess(),
        )
