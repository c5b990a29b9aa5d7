"""Shared helpers for integration tests that run real git."""

import subprocess
from pathlib import Path


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


def init_git_repo(repo: Path, default_branch: str = "main") -> None:
    """Initialize an empty repository with a local identity configured."""
    _git(repo, "init", "-q", "-b", default_branch)
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")


def commit_files(repo: Path, files: dict[str, str], message: str) -> str:
    """Write files, commit them, and return the new commit sha."""
    for name, content in files.items():
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    _git(repo, "add", "-A")
    _git(repo, "commit", "-q", "--allow-empty", "-m", message)
    return _git(repo, "rev-parse", "HEAD").strip()


def commit_message(repo: Path, rev: str) -> str:
    """Return the message of a commit without trailing newlines."""
    return _git(repo, "log", "-1", "--format=%B", rev).rstrip("\n")
