"""Integration tests for RealGit against temporary repositories."""

import subprocess
from pathlib import Path

from claude_cleaner.gateway.git.real import RealGit
from tests.integration.conftest import commit_files, init_git_repo

COAUTHOR = "Co-Authored-By: Claude <noreply@anthropic.com>"


def _repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    init_git_repo(repo, "main")
    return repo


def test_empty_repository_has_no_head(tmp_path: Path) -> None:
    """A freshly initialized repository has .git but no HEAD commit."""
    repo = _repo(tmp_path)
    git = RealGit()

    assert git.has_git_dir(repo)
    assert not git.has_head(repo)
    assert not git.has_git_dir(tmp_path)


def test_list_added_paths_includes_deleted_and_unicode_paths(tmp_path: Path) -> None:
    """Paths are listed from all history, unquoted, even after deletion."""
    repo = _repo(tmp_path)
    commit_files(repo, {"CLAUDE.md": "notes", "docs/résumé claude.md": "x"}, "Add files")
    (repo / "CLAUDE.md").unlink()
    subprocess.run(["git", "commit", "-q", "-am", "Remove"], cwd=repo, check=True)

    paths = RealGit().list_added_paths(repo)

    assert "CLAUDE.md" in paths
    assert "docs/résumé claude.md" in paths


def test_list_added_paths_keeps_special_characters_verbatim(tmp_path: Path) -> None:
    """Quotes, backslashes and tabs come back as the raw file names."""
    repo = _repo(tmp_path)
    names = ['say "hi" CLAUDE.md', "back\\slash.md", "tab\there.md"]
    commit_files(repo, {name: "x" for name in names}, "Add odd names")
    commit_files(repo, {"plain.txt": "y"}, "Add plain file")

    paths = RealGit().list_added_paths(repo)

    assert sorted(paths) == sorted([*names, "plain.txt"])


def test_first_commit_for_path_with_glob_characters(tmp_path: Path) -> None:
    """Paths are looked up literally, not as pathspec globs."""
    repo = _repo(tmp_path)
    commit_files(repo, {"claude-a.log": "a"}, "Add a")
    second = commit_files(repo, {"claude-*.log": "star"}, "Add star")

    commit = RealGit().get_first_commit_for_path(repo, "claude-*.log")

    assert commit is not None
    assert commit.sha == second


def test_first_commit_for_path(tmp_path: Path) -> None:
    """The earliest commit that added a path is reported."""
    repo = _repo(tmp_path)
    first = commit_files(repo, {"CLAUDE.md": "v1"}, "Add CLAUDE.md")
    commit_files(repo, {"CLAUDE.md": "v2"}, "Update CLAUDE.md")

    info = RealGit().get_first_commit_for_path(repo, "CLAUDE.md")

    assert info is not None
    assert info.sha == first
    assert info.subject == "Add CLAUDE.md"
    assert RealGit().get_first_commit_for_path(repo, "missing.txt") is None


def test_list_commit_messages_newest_first(tmp_path: Path) -> None:
    """Full messages are returned newest first with one trailing newline."""
    repo = _repo(tmp_path)
    root = commit_files(repo, {"a.txt": "a"}, "First")
    second = commit_files(repo, {"b.txt": "b"}, f"Second\n\nBody line\n\n{COAUTHOR}")

    commits = RealGit().list_commit_messages(repo, "HEAD")

    assert [c.sha for c in commits] == [second, root]
    assert commits[0].message == f"Second\n\nBody line\n\n{COAUTHOR}\n"
    assert commits[1].message == "First\n"


def test_parent_and_branch(tmp_path: Path) -> None:
    """Root commits have no parent; HEAD reports the checked-out branch."""
    repo = _repo(tmp_path)
    root = commit_files(repo, {"a.txt": "a"}, "First")
    child = commit_files(repo, {"b.txt": "b"}, "Second")
    git = RealGit()

    assert git.get_parent(repo, child) == root
    assert git.get_parent(repo, root) is None
    assert git.get_current_branch(repo) == "main"

    subprocess.run(["git", "checkout", "-q", "--detach"], cwd=repo, check=True)
    assert git.get_current_branch(repo) is None


def test_uncommitted_changes(tmp_path: Path) -> None:
    """Untracked and modified files make the tree dirty."""
    repo = _repo(tmp_path)
    commit_files(repo, {"a.txt": "a"}, "First")
    git = RealGit()

    assert not git.has_uncommitted_changes(repo)
    (repo / "new.txt").write_text("x", encoding="utf-8")
    assert git.has_uncommitted_changes(repo)


def test_create_branch_and_bare_clone(tmp_path: Path) -> None:
    """Backups are a branch at HEAD and a bare clone."""
    repo = _repo(tmp_path)
    head = commit_files(repo, {"a.txt": "a"}, "First")
    git = RealGit()

    git.create_branch(repo, "backup/pre-claude-clean-test")
    git.clone_bare(repo, tmp_path / "backup.git")

    branch_head = subprocess.run(
        ["git", "rev-parse", "backup/pre-claude-clean-test"],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    ).stdout.strip()
    assert branch_head == head
    assert (tmp_path / "backup.git" / "HEAD").exists()
