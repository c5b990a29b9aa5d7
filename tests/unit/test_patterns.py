"""Tests for the artifact pattern table."""

import pytest

from claude_cleaner.errors import CleanerError
from claude_cleaner.patterns import (
    DEFAULT_PATTERN_TABLE,
    EXTENDED_PATTERNS,
    USER_DIRECTORY_REASON,
    ArtifactPattern,
    MatcherSyntax,
    PatternKind,
    PatternTable,
    build_pattern_table,
    normalize_path,
)


def _extended_match(path: str) -> ArtifactPattern | None:
    for pattern in EXTENDED_PATTERNS:
        if pattern.matches_path(path):
            return pattern
    return None


def test_default_table_claims_all_three_kinds() -> None:
    """The default table claims file, directory and trailer detection."""
    assert DEFAULT_PATTERN_TABLE.claimed_kinds == frozenset(PatternKind)


def test_table_rejects_claimed_kind_without_rule() -> None:
    """Claiming a kind with no backing rule raises immediately."""
    only_file = ArtifactPattern(
        pattern_id="x", kind=PatternKind.FILENAME, matcher="x.md", reason="x"
    )

    with pytest.raises(CleanerError) as exc_info:
        PatternTable(
            patterns=(only_file,),
            claimed_kinds=frozenset({PatternKind.FILENAME, PatternKind.DIRECTORY}),
        )

    assert exc_info.value.code == "INVALID_PATTERN_TABLE"
    assert "directory" in exc_info.value.message


def test_table_rejects_duplicate_ids() -> None:
    """Pattern ids must be unique within a table."""
    rule = ArtifactPattern(pattern_id="dup", kind=PatternKind.FILENAME, matcher="a", reason="a")

    with pytest.raises(CleanerError):
        PatternTable(patterns=(rule, rule), claimed_kinds=frozenset({PatternKind.FILENAME}))


def test_literal_filename_matches_at_any_depth() -> None:
    """A literal filename rule matches the basename anywhere in the tree."""
    rule = DEFAULT_PATTERN_TABLE.get("claude-md")
    assert rule is not None

    assert rule.matches_path("CLAUDE.md")
    assert rule.matches_path("docs/deep/CLAUDE.md")
    assert not rule.matches_path("claude.md")
    assert not rule.matches_path("CLAUDE.md.bak")


def test_path_suffix_rule_requires_whole_segments() -> None:
    """A literal rule containing a slash matches only as a full path suffix."""
    rule = DEFAULT_PATTERN_TABLE.get("vscode-claude-json")
    assert rule is not None

    assert rule.matches_path(".vscode/claude.json")
    assert rule.matches_path("app/.vscode/claude.json")
    assert not rule.matches_path("my.vscode/claude.json")
    assert not rule.matches_path("claude.json")


def test_directory_rule_matches_directory_and_contents() -> None:
    """A directory rule matches the directory itself and everything beneath it."""
    rule = DEFAULT_PATTERN_TABLE.get("claude-dir")
    assert rule is not None

    assert rule.matches_path(".claude")
    assert rule.matches_path(".claude/settings.json")
    assert rule.matches_path("nested/.claude/deep/file.txt")
    assert not rule.matches_path(".claude-backup/file.txt")


def test_content_rule_never_matches_paths() -> None:
    """Trailer rules ignore paths."""
    rule = DEFAULT_PATTERN_TABLE.get("claude-coauthor")
    assert rule is not None

    assert not rule.matches_path("Co-Authored-By: Claude <noreply@anthropic.com>")


def test_normalize_path_strips_prefix_and_separators() -> None:
    """Paths are normalized to git's slash-separated relative form."""
    assert normalize_path("./a/b/") == "a/b"
    assert normalize_path("a\\b\\CLAUDE.md") == "a/b/CLAUDE.md"


def test_default_temp_rules() -> None:
    """Temporary and log files with a claude prefix are defaults."""
    table = DEFAULT_PATTERN_TABLE

    assert table.get("claude-dash-temp").matches_path("claude-temp-notes.txt")
    assert table.get("claude-tmp-log").matches_path("logs/.Claude-session.LOG")
    assert table.get("claude-tmp-marker").matches_path("build/my-claude-run.tmp")


def test_user_directories_come_first() -> None:
    """User directory rules are checked before the defaults."""
    table = build_pattern_table(include_dirs=["ai-notes", ".claude"])

    assert table.patterns[0].pattern_id == "user-dir:ai-notes"
    assert table.patterns[0].reason == USER_DIRECTORY_REASON
    assert table.patterns[1].matcher == ".claude"
    assert table.patterns[1].kind is PatternKind.DIRECTORY


def test_user_directories_are_deduplicated() -> None:
    """Repeating a directory name yields one rule."""
    table = build_pattern_table(include_dirs=["notes", "notes"])

    ids = [p.pattern_id for p in table.patterns]
    assert ids.count("user-dir:notes") == 1


def test_no_defaults_keeps_only_user_dirs_and_trailers() -> None:
    """Without defaults the table holds user directories and trailer rules only."""
    table = build_pattern_table(include_dirs=["scratch"], use_defaults=False)

    kinds = {p.kind for p in table.patterns}
    assert kinds == {PatternKind.DIRECTORY, PatternKind.CONTENT_REGEX}
    assert table.get("claude-md") is None
    assert table.claimed_kinds == frozenset({PatternKind.DIRECTORY, PatternKind.CONTENT_REGEX})


def test_no_defaults_without_dirs_claims_only_trailers() -> None:
    """A table with nothing but trailer rules is still valid."""
    table = build_pattern_table(use_defaults=False)

    assert table.path_patterns == ()
    assert len(table.content_patterns) == 4


def test_all_common_patterns_conflicts_with_no_defaults() -> None:
    """Extended patterns require the defaults."""
    with pytest.raises(CleanerError) as exc_info:
        build_pattern_table(use_defaults=False, include_all_common_patterns=True)

    assert exc_info.value.code == "INVALID_OPTIONS"


def test_extended_patterns_sit_between_markers_and_temp_rules() -> None:
    """Extended rules win over the generic temp rules but not the markers."""
    table = build_pattern_table(include_all_common_patterns=True)
    ids = [p.pattern_id for p in table.patterns]

    assert ids.index("clauderc") < ids.index("ext-config-separated")
    assert ids.index("ext-dir") < ids.index("claude-dash-temp")


@pytest.mark.parametrize(
    "path",
    [
        "claude.cache",
        "claude.draft",
        "claude.lock",
        "claude.diagnostic",
        ".claude.backup",
        "claude-v2.config",
        ".claude007.cache",
        "claude_settings.yaml",
        "CLAUDE-OUTPUT.txt",
        "claude-notes.md",
        ".vscode/claude_workspace.code-workspace",
        ".idea/claude.iml",
        ".eclipse/claude.prefs",
        "nested/.claude_cache",
        "claude_project",
        ".claude-sessions",
        "claude-temp",
        "claude-helper.sh",
        "claude.DS_Store",
    ],
)
def test_extended_patterns_match_claude_artifacts(path: str) -> None:
    """Extended patterns cover the less common Claude file names."""
    assert _extended_match(path) is not None


@pytest.mark.parametrize(
    "path",
    [
        "claude.txt",
        "include-claude.md",
        "claudelike.config",
        "my-claude-file.txt",
        "normal-file.txt",
        "README.md",
        "config.json",
        "src/main.ts",
    ],
)
def test_extended_patterns_are_anchored_at_basename_start(path: str) -> None:
    """Names that merely contain "claude" are left alone."""
    assert _extended_match(path) is None


def test_extended_patterns_are_case_insensitive() -> None:
    """Extended rules ignore case."""
    match = _extended_match("Claude.Lock")

    assert match is not None
    assert match.reason == "Claude process/lock file"


def test_glob_rule_matches_basename_only() -> None:
    """Glob rules never match across a slash."""
    rule = ArtifactPattern(
        pattern_id="g",
        kind=PatternKind.FILENAME,
        matcher="claude*.tmp",
        syntax=MatcherSyntax.GLOB,
        reason="g",
    )

    assert rule.matches_path("dir/claude-1.tmp")
    assert not rule.matches_path("claude/dir.tmp")
