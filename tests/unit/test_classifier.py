"""Tests for artifact classification and trailer stripping."""

from claude_cleaner.classifier import (
    classify,
    find_trailers,
    is_artifact_path,
    strip_trailers,
)
from claude_cleaner.patterns import DEFAULT_PATTERN_TABLE, build_pattern_table

ROBOT = "\U0001f916"
GENERATED = f"{ROBOT} Generated with [Claude Code](https://claude.ai/code)"
COAUTHOR = "Co-Authored-By: Claude <noreply@anthropic.com>"


def test_classify_marker_file() -> None:
    """CLAUDE.md is reported with its rule id and reason."""
    match = classify("docs/CLAUDE.md", None, table=DEFAULT_PATTERN_TABLE)

    assert match is not None
    assert match.pattern_id == "claude-md"
    assert match.reason == "Claude project configuration file"
    assert match.path == "docs/CLAUDE.md"


def test_classify_file_inside_claude_directory() -> None:
    """Anything below .claude matches the directory rule."""
    match = classify(".claude/settings.local.json", None, table=DEFAULT_PATTERN_TABLE)

    assert match is not None
    assert match.pattern_id == "claude-dir"


def test_classify_ordinary_file_returns_none() -> None:
    """Ordinary project files are not artifacts."""
    assert classify("src/main.py", None, table=DEFAULT_PATTERN_TABLE) is None
    assert classify("README.md", "hello", table=DEFAULT_PATTERN_TABLE) is None


def test_classify_without_inputs_returns_none() -> None:
    """Nothing to classify yields None."""
    assert classify(None, None, table=DEFAULT_PATTERN_TABLE) is None
    assert classify("", "", table=DEFAULT_PATTERN_TABLE) is None


def test_classify_content_trailer() -> None:
    """Commit text with a co-author trailer matches the content rule."""
    match = classify(None, f"Fix bug\n\n{COAUTHOR}\n", table=DEFAULT_PATTERN_TABLE)

    assert match is not None
    assert match.pattern_id == "claude-coauthor"
    assert match.path is None


def test_path_rules_win_over_content_rules() -> None:
    """A matching path is reported even when content also matches."""
    match = classify("CLAUDE.md", COAUTHOR, table=DEFAULT_PATTERN_TABLE)

    assert match is not None
    assert match.pattern_id == "claude-md"


def test_user_directory_classification() -> None:
    """User directories are reported with the user-specified reason."""
    table = build_pattern_table(include_dirs=["ai-scratch"])

    match = classify("ai-scratch/plan.md", None, table=table)

    assert match is not None
    assert match.reason == "User-specified directory pattern"


def test_no_defaults_ignores_claude_md() -> None:
    """With defaults off only user directories are path artifacts."""
    table = build_pattern_table(include_dirs=["ai-scratch"], use_defaults=False)

    assert not is_artifact_path("CLAUDE.md", table=table)
    assert is_artifact_path("ai-scratch/x", table=table)


def test_all_common_patterns_reason_wins_over_temp_default() -> None:
    """The extended working-file rule precedes the generic temp rule."""
    table = build_pattern_table(include_all_common_patterns=True)

    match = classify("claude-temp.work", None, table=table)

    assert match is not None
    assert match.reason == "Claude temporary/working file"


def test_all_common_patterns_off_by_default() -> None:
    """Extended names are not artifacts with the default table."""
    assert not is_artifact_path("claude.lock", table=DEFAULT_PATTERN_TABLE)
    assert is_artifact_path(
        "claude.lock", table=build_pattern_table(include_all_common_patterns=True)
    )


def test_strip_trailers_removes_standard_block() -> None:
    """The standard generated-with and co-author lines are removed."""
    message = f"Add feature\n\nDetails here.\n\n{GENERATED}\n\n{COAUTHOR}\n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert result.changed
    assert result.cleaned == "Add feature\n\nDetails here.\n"
    assert result.trailers == (GENERATED, COAUTHOR)


def test_strip_trailers_leaves_clean_message_verbatim() -> None:
    """Messages without trailers are returned byte for byte."""
    message = "Fix typo\n\n\n\nTrailing spaces   \n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert not result.changed
    assert result.cleaned == message


def test_strip_trailers_keeps_other_coauthors() -> None:
    """Human co-authors survive."""
    message = f"Pair work\n\nCo-Authored-By: Ada <ada@example.com>\n{COAUTHOR}\n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert result.cleaned == "Pair work\n\nCo-Authored-By: Ada <ada@example.com>\n"


def test_strip_trailers_coauthor_is_case_insensitive() -> None:
    """The co-author key is matched regardless of case."""
    message = "Fix\n\nco-authored-by: Claude <noreply@anthropic.com>\n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert result.cleaned == "Fix\n"


def test_strip_trailers_handles_mojibake_robot() -> None:
    """A robot emoji decoded as cp1252 is still recognised."""
    message = "Fix\n\nðŸ¤– Generated with [Claude Code](https://claude.ai/code)\n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert result.cleaned == "Fix\n"
    assert len(result.trailers) == 1


def test_strip_trailers_generic_attribution() -> None:
    """Free-form "generated with Claude" lines are removed."""
    message = "Refactor parser\n\nGenerated with Claude 3.5 Sonnet\n"

    result = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert result.cleaned == "Refactor parser\n"


def test_strip_trailers_reports_each_line_once() -> None:
    """A line removed by an earlier rule is not matched again by a broader one."""
    message = f"Fix\n\n{GENERATED}\n"

    trailers = find_trailers(message, table=DEFAULT_PATTERN_TABLE)

    assert trailers == [GENERATED]


def test_strip_trailers_message_of_only_trailers_becomes_empty() -> None:
    """A message consisting only of trailers cleans to the empty string."""
    result = strip_trailers(f"{COAUTHOR}\n", table=DEFAULT_PATTERN_TABLE)

    assert result.cleaned == ""


def test_strip_trailers_is_idempotent() -> None:
    """Cleaning a cleaned message changes nothing."""
    message = f"Subject\n\nBody\n\n{GENERATED}\n{COAUTHOR}"
    once = strip_trailers(message, table=DEFAULT_PATTERN_TABLE)
    twice = strip_trailers(once.cleaned, table=DEFAULT_PATTERN_TABLE)

    assert not twice.changed
    assert twice.cleaned == once.cleaned
