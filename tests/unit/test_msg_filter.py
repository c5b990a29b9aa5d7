"""Tests for the filter-branch message filter."""

import io

from claude_cleaner.commit_cleaner import build_msg_filter_command
from claude_cleaner.msg_filter import filter_message


def test_filter_message_strips_trailers() -> None:
    """The filter writes the cleaned message."""
    stdin = io.StringIO(
        "Add login\n\nCo-Authored-By: Claude <noreply@anthropic.com>\n"
    )
    stdout = io.StringIO()

    filter_message(stdin, stdout)

    assert stdout.getvalue() == "Add login\n"


def test_filter_message_passes_clean_message_through() -> None:
    """Messages without trailers are written back unchanged."""
    original = "Fix race\n\nLonger body\r\nwith CRLF\n"
    stdout = io.StringIO()

    filter_message(io.StringIO(original, newline=""), stdout)

    assert stdout.getvalue() == original


def test_msg_filter_command_runs_this_module() -> None:
    """The filter-branch command invokes the msg_filter module."""
    assert build_msg_filter_command().endswith(" -m claude_cleaner.msg_filter")
