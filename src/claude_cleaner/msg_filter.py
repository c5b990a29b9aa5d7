"""Commit message filter for `git filter-branch --msg-filter`.

Reads one commit message on stdin and writes the cleaned message to stdout:

    git filter-branch --msg-filter "python -m claude_cleaner.msg_filter" main
"""

import sys
from typing import TextIO

from claude_cleaner.classifier import strip_trailers
from claude_cleaner.patterns import DEFAULT_PATTERN_TABLE


def filter_message(stdin: TextIO, stdout: TextIO) -> None:
    message = stdin.read()
    stdout.write(strip_trailers(message, table=DEFAULT_PATTERN_TABLE).cleaned)


def main() -> None:
    # Commit messages are bytes; keep undecodable ones intact
    stdin = open(
        sys.stdin.fileno(), encoding="utf-8", errors="surrogateescape", newline="", closefd=False
    )
    stdout = open(
        sys.stdout.fileno(),
        "w",
        encoding="utf-8",
        errors="surrogateescape",
        newline="",
        closefd=False,
    )
    with stdin, stdout:
        filter_message(stdin, stdout)


if __name__ == "__main__":
    main()
