"""Artifact classification.

Pure functions over a PatternTable. No filesystem or git access happens here;
callers pass paths and text they already have.
"""

import re
from dataclasses import dataclass

from claude_cleaner.patterns import ArtifactPattern, PatternTable


@dataclass(frozen=True)
class ArtifactMatch:
    """Outcome of a successful classification.

    Attributes:
        path: The path that matched, or None for content matches
        pattern: The rule that matched
    """

    path: str | None
    pattern: ArtifactPattern

    @property
    def pattern_id(self) -> str:
        return self.pattern.pattern_id

    @property
    def reason(self) -> str:
        return self.pattern.reason


@dataclass(frozen=True)
class CleanedMessage:
    """Result of stripping trailers from a commit message."""

    original: str
    cleaned: str
    trailers: tuple[str, ...]

    @property
    def changed(self) -> bool:
        return bool(self.trailers)


def classify(
    path: str | None,
    content: str | None,
    *,
    table: PatternTable,
) -> ArtifactMatch | None:
    """Decide whether a path or text is a Claude artifact.

    Path rules are tried first, then content rules; the first rule in table
    order wins. Returns None when nothing matches or both inputs are absent.
    """
    if path:
        for pattern in table.path_patterns:
            if pattern.matches_path(path):
                return ArtifactMatch(path=path, pattern=pattern)

    if content:
        for pattern in table.content_patterns:
            if pattern.search_text(content):
                return ArtifactMatch(path=path or None, pattern=pattern)

    return None


def is_artifact_path(path: str, *, table: PatternTable) -> bool:
    return classify(path, None, table=table) is not None


def find_trailers(message: str, *, table: PatternTable) -> list[str]:
    """List trailer text found in a message, each occurrence reported once."""
    return list(strip_trailers(message, table=table).trailers)


_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def strip_trailers(message: str, *, table: PatternTable) -> CleanedMessage:
    """Remove trailer text from a commit message.

    Rules are applied in table order to the progressively cleaned message,
    so a line removed by one rule is not reported again by a broader one.
    Afterwards runs of three or more newlines collapse to two, surrounding
    whitespace is trimmed, and the result ends with exactly one newline.
    An unchanged message is returned verbatim.
    """
    remaining = message
    found: list[str] = []
    for pattern in table.content_patterns:
        remaining, removed = pattern.strip_from_text(remaining)
        found.extend(removed)

    if not found:
        return CleanedMessage(original=message, cleaned=message, trailers=())

    cleaned = _EXCESS_NEWLINES.sub("\n\n", remaining).strip()
    cleaned = "\n".join(line.rstrip() for line in cleaned.split("\n"))
    if cleaned:
        cleaned += "\n"
    return CleanedMessage(original=message, cleaned=cleaned, trailers=tuple(found))
