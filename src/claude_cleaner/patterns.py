"""Artifact pattern table.

A PatternTable is an immutable, ordered list of ArtifactPattern rules built
once per run and passed explicitly to the classifier. Order matters: the
classifier returns the first rule that matches.

Matching rules by kind:
- FILENAME / LITERAL: exact basename, or exact path suffix when the matcher
  contains a slash (".vscode/claude.json" matches "a/.vscode/claude.json")
- FILENAME / GLOB: fnmatch-style match against the basename
- FILENAME / REGEX: re.search against the whole path; basename rules are
  anchored with `(?:^|/)` and never cross a slash
- DIRECTORY: any path segment matches (literal equality, or full match for
  GLOB/REGEX), so the directory itself and everything beneath it match
- CONTENT_REGEX: re.search against free text such as a commit message
"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from claude_cleaner.errors import CleanerError


class PatternKind(Enum):
    FILENAME = "filename"
    DIRECTORY = "directory"
    CONTENT_REGEX = "content_regex"


class MatcherSyntax(Enum):
    LITERAL = "literal"
    GLOB = "glob"
    REGEX = "regex"


USER_DIRECTORY_REASON = "User-specified directory pattern"


@dataclass(frozen=True)
class ArtifactPattern:
    """A single named detection rule."""

    pattern_id: str
    kind: PatternKind
    matcher: str
    reason: str
    syntax: MatcherSyntax = MatcherSyntax.LITERAL
    ignore_case: bool = False
    _regex: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", _compile(self))

    def matches_path(self, path: str) -> bool:
        """Check a repository-relative path against this rule.

        Content rules never match a path.
        """
        if self.kind is PatternKind.CONTENT_REGEX:
            return False

        normalized = normalize_path(path)
        if not normalized:
            return False

        if self.kind is PatternKind.DIRECTORY:
            return any(self._matches_name(segment) for segment in normalized.split("/"))

        if self.syntax is MatcherSyntax.REGEX:
            assert self._regex is not None
            return self._regex.search(normalized) is not None

        if self.syntax is MatcherSyntax.LITERAL and "/" in self.matcher:
            if self.ignore_case:
                lowered = normalized.lower()
                suffix = self.matcher.lower()
                return lowered == suffix or lowered.endswith("/" + suffix)
            return normalized == self.matcher or normalized.endswith("/" + self.matcher)

        return self._matches_name(basename(normalized))

    def find_in_text(self, text: str) -> list[str]:
        """Return every non-overlapping match of a content rule in text."""
        if self.kind is not PatternKind.CONTENT_REGEX:
            return []
        assert self._regex is not None
        return [m.group(0) for m in self._regex.finditer(text)]

    def search_text(self, text: str) -> bool:
        if self.kind is not PatternKind.CONTENT_REGEX:
            return False
        assert self._regex is not None
        return self._regex.search(text) is not None

    def strip_from_text(self, text: str) -> tuple[str, list[str]]:
        """Remove every match of a content rule, returning (text, removed)."""
        found = self.find_in_text(text)
        if not found:
            return text, []
        assert self._regex is not None
        return self._regex.sub("", text), found

    def _matches_name(self, name: str) -> bool:
        if self.syntax is MatcherSyntax.LITERAL:
            if self.ignore_case:
                return name.lower() == self.matcher.lower()
            return name == self.matcher
        assert self._regex is not None
        if self.kind is PatternKind.DIRECTORY or self.syntax is MatcherSyntax.GLOB:
            return self._regex.fullmatch(name) is not None
        return self._regex.search(name) is not None


def _compile(pattern: ArtifactPattern) -> re.Pattern[str] | None:
    flags = re.IGNORECASE if pattern.ignore_case else 0
    if pattern.kind is PatternKind.CONTENT_REGEX:
        return re.compile(pattern.matcher, flags | re.MULTILINE)
    if pattern.syntax is MatcherSyntax.LITERAL:
        return None
    if pattern.syntax is MatcherSyntax.GLOB:
        return re.compile(fnmatch.translate(pattern.matcher), flags)
    return re.compile(pattern.matcher, flags)


def normalize_path(path: str) -> str:
    """Normalize a path to git's form: forward slashes, no ./ prefix or trailing slash."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.strip("/")


def basename(path: str) -> str:
    return normalize_path(path).rsplit("/", 1)[-1]


@dataclass(frozen=True)
class PatternTable:
    """Ordered, immutable collection of artifact rules.

    Attributes:
        patterns: Rules in match-priority order
        claimed_kinds: Artifact kinds this table claims to detect; each must
            be backed by at least one rule
    """

    patterns: tuple[ArtifactPattern, ...]
    claimed_kinds: frozenset[PatternKind]

    def __post_init__(self) -> None:
        present = {p.kind for p in self.patterns}
        missing = sorted(kind.value for kind in self.claimed_kinds - present)
        if missing:
            raise CleanerError(
                f"Pattern table claims to detect {', '.join(missing)} but has no rule for it",
                "INVALID_PATTERN_TABLE",
            )
        seen: set[str] = set()
        for p in self.patterns:
            if p.pattern_id in seen:
                raise CleanerError(
                    f"Duplicate pattern id in table: {p.pattern_id}", "INVALID_PATTERN_TABLE"
                )
            seen.add(p.pattern_id)

    @property
    def path_patterns(self) -> tuple[ArtifactPattern, ...]:
        return tuple(p for p in self.patterns if p.kind is not PatternKind.CONTENT_REGEX)

    @property
    def content_patterns(self) -> tuple[ArtifactPattern, ...]:
        return tuple(p for p in self.patterns if p.kind is PatternKind.CONTENT_REGEX)

    def get(self, pattern_id: str) -> ArtifactPattern | None:
        for p in self.patterns:
            if p.pattern_id == pattern_id:
                return p
        return None


# ============================================================================
# Built-in rules
# ============================================================================


def _name_regex(body: str) -> str:
    # Anchor a basename regex so it matches only the final path segment
    return r"(?:^|/)" + body + "$"


DEFAULT_MARKER_PATTERNS: tuple[ArtifactPattern, ...] = (
    ArtifactPattern(
        pattern_id="claude-md",
        kind=PatternKind.FILENAME,
        matcher="CLAUDE.md",
        reason="Claude project configuration file",
    ),
    ArtifactPattern(
        pattern_id="claude-dir",
        kind=PatternKind.DIRECTORY,
        matcher=".claude",
        reason="Claude configuration directory",
    ),
    ArtifactPattern(
        pattern_id="claudedocs-dir",
        kind=PatternKind.DIRECTORY,
        matcher="claudedocs",
        reason="Claude documentation directory (MCP server)",
    ),
    ArtifactPattern(
        pattern_id="serena-dir",
        kind=PatternKind.DIRECTORY,
        matcher=".serena",
        reason="Serena MCP server directory",
    ),
    ArtifactPattern(
        pattern_id="vscode-claude-json",
        kind=PatternKind.FILENAME,
        matcher=".vscode/claude.json",
        reason="VSCode Claude extension configuration",
    ),
    ArtifactPattern(
        pattern_id="clauderc",
        kind=PatternKind.FILENAME,
        matcher=".clauderc",
        reason="Claude rc configuration file",
    ),
)

DEFAULT_TEMP_PATTERNS: tuple[ArtifactPattern, ...] = (
    ArtifactPattern(
        pattern_id="claude-dash-temp",
        kind=PatternKind.FILENAME,
        matcher="claude-*temp*",
        syntax=MatcherSyntax.GLOB,
        reason="Claude temporary file",
    ),
    ArtifactPattern(
        pattern_id="claude-tmp-log",
        kind=PatternKind.FILENAME,
        matcher=_name_regex(r"\.?claude[^/]*\.(?:tmp|temp|log)"),
        syntax=MatcherSyntax.REGEX,
        ignore_case=True,
        reason="Claude temporary/log file",
    ),
    ArtifactPattern(
        pattern_id="claude-tmp-marker",
        kind=PatternKind.FILENAME,
        matcher="*claude*.tmp",
        syntax=MatcherSyntax.GLOB,
        ignore_case=True,
        reason="Claude temporary file",
    ),
)


def _extended(pattern_id: str, body: str, reason: str) -> ArtifactPattern:
    return ArtifactPattern(
        pattern_id=pattern_id,
        kind=PatternKind.FILENAME,
        matcher=_name_regex(body),
        syntax=MatcherSyntax.REGEX,
        ignore_case=True,
        reason=reason,
    )


_CONFIG = "Claude configuration file (extended pattern)"
_BACKUP = "Claude backup file"
_LOCK = "Claude process/lock file"
_DEBUG = "Claude debug/diagnostic file"
_EXPORT = "Claude export/archive file"
_DOCS = "Claude documentation file"
_SCRIPT = "Claude script/utility file"
_NUMBERED = "Claude numbered/versioned file"
_OS = "Claude OS-specific file"
_IDE = "IDE Claude integration file"
_EXT_DIR = "Claude directory (extended pattern)"

EXTENDED_PATTERNS: tuple[ArtifactPattern, ...] = (
    _extended(
        "ext-config-separated",
        r"\.?claude[-_.][^/]*\.(?:json|yaml|yml|toml|ini|config)",
        _CONFIG,
    ),
    _extended("ext-config", r"\.?claude\.(?:json|yaml|yml|toml|ini|config)", _CONFIG),
    _extended(
        "ext-workspace-settings",
        r"claude[-_]?(?:config|settings|workspace|env)[^/]*",
        "Claude workspace/settings file",
    ),
    _extended(
        "ext-session-state",
        r"\.?claude[-_.]?(?:session|state|cache|history)[^/]*",
        "Claude session/state file",
    ),
    _extended(
        "ext-backup",
        r"\.?claude(?:[-_.])?[^/]*\.(?:bak|backup|old|orig|save)",
        _BACKUP,
    ),
    _extended(
        "ext-temp-working",
        r"\.?claude[-_.]?(?:temp|tmp|work|scratch|draft)[^/]*",
        "Claude temporary/working file",
    ),
    _extended(
        "ext-output-analysis",
        r"\.?claude[-_.]?(?:output|result|analysis|report)[^/]*",
        "Claude output/analysis file",
    ),
    _extended("ext-lock-suffix", r"\.?claude[^/]*\.(?:lock|pid|socket)", _LOCK),
    _extended("ext-lock-prefix", r"\.?claude[-_]?(?:lock|process|run)[^/]*", _LOCK),
    _extended("ext-debug-prefix", r"\.?claude[-_]?(?:debug|trace|profile|diagnostic)[^/]*", _DEBUG),
    _extended("ext-debug-suffix", r"\.?claude[^/]*\.(?:debug|trace|profile|diagnostic)", _DEBUG),
    _extended("ext-export-prefix", r"\.?claude[-_]?(?:export|archive|dump|snapshot)[^/]*", _EXPORT),
    _extended(
        "ext-export-suffix",
        r"\.?claude(?:[-_.])?[^/]*\.(?:export|archive|dump|snapshot)",
        _EXPORT,
    ),
    _extended(
        "ext-workspace-dir",
        r"\.?claude[-_]?(?:workspace|project|session|sessions|temp|cache|data)",
        "Claude workspace directory",
    ),
    _extended(
        "ext-docs",
        r"claude[-_.]?(?:notes?|docs?|readme|instructions?)[^/]*\.(?:md|txt|rst)",
        _DOCS,
    ),
    _extended("ext-dot-docs-separated", r"\.claude[-_.][^/]*\.(?:notes?|readme|md|txt|rst)", _DOCS),
    _extended("ext-dot-docs", r"\.claude\.(?:notes?|readme|md|txt|rst)", _DOCS),
    _extended("ext-script-prefix", r"\.?claude[-_]?(?:script|tool|utility|helper)[^/]*", _SCRIPT),
    _extended(
        "ext-script-suffix",
        r"\.?claude(?:[-_.])?[^/]*\.(?:sh|bat|ps1|py|js|ts)",
        _SCRIPT,
    ),
    _extended("ext-hidden", r"\.claude[a-z0-9_-]+", "Claude hidden/dot file"),
    _extended("ext-numbered", r"\.?claude[-_]?[^/]*[0-9]+[^/]*", _NUMBERED),
    _extended("ext-versioned", r"\.?claude[^/]*v[0-9]+[^/]*", _NUMBERED),
    _extended("ext-os-ds-store", r"\.?claude[^/]*\.DS_Store", _OS),
    _extended("ext-os-thumbs", r"\.?claude[^/]*\.Thumbs\.db", _OS),
    ArtifactPattern(
        pattern_id="ext-ide",
        kind=PatternKind.FILENAME,
        matcher=r"(?:^|/)\.(?:vscode|idea|eclipse)/[^/]*claude[^/]*$",
        syntax=MatcherSyntax.REGEX,
        ignore_case=True,
        reason=_IDE,
    ),
    ArtifactPattern(
        pattern_id="ext-dir",
        kind=PatternKind.DIRECTORY,
        matcher=r"\.?claude[-_].+",
        syntax=MatcherSyntax.REGEX,
        ignore_case=True,
        reason=_EXT_DIR,
    ),
)

# A literal robot emoji, or its UTF-8 bytes decoded as cp1252
_ROBOT = "(?:\U0001f916|ðŸ¤–)"

TRAILER_PATTERNS: tuple[ArtifactPattern, ...] = (
    ArtifactPattern(
        pattern_id="claude-code-generated",
        kind=PatternKind.CONTENT_REGEX,
        matcher=_ROBOT + r" ?Generated with \[Claude Code\]\([^)\n]+\)",
        reason="Claude Code generation attribution",
    ),
    ArtifactPattern(
        pattern_id="claude-coauthor",
        kind=PatternKind.CONTENT_REGEX,
        matcher=r"(?i:co-authored-by): Claude <noreply@anthropic\.com>",
        reason="Claude co-author trailer",
    ),
    ArtifactPattern(
        pattern_id="claude-emoji-attribution",
        kind=PatternKind.CONTENT_REGEX,
        matcher=_ROBOT + r"[^\n]*Claude[^\n]*",
        reason="Claude emoji attribution line",
    ),
    ArtifactPattern(
        pattern_id="claude-generated-generic",
        kind=PatternKind.CONTENT_REGEX,
        matcher=r"(?i:generated with claude)[^\n]*",
        reason="Generic Claude generation attribution",
    ),
)


def user_directory_patterns(names: Sequence[str]) -> tuple[ArtifactPattern, ...]:
    """Build literal directory rules for user-supplied directory names."""
    return tuple(
        ArtifactPattern(
            pattern_id=f"user-dir:{name}",
            kind=PatternKind.DIRECTORY,
            matcher=name,
            reason=USER_DIRECTORY_REASON,
        )
        for name in dict.fromkeys(names)
    )


def build_pattern_table(
    *,
    include_dirs: Sequence[str] = (),
    use_defaults: bool = True,
    include_all_common_patterns: bool = False,
) -> PatternTable:
    """Assemble the pattern table for one run.

    Order: user directories, default markers, extended patterns (only with
    include_all_common_patterns), default temp patterns, commit trailers.
    Extended patterns sit before the default temp rules so their more
    specific reasons win.

    Raises:
        CleanerError: If include_all_common_patterns is set without defaults
    """
    if include_all_common_patterns and not use_defaults:
        raise CleanerError(
            "--include-all-common-patterns and --no-defaults cannot be used together",
            "INVALID_OPTIONS",
        )

    patterns: list[ArtifactPattern] = list(user_directory_patterns(include_dirs))
    claimed = {PatternKind.CONTENT_REGEX}
    if include_dirs:
        claimed.add(PatternKind.DIRECTORY)

    if use_defaults:
        patterns.extend(DEFAULT_MARKER_PATTERNS)
        if include_all_common_patterns:
            patterns.extend(EXTENDED_PATTERNS)
        patterns.extend(DEFAULT_TEMP_PATTERNS)
        claimed.update({PatternKind.FILENAME, PatternKind.DIRECTORY})

    patterns.extend(TRAILER_PATTERNS)
    return PatternTable(patterns=tuple(patterns), claimed_kinds=frozenset(claimed))


DEFAULT_PATTERN_TABLE = build_pattern_table()
