import logging
import os
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from claude_cleaner.errors import CleanerError

logger = logging.getLogger(__name__)

REPO_CONFIG_FILENAME = ".claude-cleaner.toml"
CACHE_DIR_ENV_VAR = "CLAUDE_CLEANER_CACHE_DIR"
BFG_VERSION = "1.14.0"
BFG_JAR_NAME = f"bfg-{BFG_VERSION}.jar"

_RISKY_DIRECTORY_NAMES = frozenset({"temp", "tmp", "cache", "build"})


@dataclass(frozen=True)
class RepoConfig:
    """In-memory representation of `.claude-cleaner.toml`.

    Example:
      include_dirs = ["docs/ai", "scratch"]
      include_all_common_patterns = true
      use_defaults = true
    """

    include_dirs: tuple[str, ...]
    include_all_common_patterns: bool
    use_defaults: bool


DEFAULT_REPO_CONFIG = RepoConfig(
    include_dirs=(),
    include_all_common_patterns=False,
    use_defaults=True,
)


@dataclass(frozen=True)
class CleanOptions:
    """Resolved options for one `clean` run.

    use_defaults is None when neither the command line nor the repository
    config decided it; resolve_options() turns that into True.
    """

    execute: bool = False
    files_only: bool = False
    commits_only: bool = False
    branch: str | None = None
    include_dirs: tuple[str, ...] = ()
    include_dirs_file: Path | None = None
    use_defaults: bool | None = None
    include_all_common_patterns: bool = False
    interactive: bool = False
    auto_install: bool = False

    @property
    def dry_run(self) -> bool:
        return not self.execute


def load_repo_config(repo_path: Path) -> RepoConfig:
    """Load `.claude-cleaner.toml` from the repository root, or return defaults."""
    cfg_path = repo_path / REPO_CONFIG_FILENAME
    if not cfg_path.exists():
        return DEFAULT_REPO_CONFIG

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise CleanerError(f"Invalid {REPO_CONFIG_FILENAME}: {e}", "INVALID_CONFIG", e) from e

    include_dirs = data.get("include_dirs", [])
    if not isinstance(include_dirs, list):
        raise CleanerError(
            f"Invalid {REPO_CONFIG_FILENAME}: include_dirs must be a list of strings",
            "INVALID_CONFIG",
        )

    logger.debug("Loaded repository config from %s", cfg_path)
    return RepoConfig(
        include_dirs=tuple(str(x) for x in include_dirs),
        include_all_common_patterns=bool(data.get("include_all_common_patterns", False)),
        use_defaults=bool(data.get("use_defaults", True)),
    )


def load_directory_patterns(path: Path) -> list[str]:
    """Read directory names from a file, one per line.

    Blank lines and lines starting with `#` are skipped, surrounding
    whitespace (including a CR from CRLF line endings) is stripped.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CleanerError(
            f"Failed to read include-dirs file {path}: {e}", "FILE_READ_ERROR", e
        ) from e

    patterns: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


def validate_directory_patterns(patterns: Sequence[str]) -> list[str]:
    """Reject unsafe directory names and collect warnings for risky ones.

    Returns:
        Warning messages for names that are allowed but likely too broad

    Raises:
        CleanerError: INVALID_PATTERN for the first unsafe name
    """
    warnings: list[str] = []
    for pattern in patterns:
        name = pattern.strip()
        if not name:
            raise CleanerError("Empty patterns are not allowed", "INVALID_PATTERN")
        if ".." in name:
            raise CleanerError(
                f"Invalid pattern '{pattern}': parent directory references (..) are not allowed",
                "INVALID_PATTERN",
            )
        if name.startswith("/") or (len(name) > 1 and name[1] == ":"):
            raise CleanerError(
                f"Invalid pattern '{pattern}': absolute paths are not allowed",
                "INVALID_PATTERN",
            )
        if "/" in name or "\\" in name:
            raise CleanerError(
                f"Invalid pattern '{pattern}': path separators are not allowed, "
                "use directory names only",
                "INVALID_PATTERN",
            )
        if set(name) == {"*"}:
            raise CleanerError(
                f"Invalid pattern '{pattern}': wildcard-only patterns are too dangerous",
                "INVALID_PATTERN",
            )
        if len(name) == 1 or name.lower() in _RISKY_DIRECTORY_NAMES:
            warnings.append(
                f"Pattern '{name}' may match many directories. "
                "Use dry-run to preview before executing."
            )
    return warnings


def validate_options(options: CleanOptions) -> None:
    if options.files_only and options.commits_only:
        raise CleanerError(
            "--files-only and --commits-only cannot be used together", "INVALID_OPTIONS"
        )
    if options.include_all_common_patterns and options.use_defaults is False:
        raise CleanerError(
            "--include-all-common-patterns and --no-defaults cannot be used together",
            "INVALID_OPTIONS",
        )


def resolve_options(options: CleanOptions, repo_config: RepoConfig) -> CleanOptions:
    """Merge command-line options with repository config.

    Merge rules:
    - include_dirs: config names first, then command-line names, then names
      from the include-dirs file; duplicates dropped, order kept
    - use_defaults: command line wins when given, else config
    - include_all_common_patterns: enabled by either source
    """
    names = list(repo_config.include_dirs) + list(options.include_dirs)
    if options.include_dirs_file is not None:
        names.extend(load_directory_patterns(options.include_dirs_file))
    names = [name.strip() for name in names]

    use_defaults = options.use_defaults
    if use_defaults is None:
        use_defaults = repo_config.use_defaults

    resolved = replace(
        options,
        include_dirs=tuple(dict.fromkeys(names)),
        use_defaults=use_defaults,
        include_all_common_patterns=(
            options.include_all_common_patterns or repo_config.include_all_common_patterns
        ),
    )
    validate_options(resolved)
    return resolved


def get_cache_dir(env: Mapping[str, str] | None = None) -> Path:
    environ = env if env is not None else os.environ
    override = environ.get(CACHE_DIR_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".cache" / "claude-cleaner"


def get_bfg_jar_path(cache_dir: Path) -> Path:
    return cache_dir / BFG_JAR_NAME
