"""Dependency checks and installation for git, Java and the BFG jar.

Java is installed through mise (https://mise.jdx.dev) when missing; the BFG
jar is downloaded from Maven Central into the cache directory.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import click

from claude_cleaner.config import BFG_VERSION, get_bfg_jar_path
from claude_cleaner.errors import CleanerError
from claude_cleaner.gateway.tools.abc import ToolEnvironment
from claude_cleaner.output import user_output

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("git", "java", "bfg")
ALL_TOOLS = (*REQUIRED_TOOLS, "mise")

JAVA_VERSION = "java@17"
MISE_INSTALL_SCRIPT = "curl -fsSL https://mise.run | sh"
BFG_DOWNLOAD_URL = (
    f"https://repo1.maven.org/maven2/com/madgag/bfg/{BFG_VERSION}/bfg-{BFG_VERSION}.jar"
)

_SUPPORTED_INSTALL_PLATFORMS = ("linux", "darwin")
_JAVA_VERSION_RE = re.compile(r'version "([^"]+)"')


@dataclass(frozen=True)
class DependencyCheckResult:
    """Result of probing one tool.

    Attributes:
        tool: Tool name ("git", "java", "bfg" or "mise")
        available: Whether the tool can be used
        version: Detected version, when known
        path: Executable or jar location, when found
        error: Why the tool is unavailable
    """

    tool: str
    available: bool
    version: str | None = None
    path: str | None = None
    error: str | None = None

    @property
    def required(self) -> bool:
        return self.tool in REQUIRED_TOOLS


def _mise_locations() -> list[Path]:
    return [Path.home() / ".local" / "bin" / "mise"]


def _java_shim_locations() -> list[Path]:
    return [Path.home() / ".local" / "share" / "mise" / "shims" / "java"]


def _find_executable(tools: ToolEnvironment, name: str, fallbacks: list[Path]) -> str | None:
    found = tools.which(name)
    if found is not None:
        return found
    for candidate in fallbacks:
        if tools.file_exists(candidate):
            return str(candidate)
    return None


def find_mise(tools: ToolEnvironment) -> str | None:
    return _find_executable(tools, "mise", _mise_locations())


def find_java(tools: ToolEnvironment) -> str | None:
    return _find_executable(tools, "java", _java_shim_locations())


def parse_java_version(output: str) -> str:
    """Extract the version from `java -version` output ('openjdk version "17.0.2" ...')."""
    match = _JAVA_VERSION_RE.search(output)
    if match:
        return match.group(1)
    return output.splitlines()[0].strip() if output else "unknown"


def check_dependency(
    tools: ToolEnvironment, tool: str, *, cache_dir: Path
) -> DependencyCheckResult:
    """Probe a single tool."""
    if tool == "git":
        path = tools.which("git")
        if path is None:
            return DependencyCheckResult(tool="git", available=False, error="git not found in PATH")
        output = tools.get_version_output([path, "--version"]) or ""
        version = output.removeprefix("git version ").strip() or "unknown"
        return DependencyCheckResult(tool="git", available=True, version=version, path=path)

    if tool == "java":
        path = find_java(tools)
        if path is None:
            return DependencyCheckResult(
                tool="java", available=False, error="java not found in PATH or mise shims"
            )
        output = tools.get_version_output([path, "-version"])
        if output is None:
            return DependencyCheckResult(
                tool="java", available=False, path=path, error="java -version failed"
            )
        return DependencyCheckResult(
            tool="java", available=True, version=parse_java_version(output), path=path
        )

    if tool == "bfg":
        jar = get_bfg_jar_path(cache_dir)
        if not tools.file_exists(jar):
            return DependencyCheckResult(
                tool="bfg", available=False, path=str(jar), error=f"BFG jar not found at {jar}"
            )
        return DependencyCheckResult(tool="bfg", available=True, version=BFG_VERSION, path=str(jar))

    if tool == "mise":
        path = find_mise(tools)
        if path is None:
            return DependencyCheckResult(tool="mise", available=False, error="mise not installed")
        output = tools.get_version_output([path, "--version"]) or ""
        version = output.split()[0] if output else "unknown"
        return DependencyCheckResult(tool="mise", available=True, version=version, path=path)

    raise ValueError(f"Unknown tool: {tool}")


def check_all(tools: ToolEnvironment, *, cache_dir: Path) -> list[DependencyCheckResult]:
    return [check_dependency(tools, tool, cache_dir=cache_dir) for tool in ALL_TOOLS]


def ensure_mise(tools: ToolEnvironment) -> str:
    """Return the mise executable, installing mise first when needed."""
    existing = find_mise(tools)
    if existing is not None:
        return existing

    platform = tools.platform()
    if not platform.startswith(_SUPPORTED_INSTALL_PLATFORMS):
        raise CleanerError(
            f"Automatic installation is not supported on {platform}. "
            "Install Java 17 and git manually.",
            "UNSUPPORTED_PLATFORM",
        )

    user_output("Installing mise...")
    try:
        tools.run_shell(MISE_INSTALL_SCRIPT, description="install mise")
    except RuntimeError as e:
        raise CleanerError(f"Failed to install mise: {e}", "MISE_INSTALL_FAILED", e) from e

    installed = find_mise(tools)
    if installed is None:
        raise CleanerError(
            "mise installer finished but the mise executable was not found",
            "MISE_INSTALL_FAILED",
        )
    return installed


def install_java(tools: ToolEnvironment, mise: str) -> None:
    user_output(f"Installing {JAVA_VERSION} with mise...")
    try:
        tools.run_command([mise, "install", JAVA_VERSION], description=f"install {JAVA_VERSION}")
    except RuntimeError as e:
        raise CleanerError(f"Failed to install Java: {e}", "JAVA_INSTALL_FAILED", e) from e

    try:
        tools.run_command(
            [mise, "use", "-g", JAVA_VERSION], description=f"set {JAVA_VERSION} as global default"
        )
    except RuntimeError as e:
        raise CleanerError(f"Failed to configure Java: {e}", "JAVA_CONFIG_FAILED", e) from e

    try:
        tools.run_command([mise, "reshim"], description="refresh mise shims")
    except RuntimeError as e:
        logger.debug("mise reshim failed: %s", e)
        user_output(
            click.style("Warning: ", fg="yellow") + "mise reshim failed; java may need a new shell"
        )


def download_bfg(tools: ToolEnvironment, *, cache_dir: Path) -> Path:
    jar = get_bfg_jar_path(cache_dir)
    if tools.file_exists(jar):
        return jar
    user_output(f"Downloading BFG Repo-Cleaner {BFG_VERSION}...")
    try:
        tools.download(BFG_DOWNLOAD_URL, jar)
    except RuntimeError as e:
        raise CleanerError(f"Failed to download BFG: {e}", "BFG_DOWNLOAD_FAILED", e) from e
    return jar


def install_all(tools: ToolEnvironment, *, cache_dir: Path) -> list[DependencyCheckResult]:
    """Install whatever is missing, then re-check everything.

    git is never installed; a missing git is reported by the final check.
    """
    if not check_dependency(tools, "java", cache_dir=cache_dir).available:
        mise = ensure_mise(tools)
        install_java(tools, mise)

    if not check_dependency(tools, "bfg", cache_dir=cache_dir).available:
        download_bfg(tools, cache_dir=cache_dir)

    return check_all(tools, cache_dir=cache_dir)


def format_check_result(result: DependencyCheckResult) -> str:
    if result.available:
        icon = click.style("✓", fg="green")
        detail = f" {result.version}" if result.version else ""
        location = click.style(f" ({result.path})", dim=True) if result.path else ""
        return f"{icon} {result.tool}{detail}{location}"

    icon = click.style("✗", fg="red" if result.required else "yellow")
    suffix = "" if result.required else " (optional)"
    return f"{icon} {result.tool}{suffix}: {result.error}"


def check_for_missing_dependencies(
    results: list[DependencyCheckResult], *, dry_run: bool
) -> None:
    """Report missing required tools; in execute mode they are fatal.

    Raises:
        CleanerError: MISSING_DEPENDENCIES when not dry_run and a required
            tool is unavailable
    """
    missing = [r for r in results if r.required and not r.available]
    if not missing:
        return

    user_output(click.style("Missing dependencies:", fg="yellow", bold=True))
    for result in missing:
        user_output(f"  {format_check_result(result)}")

    names = ", ".join(r.tool for r in missing)
    if dry_run:
        user_output(f"Dry run continues; {names} will be required with --execute.")
        return

    raise CleanerError(
        f"Missing required dependencies: {names}. "
        "Re-run with --auto-install or install them manually.",
        "MISSING_DEPENDENCIES",
    )
