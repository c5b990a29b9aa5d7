"""Tests for dependency checks and installation."""

import pytest

from claude_cleaner.config import get_bfg_jar_path
from claude_cleaner.dependency_manager import (
    BFG_DOWNLOAD_URL,
    DependencyCheckResult,
    check_all,
    check_dependency,
    check_for_missing_dependencies,
    ensure_mise,
    format_check_result,
    install_all,
    install_java,
    parse_java_version,
)
from claude_cleaner.errors import CleanerError
from claude_cleaner.gateway.tools.fake import FakeToolEnvironment
from tests.test_utils.context_builders import CACHE_DIR, tools_with_all_dependencies


def test_all_tools_available() -> None:
    """Every tool is found with its version."""
    results = check_all(tools_with_all_dependencies(), cache_dir=CACHE_DIR)

    assert [r.tool for r in results] == ["git", "java", "bfg", "mise"]
    assert all(r.available for r in results)
    by_tool = {r.tool: r for r in results}
    assert by_tool["git"].version == "2.43.0"
    assert by_tool["java"].version == "17.0.2"
    assert by_tool["bfg"].version == "1.14.0"
    assert by_tool["mise"].version == "2024.1.0"


def test_missing_git() -> None:
    """git missing from PATH is reported unavailable."""
    result = check_dependency(FakeToolEnvironment(), "git", cache_dir=CACHE_DIR)

    assert not result.available
    assert result.required


def test_java_version_probe_failure_is_unavailable() -> None:
    """A java binary that cannot report its version is unusable."""
    tools = FakeToolEnvironment(executables={"java": "/usr/bin/java"})

    result = check_dependency(tools, "java", cache_dir=CACHE_DIR)

    assert not result.available
    assert result.path == "/usr/bin/java"


def test_mise_is_optional() -> None:
    """mise is not required to run the cleaner."""
    result = check_dependency(FakeToolEnvironment(), "mise", cache_dir=CACHE_DIR)

    assert not result.available
    assert not result.required


def test_unknown_tool() -> None:
    """Probing an unknown tool is a programming error."""
    with pytest.raises(ValueError):
        check_dependency(FakeToolEnvironment(), "svn", cache_dir=CACHE_DIR)


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ('openjdk version "17.0.2" 2022-01-18', "17.0.2"),
        ('java version "1.8.0_381"', "1.8.0_381"),
        ("something unexpected", "something unexpected"),
        ("", "unknown"),
    ],
)
def test_parse_java_version(output: str, expected: str) -> None:
    """The quoted version is extracted from java -version output."""
    assert parse_java_version(output) == expected


def test_ensure_mise_returns_existing() -> None:
    """An installed mise is used as-is."""
    tools = FakeToolEnvironment(executables={"mise": "/usr/bin/mise"})

    assert ensure_mise(tools) == "/usr/bin/mise"
    assert tools.commands_run == []


def test_ensure_mise_installs_on_linux() -> None:
    """mise is installed with its shell installer when missing."""
    tools = FakeToolEnvironment(installs={"install mise": {"mise": "/opt/mise"}})

    assert ensure_mise(tools) == "/opt/mise"
    assert tools.commands_run == ["install mise"]


def test_ensure_mise_unsupported_platform() -> None:
    """Windows gets manual installation instructions."""
    tools = FakeToolEnvironment(platform_name="win32")

    with pytest.raises(CleanerError) as exc_info:
        ensure_mise(tools)

    assert exc_info.value.code == "UNSUPPORTED_PLATFORM"
    assert tools.commands_run == []


def test_ensure_mise_installer_failure() -> None:
    """A failing installer is MISE_INSTALL_FAILED."""
    tools = FakeToolEnvironment(failing_commands={"install mise"})

    with pytest.raises(CleanerError) as exc_info:
        ensure_mise(tools)

    assert exc_info.value.code == "MISE_INSTALL_FAILED"


def test_install_java_runs_mise_steps_in_order() -> None:
    """Java is installed, made the global default, then shims refreshed."""
    tools = FakeToolEnvironment()

    install_java(tools, "/usr/bin/mise")

    assert tools.commands_run == [
        "install java@17",
        "set java@17 as global default",
        "refresh mise shims",
    ]


@pytest.mark.parametrize(
    ("failing", "code"),
    [
        ("install java@17", "JAVA_INSTALL_FAILED"),
        ("set java@17 as global default", "JAVA_CONFIG_FAILED"),
    ],
)
def test_install_java_failures(failing: str, code: str) -> None:
    """Install and configure failures carry distinct codes."""
    tools = FakeToolEnvironment(failing_commands={failing})

    with pytest.raises(CleanerError) as exc_info:
        install_java(tools, "/usr/bin/mise")

    assert exc_info.value.code == code


def test_install_java_reshim_failure_only_warns() -> None:
    """A failed reshim does not abort the install."""
    tools = FakeToolEnvironment(failing_commands={"refresh mise shims"})

    install_java(tools, "/usr/bin/mise")

    assert tools.commands_run[-1] == "refresh mise shims"


def test_install_all_installs_java_and_downloads_bfg() -> None:
    """Missing java and BFG are installed, then everything is re-checked."""
    tools = FakeToolEnvironment(
        executables={"git": "/usr/bin/git"},
        version_outputs={
            ("/usr/bin/git", "--version"): "git version 2.43.0",
            ("/usr/bin/java", "-version"): 'openjdk version "17.0.9"',
        },
        installs={
            "install mise": {"mise": "/opt/mise"},
            "set java@17 as global default": {"java": "/usr/bin/java"},
        },
    )

    results = install_all(tools, cache_dir=CACHE_DIR)

    assert tools.commands_run[0] == "install mise"
    assert tools.downloads == [(BFG_DOWNLOAD_URL, get_bfg_jar_path(CACHE_DIR))]
    assert all(r.available for r in results if r.required)


def test_install_all_skips_present_tools() -> None:
    """Nothing is installed when everything is already there."""
    tools = tools_with_all_dependencies()

    install_all(tools, cache_dir=CACHE_DIR)

    assert tools.commands_run == []
    assert tools.downloads == []


def test_bfg_download_failure() -> None:
    """Download errors become BFG_DOWNLOAD_FAILED."""
    tools = FakeToolEnvironment(
        executables={"java": "/usr/bin/java"},
        version_outputs={("/usr/bin/java", "-version"): 'openjdk version "17.0.2"'},
        download_raises=RuntimeError("HTTP 503"),
    )

    with pytest.raises(CleanerError) as exc_info:
        install_all(tools, cache_dir=CACHE_DIR)

    assert exc_info.value.code == "BFG_DOWNLOAD_FAILED"


def test_missing_dependencies_are_fatal_in_execute_mode() -> None:
    """Execute mode refuses to run without required tools."""
    results = [
        DependencyCheckResult(tool="git", available=True, version="2.43.0"),
        DependencyCheckResult(tool="java", available=False, error="java not found"),
        DependencyCheckResult(tool="mise", available=False, error="mise not installed"),
    ]

    with pytest.raises(CleanerError) as exc_info:
        check_for_missing_dependencies(results, dry_run=False)

    assert exc_info.value.code == "MISSING_DEPENDENCIES"
    assert "java" in exc_info.value.message
    assert "mise" not in exc_info.value.message


def test_missing_dependencies_only_warn_in_dry_run() -> None:
    """Dry run continues without the tools it will not use."""
    results = [DependencyCheckResult(tool="bfg", available=False, error="missing")]

    check_for_missing_dependencies(results, dry_run=True)


def test_format_check_result() -> None:
    """Available and missing tools render differently."""
    ok = format_check_result(DependencyCheckResult(tool="git", available=True, version="2.43.0"))
    missing = format_check_result(
        DependencyCheckResult(tool="mise", available=False, error="mise not installed")
    )

    assert "git 2.43.0" in ok
    assert "mise (optional): mise not installed" in missing
