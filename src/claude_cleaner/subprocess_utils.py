"""Subprocess helpers that attach operation context to failures."""

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy the current environment with interactive git prompts disabled."""
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    *,
    cmd: list[str],
    operation_context: str,
    cwd: Path | None = None,
    input: str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command with check=True, re-raising failures with context.

    Args:
        cmd: Command and arguments
        operation_context: Short description of what the command does, used
            in the error message (e.g. "list commits on main")
        cwd: Working directory
        input: Text passed on stdin
        env: Environment for the child process (defaults to the current one)
        timeout: Seconds before the command is killed

    Returns:
        The completed process with captured text stdout/stderr

    Raises:
        RuntimeError: If the command exits non-zero, cannot be found, or
            times out. The original exception is chained as __cause__.
    """
    logger.debug("Running (%s): %s", operation_context, " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            input=input,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        command = " ".join(cmd)
        message = f"Failed to {operation_context}\nCommand: {command}\nExit code: {e.returncode}"
        if stderr:
            message += f"\nstderr: {stderr}"
        raise RuntimeError(message) from e
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: command not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(f"Failed to {operation_context}: timed out after {timeout}s") from e
