"""Subprocess execution helpers for git operations."""

import asyncio
import logging
from typing import Any, Dict, List

from verified_sync.github.errors import ProcessError

logger = logging.getLogger(__name__)

GIT_BINARY = "git"


async def run_subprocess(
    cmd: List[str],
    cwd: str,
    fail_on_stderr: bool = False,
) -> Dict[str, Any]:
    """Run subprocess and capture its output.

    Args:
        cmd: Command and arguments list
        cwd: Working directory
        fail_on_stderr: Whether any output on stderr counts as a failure

    Returns:
        Dictionary with returncode, stdout, stderr

    Raises:
        ProcessError: If the command fails
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )
    stdout, stderr = await process.communicate()
    stdout_str = stdout.decode()
    stderr_str = stderr.decode()

    failed = process.returncode != 0 or (fail_on_stderr and stderr_str)
    if failed:
        error = ProcessError(cmd, process.returncode, stderr_str)
        logger.error(f"Subprocess error: {error}")
        raise error

    return {
        "returncode": process.returncode,
        "stdout": stdout_str,
        "stderr": stderr_str,
    }


async def run_git_cmd(
    args: List[str], cwd: str, fail_on_stderr: bool = False
) -> str:
    """Run a git command in the given repository and return its stdout.

    Args:
        args: Git command arguments (without 'git' prefix)
        cwd: Repository directory
        fail_on_stderr: Whether any output on stderr counts as a failure

    Returns:
        Captured stdout text
    """
    result = await run_subprocess(
        [GIT_BINARY] + args, cwd=cwd, fail_on_stderr=fail_on_stderr
    )
    return result["stdout"]
