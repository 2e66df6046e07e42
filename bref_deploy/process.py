"""Synchronous execution of external commands.

Commands run to completion without a timeout. A non-zero exit code raises
ProcessFailedError carrying the command and its captured output, which
aborts the pipeline.
"""

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from bref_deploy.exceptions import ProcessFailedError
from bref_deploy.logging import get_logger

logger = get_logger(__name__)


def _check(command: str, result: subprocess.CompletedProcess[str]) -> str:
    if result.stdout:
        logger.debug("%s\n%s", command, result.stdout.rstrip())
    if result.returncode != 0:
        output = (result.stdout + result.stderr).strip()
        raise ProcessFailedError(command, result.returncode, output)
    return result.stdout


def run_locally(command: str, cwd: Path) -> str:
    """Run a shell command string in `cwd` and return its standard output."""
    logger.info("Running `%s` in %s", command, cwd)
    result = subprocess.run(command, shell=True, cwd=cwd, capture_output=True, text=True, check=False)
    return _check(command, result)


def run_process(args: Sequence[str], cwd: Path) -> str:
    """Run a program with discrete arguments (no shell) and return its standard output."""
    command = shlex.join(args)
    logger.info("Running `%s` in %s", command, cwd)
    try:
        result = subprocess.run(list(args), cwd=cwd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ProcessFailedError(command, 127, str(e)) from e
    return _check(command, result)


__all__ = ["run_locally", "run_process"]
