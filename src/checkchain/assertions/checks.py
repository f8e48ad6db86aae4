"""Ready-made leaf assertions over files, shell commands and the environment.

Every factory returns an :class:`Assertion` whose condition only touches the
outside world when it is executed, so the same assertion can be re-run
after the file system or environment changes.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path

from checkchain.assertions.base import Assertion, Condition

logger = logging.getLogger(__name__)


def _run_command(command: str, workdir: str | Path, timeout: int) -> int | None:
    """Run ``command`` through the shell. Returns the exit code, or None on timeout."""
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=workdir,
            timeout=timeout,
            capture_output=True,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout}s: {command}")
        return None

    logger.info(f"Command exited with code {result.returncode}: {command}")
    if result.stdout:
        logger.debug(f"stdout: {result.stdout.decode('utf-8', errors='replace')}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr.decode('utf-8', errors='replace')}")
    return result.returncode


def file_exists(
    path: str, workdir: str | Path = ".", message: str | None = None
) -> Assertion:
    """Passes when ``workdir/path`` exists."""

    def check() -> bool:
        logger.info(f"Checking file_exists: {path}")
        exists = (Path(workdir) / path).exists()
        logger.info(f"File {path} exists={exists}")
        return exists

    return Assertion(
        Condition(check, label=f"file_exists:{path}"),
        message if message is not None else f"{path} does not exist",
    )


def file_contains(
    path: str, pattern: str, workdir: str | Path = ".", message: str | None = None
) -> Assertion:
    """Passes when ``workdir/path`` exists and matches the regex ``pattern``."""

    def check() -> bool:
        target = Path(workdir) / path
        logger.info(f"Checking file_contains: {path} for pattern '{pattern}'")
        if not target.exists():
            logger.warning(f"File {path} not found")
            return False
        matched = re.search(pattern, target.read_text()) is not None
        logger.info(f"Pattern '{pattern}' matched={matched} in {path}")
        return matched

    return Assertion(
        Condition(check, label=f"file_contains:{path}"),
        message
        if message is not None
        else f"{path} does not match pattern '{pattern}'",
    )


def command_succeeds(
    command: str,
    workdir: str | Path = ".",
    timeout: int = 60,
    message: str | None = None,
) -> Assertion:
    """Passes when the shell command exits with code 0. A timeout fails."""

    def check() -> bool:
        logger.info(f"Running command_succeeds: {command}")
        return _run_command(command, workdir, timeout) == 0

    return Assertion(
        Condition(check, label=f"command_succeeds:{command}"),
        message if message is not None else f"command failed: {command}",
    )


def command_fails(
    command: str,
    workdir: str | Path = ".",
    timeout: int = 60,
    message: str | None = None,
) -> Assertion:
    """Passes when the shell command exits non-zero. A timeout counts as failing."""

    def check() -> bool:
        logger.info(f"Running command_fails: {command}")
        returncode = _run_command(command, workdir, timeout)
        return returncode is None or returncode != 0

    return Assertion(
        Condition(check, label=f"command_fails:{command}"),
        message
        if message is not None
        else f"command unexpectedly succeeded: {command}",
    )


def env_set(name: str, message: str | None = None) -> Assertion:
    """Passes when the environment variable ``name`` is set and non-empty."""

    def check() -> bool:
        present = bool(os.environ.get(name))
        logger.info(f"Environment variable {name} set={present}")
        return present

    return Assertion(
        Condition(check, label=f"env_set:{name}"),
        message
        if message is not None
        else f"environment variable {name} is not set",
    )
