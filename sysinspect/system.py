"""
Command execution and pseudo-file access.

These wrappers are the only places where sysinspect blocks on the
operating system. Decoders receive their complete input from here.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from .constants import CMD_SUDO, DEFAULT_COMMAND_TIMEOUT, DEFAULT_USE_SUDO
from .errors import CommandError, IoError
from .settings import get_setting

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def run_command(
    args: Sequence[str],
    sudo: Optional[bool] = None,
    timeout: Optional[float] = None,
) -> list[str]:
    """
    Run a system utility and return its standard output.

    Args:
        args: Executable and arguments.
        sudo: Prefix the command with sudo. Defaults to the 'use_sudo' setting.
        timeout: Seconds before the process is killed. Defaults to the
            'command_timeout' setting.

    Returns:
        Output lines without trailing newlines. Indentation is preserved.

    Raises:
        CommandError: If the executable is missing, times out or exits
            with a non-zero status.
    """
    if not args:
        raise CommandError([], "empty command")
    if sudo is None:
        sudo = get_setting('use_sudo', DEFAULT_USE_SUDO)
    if timeout is None:
        timeout = get_setting('command_timeout', DEFAULT_COMMAND_TIMEOUT)

    cmd = list(args)
    if shutil.which(cmd[0]) is None:
        logger.error(f"{cmd[0]} not found in PATH")
        raise CommandError(cmd, "executable not found")
    if sudo:
        cmd = [CMD_SUDO, '-n'] + cmd

    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.error(f"{cmd[0]} timed out after {timeout}s")
        raise CommandError(cmd, f"timed out after {timeout}s")
    except OSError as e:
        logger.error(f"Failed to run {cmd[0]}: {e}")
        raise CommandError(cmd, str(e))

    if result.returncode != 0:
        stderr = result.stderr.strip()
        logger.error(f"{cmd[0]} exited with status {result.returncode}: {stderr}")
        raise CommandError(
            cmd,
            f"exited with status {result.returncode}",
            returncode=result.returncode,
            stderr=stderr,
        )

    return result.stdout.splitlines()


def read_lines(path: PathLike) -> list[str]:
    """Read a text file as a list of lines."""
    return read_text(path).splitlines()


def read_text(path: PathLike) -> str:
    """
    Read a text file.

    Raises:
        IoError: If the path is missing or unreadable.
    """
    try:
        return Path(path).read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        raise IoError(str(path), e.strerror or str(e))


def read_bytes(path: PathLike) -> bytes:
    """
    Read a binary file.

    Raises:
        IoError: If the path is missing or unreadable.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IoError(str(path), e.strerror or str(e))


def read_attribute(path: PathLike) -> Optional[str]:
    """
    Read a single-value sysfs attribute.

    Drivers omit attributes they do not support, and some (a loopback
    interface's speed) fail on read, so a missing or unreadable attribute
    is not an error here.

    Returns:
        The stripped content, or None when there is nothing to read.
    """
    try:
        text = read_text(path).strip()
    except IoError as e:
        logger.debug(f"Attribute unavailable: {e}")
        return None
    return text or None
