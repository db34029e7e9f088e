"""Helper utility functions for shai."""

import os
import platform
from pathlib import Path
from typing import Mapping, Optional

from ..constants import DEFAULT_POSIX_SHELL, UNKNOWN_WORKING_DIRECTORY
from ..utils.logging import logger


def get_os_name() -> str:
    """Returns the lower-cased platform name (linux, darwin, windows, ...)."""
    return platform.system().lower()


def detect_shell(os_name: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Pick the shell used to run commands on this platform.

    Windows gets powershell.exe when $SHELL mentions PowerShell and cmd.exe
    otherwise. Everywhere else $SHELL is used as-is, falling back to bash.
    """
    os_name = os_name if os_name is not None else get_os_name()
    env = env if env is not None else os.environ
    user_shell = env.get("SHELL", "")

    if os_name == "windows":
        if "powershell" in user_shell.lower():
            return "powershell.exe"
        return "cmd.exe"

    return user_shell or DEFAULT_POSIX_SHELL


def get_working_directory() -> str:
    """Current working directory, or a placeholder if it cannot be read."""
    try:
        return os.getcwd()
    except OSError as e:
        logger.debug(f"Could not read working directory: {e}")
        return UNKNOWN_WORKING_DIRECTORY


def ensure_directory_exists(directory: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Directory ensured: {directory}")
    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {e}")
        raise
