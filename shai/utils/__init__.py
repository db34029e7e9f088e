"""Utility functions and helpers for shai."""

from .logging import logger, Logger
from .helpers import (
    get_os_name,
    detect_shell,
    get_working_directory,
    ensure_directory_exists,
)

__all__ = [
    "logger",
    "Logger",
    "get_os_name",
    "detect_shell",
    "get_working_directory",
    "ensure_directory_exists",
]
