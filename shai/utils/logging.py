"""Logging utilities for shai."""

import sys
import datetime
from typing import TextIO

from ..constants import (
    CLR_RESET, CLR_CYAN, CLR_BOLD_CYAN, CLR_GREEN, CLR_BOLD_GREEN,
    CLR_MAGENTA, CLR_BOLD_MAGENTA, CLR_YELLOW, CLR_BOLD_YELLOW,
    CLR_WHITE, CLR_BOLD_WHITE, CLR_RED, CLR_BOLD_RED
)

# level -> (header colour, content colour)
LEVEL_COLORS = {
    "System": (CLR_CYAN, CLR_BOLD_CYAN),
    "User": (CLR_GREEN, CLR_BOLD_GREEN),
    "Agent": (CLR_MAGENTA, CLR_BOLD_MAGENTA),
    "Command": (CLR_YELLOW, CLR_BOLD_YELLOW),
    "Error": (CLR_RED, CLR_BOLD_RED),
    "Warning": (CLR_YELLOW, CLR_BOLD_YELLOW),
    "Debug": (CLR_WHITE, CLR_BOLD_WHITE),
}

STDERR_LEVELS = frozenset({"Error", "Warning"})


class Logger:
    """Colour-coded console output for shai.

    Levelled messages carry a timestamp header; ``marker`` prints bare
    progress lines (step counters, thinking/running notices) to stdout.
    """

    def __init__(self, debug_enabled: bool = False):
        self.debug_enabled = debug_enabled

    def set_debug(self, enabled: bool) -> None:
        """Enable or disable debug logging."""
        self.debug_enabled = enabled

    @staticmethod
    def get_current_timestamp() -> str:
        """Returns the current timestamp in YYYY-MM-DD HH:MM:SS format."""
        return datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')

    def log_message(self, level: str, message: str) -> None:
        """Write ``message`` under a ``[timestamp] [level]:`` header.

        Continuation lines of a multi-line message are indented to line up
        with the first one.
        """
        if level == "Debug" and not self.debug_enabled:
            return

        header_color, content_color = LEVEL_COLORS.get(level, (CLR_WHITE, CLR_BOLD_WHITE))
        stream: TextIO = sys.stderr if level in STDERR_LEVELS else sys.stdout

        header = f"[{self.get_current_timestamp()}] [{level}]: "
        indent = ' ' * len(header)

        lines = message.splitlines() or [""]
        print(f"{header_color}{header}{CLR_RESET}{content_color}{lines[0]}{CLR_RESET}", file=stream)
        for line in lines[1:]:
            print(f"{indent}{content_color}{line}{CLR_RESET}", file=stream)

        stream.flush()

    def marker(self, text: str, color: str = CLR_BOLD_CYAN) -> None:
        """Print a progress line without a header."""
        print(f"{color}{text}{CLR_RESET}", file=sys.stdout, flush=True)

    def system(self, message: str) -> None:
        self.log_message("System", message)

    def user(self, message: str) -> None:
        """Log what the operator typed."""
        self.log_message("User", message)

    def agent(self, message: str) -> None:
        """Log a note attached to the model's decision."""
        self.log_message("Agent", message)

    def command(self, message: str) -> None:
        self.log_message("Command", message)

    def error(self, message: str) -> None:
        self.log_message("Error", message)

    def warning(self, message: str) -> None:
        self.log_message("Warning", message)

    def debug(self, message: str) -> None:
        self.log_message("Debug", message)


# Shared instance; the application switches debug on from flags or config
logger = Logger()
