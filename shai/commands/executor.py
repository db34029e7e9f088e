"""Command execution utilities for shai."""

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import List, Optional

from ..config.templates import (
    SUCCESS_OUTPUT_TEMPLATE, FAILURE_OUTPUT_TEMPLATE, FAILURE_STDOUT_TEMPLATE
)
from ..utils.helpers import get_os_name
from ..utils.logging import logger


class ExecutionStatus(Enum):
    """Outcome of one shell invocation as reported to the model."""
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ExecutionResult:
    """Represents the result of a command execution."""
    status: ExecutionStatus
    combined_output: str
    exit_code: Optional[int] = None

    @property
    def success(self) -> bool:
        """Whether the command executed successfully."""
        return self.status is ExecutionStatus.SUCCESS


def build_shell_invocation(command: str, shell: str, os_name: Optional[str] = None) -> List[str]:
    """Argument vector that runs ``command`` verbatim through ``shell``.

    POSIX shells get ``-c``. On Windows, PowerShell gets ``-Command`` and
    everything else is handed to ``cmd.exe /C``.
    """
    os_name = os_name if os_name is not None else get_os_name()
    if os_name != "windows":
        return [shell, "-c", command]

    shell_name = PurePath(shell.replace("\\", "/")).name.lower()
    if shell_name in ("powershell.exe", "powershell", "pwsh.exe", "pwsh"):
        return [shell, "-Command", command]
    return ["cmd.exe", "/C", command]


class CommandExecutor:
    """Runs shell commands and turns every outcome into a result.

    A failing command is data for the model, not an error for the caller:
    ``execute`` never raises for non-zero exits, missing binaries or
    unstartable shells.
    """

    def __init__(self, shell: str, os_name: Optional[str] = None):
        """Initialize command executor.

        Args:
            shell: Shell used for every command (path or name)
            os_name: Platform name; detected when omitted
        """
        self.shell = shell
        self.os_name = os_name if os_name is not None else get_os_name()

    def execute(self, command: str) -> ExecutionResult:
        """Execute a shell command synchronously, without timeout.

        Args:
            command: Command line passed verbatim to the shell

        Returns:
            ExecutionResult with status and combined output
        """
        argv = build_shell_invocation(command, self.shell, self.os_name)
        logger.debug(f"Executing argv: {argv}")

        try:
            process = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            logger.warning(f"Could not start command: {e}")
            return ExecutionResult(
                status=ExecutionStatus.ERROR,
                combined_output=FAILURE_OUTPUT_TEMPLATE.format(error=e, stderr=""),
            )

        logger.debug(f"Command completed with exit code {process.returncode}")

        if process.returncode != 0:
            output = FAILURE_OUTPUT_TEMPLATE.format(
                error=f"exit status {process.returncode}",
                stderr=process.stderr,
            )
            if process.stdout:
                output += FAILURE_STDOUT_TEMPLATE.format(stdout=process.stdout)
            return ExecutionResult(
                status=ExecutionStatus.ERROR,
                combined_output=output,
                exit_code=process.returncode,
            )

        return ExecutionResult(
            status=ExecutionStatus.SUCCESS,
            combined_output=SUCCESS_OUTPUT_TEMPLATE.format(
                stdout=process.stdout, stderr=process.stderr
            ),
            exit_code=0,
        )


def create_command_executor(shell: str, os_name: Optional[str] = None) -> CommandExecutor:
    """Create a command executor bound to one shell."""
    return CommandExecutor(shell, os_name)
