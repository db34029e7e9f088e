"""Command execution and operator confirmation for shai."""

from .executor import (
    CommandExecutor,
    ExecutionResult,
    ExecutionStatus,
    build_shell_invocation,
    create_command_executor,
)
from .confirmation import ClarificationUnavailable, ConfirmationGate, create_confirmation_gate

__all__ = [
    "CommandExecutor",
    "ExecutionResult",
    "ExecutionStatus",
    "build_shell_invocation",
    "create_command_executor",
    "ClarificationUnavailable",
    "ConfirmationGate",
    "create_confirmation_gate",
]
