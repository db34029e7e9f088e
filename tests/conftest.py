from __future__ import annotations

from typing import Iterable, Sequence

import pytest

from shai.commands.executor import ExecutionResult, ExecutionStatus
from shai.core.agent_loop import Message


class ScriptedChatClient:
    """Returns canned replies in order and records what it was sent."""

    def __init__(self, replies: Iterable[str]) -> None:
        self.replies = list(replies)
        self.calls: list[tuple[list[Message], str]] = []

    def send(self, messages: Sequence[Message], system_instruction: str) -> str:
        self.calls.append((list(messages), system_instruction))
        if not self.replies:
            raise AssertionError("chat client called more times than scripted")
        return self.replies.pop(0)


class RecordingExecutor:
    shell = "/bin/sh"

    def __init__(self, status: ExecutionStatus = ExecutionStatus.SUCCESS) -> None:
        self.status = status
        self.commands: list[str] = []

    def execute(self, command: str) -> ExecutionResult:
        self.commands.append(command)
        return ExecutionResult(
            status=self.status,
            combined_output=f"STDOUT:\nran {command}\nSTDERR:\n",
        )


class ScriptedGate:
    def __init__(self, confirmations: Iterable[bool] = (), answers: Iterable[str] = ()) -> None:
        self.confirmations = list(confirmations)
        self.answers = list(answers)
        self.confirm_messages: list[str] = []
        self.questions: list[str] = []

    def confirm(self, message: str) -> bool:
        self.confirm_messages.append(message)
        return self.confirmations.pop(0) if self.confirmations else True

    def ask(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0)


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def gate() -> ScriptedGate:
    return ScriptedGate()
