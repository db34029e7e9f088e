"""Agent loop for shai: think, act, observe until the model is done."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

from ..commands.confirmation import ClarificationUnavailable
from ..commands.executor import ExecutionResult
from ..config.templates import (
    COMMAND_RESULT_TEMPLATE, MISSING_COMMAND_TEMPLATE, MISSING_QUESTION_TEMPLATE,
    CLARIFICATION_TEMPLATE, UNPARSEABLE_RESPONSE_TEMPLATE
)
from ..constants import START_MESSAGE, CLR_BOLD_GREEN, CLR_BOLD_YELLOW, CLR_CYAN
from ..llm.parsers import ActionKind, ParsedAction, parse_action
from ..utils.logging import logger


class Role(Enum):
    """Author of a conversation message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class ConversationHistory:
    """Ordered, append-only user/assistant turns for one run.

    The system instruction is never stored here; the chat client prepends
    it to each request.
    """

    def __init__(self, seed: str = START_MESSAGE):
        self._messages: List[Message] = [Message(Role.USER, seed)]

    def append_user(self, content: str) -> None:
        self._messages.append(Message(Role.USER, content))

    def append_assistant(self, content: str) -> None:
        self._messages.append(Message(Role.ASSISTANT, content))

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))


class AgentOutcome(Enum):
    """How a run ended when the model ended it."""
    COMPLETED = "COMPLETED"
    STOPPED = "STOPPED"


class RunAborted(Exception):
    """The operator ended the run (rejection or closed input)."""


class ChatBackend(Protocol):
    def send(self, messages: Sequence[Message], system_instruction: str) -> str: ...


class Executor(Protocol):
    shell: str

    def execute(self, command: str) -> ExecutionResult: ...


class Gate(Protocol):
    def confirm(self, message: str) -> bool: ...

    def ask(self, question: str) -> str: ...


# Handlers return an outcome to stop the loop, or None to take another step
StepHandler = Callable[[ParsedAction], Optional[AgentOutcome]]


class AgentLoop:
    """Drives the chat -> parse -> gate -> execute -> feedback cycle."""

    def __init__(self, chat_client: ChatBackend, executor: Executor, gate: Gate,
                 system_instruction: str):
        """Initialize the agent loop.

        Args:
            chat_client: Sends history plus system instruction, returns the reply
            executor: Runs approved commands
            gate: Confirms commands and collects clarifications
            system_instruction: Fixed first message for every model call
        """
        self.chat_client = chat_client
        self.executor = executor
        self.gate = gate
        self.system_instruction = system_instruction

        self._history = ConversationHistory()
        self.step = 1

        self._handlers: Dict[ActionKind, StepHandler] = {
            ActionKind.COMPLETE: self._handle_complete,
            ActionKind.STOPPED: self._handle_stopped,
            ActionKind.RUN: self._handle_run,
            ActionKind.ASK: self._handle_ask,
            ActionKind.UNRECOGNIZED: self._handle_unrecognized,
        }

    @property
    def history(self) -> Tuple[Message, ...]:
        """Snapshot of the conversation so far."""
        return self._history.messages

    @property
    def handled_kinds(self) -> frozenset:
        return frozenset(self._handlers)

    def run(self) -> AgentOutcome:
        """Run until the model completes or stops the task.

        Returns:
            COMPLETED or STOPPED

        Raises:
            RunAborted: If the operator rejects a command or continuation
            ChatClientError: If the chat endpoint fails (propagated unchanged)
        """
        self._history = ConversationHistory()
        self.step = 1

        while True:
            logger.marker(f"\n--- Step {self.step} ---")
            logger.marker("🤔 shai is thinking...", CLR_CYAN)

            reply = self.chat_client.send(self._history.messages, self.system_instruction)
            self._history.append_assistant(reply)

            action = parse_action(reply)
            logger.debug(f"Parsed action {action.kind.value} with payload: {action.payload!r}")

            outcome = self._handlers[action.kind](action)
            if outcome is not None:
                return outcome

            self.step += 1

    def _handle_complete(self, action: ParsedAction) -> AgentOutcome:
        logger.marker("✅ shai has completed the task successfully.", CLR_BOLD_GREEN)
        if action.payload:
            logger.agent(action.payload)
        return AgentOutcome.COMPLETED

    def _handle_stopped(self, action: ParsedAction) -> AgentOutcome:
        logger.marker("🛑 shai has stopped the task, as it cannot proceed or needs human input.", CLR_BOLD_YELLOW)
        if action.payload:
            logger.agent(action.payload)
        return AgentOutcome.STOPPED

    def _handle_run(self, action: ParsedAction) -> None:
        if action.is_malformed:
            logger.warning(
                f"shai provided a malformed RUN command (missing command line). Response:\n"
                f"---\n{action.raw_reply}\n---"
            )
            self._history.append_user(MISSING_COMMAND_TEMPLATE.format(reply=action.raw_reply))
            return None

        command = action.payload
        if not self.gate.confirm(f"shai wants to run this command:\n\n  $ {command}\n\nAllow?"):
            raise RunAborted("user rejected command, terminating")

        logger.marker(f"🚀 Running command via {self.executor.shell}...", CLR_BOLD_YELLOW)
        logger.command(command)
        result = self.executor.execute(command)
        logger.debug(f"Command status {result.status.value}:\n{result.combined_output}")

        self._history.append_user(COMMAND_RESULT_TEMPLATE.format(
            status=result.status.value,
            output=result.combined_output,
        ))
        return None

    def _handle_ask(self, action: ParsedAction) -> None:
        if action.is_malformed:
            logger.warning(
                f"shai provided a malformed ASK request (missing question). Response:\n"
                f"---\n{action.raw_reply}\n---"
            )
            self._history.append_user(MISSING_QUESTION_TEMPLATE.format(reply=action.raw_reply))
            return None

        try:
            answer = self.gate.ask(action.payload)
        except ClarificationUnavailable as e:
            raise RunAborted(str(e)) from e

        logger.user(answer)
        self._history.append_user(CLARIFICATION_TEMPLATE.format(answer=answer))
        return None

    def _handle_unrecognized(self, action: ParsedAction) -> None:
        logger.warning(
            f"shai provided an UNRECOGNIZED response. Model response was:\n"
            f"---\n{action.raw_reply}\n---"
        )
        if not self.gate.confirm("shai provided an unparseable response. Continue the loop?"):
            raise RunAborted("user rejected unparseable model output, terminating")

        self._history.append_user(UNPARSEABLE_RESPONSE_TEMPLATE.format(reply=action.raw_reply))
        return None


def create_agent_loop(chat_client: ChatBackend, executor: Executor, gate: Gate,
                      system_instruction: str) -> AgentLoop:
    """Create an agent loop over the given collaborators."""
    return AgentLoop(chat_client, executor, gate, system_instruction)
