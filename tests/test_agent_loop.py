from __future__ import annotations

import pytest
import requests

from shai.commands.confirmation import ClarificationUnavailable
from shai.commands.executor import ExecutionStatus
from shai.config.manager import AgentConfig
from shai.core.agent_loop import (
    AgentLoop,
    AgentOutcome,
    ConversationHistory,
    Message,
    Role,
    RunAborted,
)
from shai.llm.client import ChatClient, NetworkError
from shai.llm.parsers import ActionKind

from .conftest import RecordingExecutor, ScriptedChatClient, ScriptedGate

SYSTEM = "You are an autonomous shell agent called 'shai'."


def _loop(replies: list[str], executor: RecordingExecutor, gate: ScriptedGate) -> tuple[AgentLoop, ScriptedChatClient]:
    client = ScriptedChatClient(replies)
    return AgentLoop(client, executor, gate, SYSTEM), client


def _user_contents(loop: AgentLoop) -> list[str]:
    return [m.content for m in loop.history if m.role is Role.USER]


def test_every_action_kind_has_a_handler(executor: RecordingExecutor, gate: ScriptedGate) -> None:
    loop, _ = _loop([], executor, gate)

    assert loop.handled_kinds == frozenset(ActionKind)


def test_run_then_complete_executes_once_and_finishes_in_two_steps(
    executor: RecordingExecutor, gate: ScriptedGate, capsys: pytest.CaptureFixture[str]
) -> None:
    loop, client = _loop(["RUN ls", "TASK_COMPLETE done"], executor, gate)

    outcome = loop.run()

    assert outcome is AgentOutcome.COMPLETED
    assert executor.commands == ["ls"]
    assert loop.step == 2
    assert len(client.calls) == 2
    out = capsys.readouterr().out
    assert "--- Step 1 ---" in out
    assert "--- Step 2 ---" in out
    assert "--- Step 3 ---" not in out


def test_history_records_replies_and_structured_results(
    executor: RecordingExecutor, gate: ScriptedGate
) -> None:
    loop, _ = _loop(["RUN ls", "TASK_COMPLETE"], executor, gate)

    loop.run()

    assert [m.role for m in loop.history] == [Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT]
    assert loop.history[0] == Message(Role.USER, "START")
    assert loop.history[1].content == "RUN ls"
    assert loop.history[2].content == (
        "PREVIOUS_COMMAND_RESULT:\nSTATUS: SUCCESS\nOUTPUT:\nSTDOUT:\nran ls\nSTDERR:\n\n\n"
    )


def test_system_instruction_is_sent_separately_on_every_call(
    executor: RecordingExecutor, gate: ScriptedGate
) -> None:
    loop, client = _loop(["RUN pwd", "TASK_STOPPED"], executor, gate)

    loop.run()

    for messages, system_instruction in client.calls:
        assert system_instruction == SYSTEM
        assert all(m.role is not Role.SYSTEM for m in messages)
    assert [m.content for m in client.calls[0][0]] == ["START"]
    assert len(client.calls[1][0]) == 3


def test_failed_command_is_fed_back_as_error_status(gate: ScriptedGate) -> None:
    executor = RecordingExecutor(status=ExecutionStatus.ERROR)
    loop, _ = _loop(["RUN false", "TASK_STOPPED"], executor, gate)

    outcome = loop.run()

    assert outcome is AgentOutcome.STOPPED
    assert "STATUS: ERROR" in _user_contents(loop)[1]


def test_stopped_is_a_successful_termination(executor: RecordingExecutor, gate: ScriptedGate) -> None:
    loop, _ = _loop(["TASK_STOPPED needs a password"], executor, gate)

    assert loop.run() is AgentOutcome.STOPPED
    assert loop.step == 1
    assert executor.commands == []


@pytest.mark.parametrize("n", [1, 3, 5])
def test_repeated_run_without_command_never_executes(
    executor: RecordingExecutor, gate: ScriptedGate, n: int
) -> None:
    loop, _ = _loop(["RUN"] * n + ["TASK_STOPPED"], executor, gate)

    loop.run()

    critical = [c for c in _user_contents(loop) if c.startswith("CRITICAL ERROR: Previous response was RUN")]
    assert len(critical) == n
    assert loop.step == n + 1
    assert executor.commands == []
    assert gate.confirm_messages == []


def test_ask_without_question_reports_critical_error(
    executor: RecordingExecutor, gate: ScriptedGate
) -> None:
    loop, _ = _loop(["ASK", "TASK_COMPLETE"], executor, gate)

    loop.run()

    assert _user_contents(loop)[1] == (
        "CRITICAL ERROR: Previous response was ASK but provided no question. Full response was:\nASK"
    )
    assert gate.questions == []
    assert loop.step == 2


def test_ask_appends_human_clarification(executor: RecordingExecutor) -> None:
    gate = ScriptedGate(answers=["use the logs directory"])
    loop, _ = _loop(["ASK\nWhich directory?", "TASK_COMPLETE"], executor, gate)

    loop.run()

    assert gate.questions == ["Which directory?"]
    assert _user_contents(loop)[1] == "USER_CLARIFICATION: use the logs directory"
    assert loop.step == 2


def test_closed_stdin_during_clarification_aborts(executor: RecordingExecutor) -> None:
    class ClosedGate(ScriptedGate):
        def ask(self, question: str) -> str:
            raise ClarificationUnavailable("standard input closed")

    loop, _ = _loop(["ASK what?"], executor, ClosedGate())

    with pytest.raises(RunAborted):
        loop.run()


def test_rejected_command_aborts_without_executing(executor: RecordingExecutor) -> None:
    gate = ScriptedGate(confirmations=[False])
    loop, _ = _loop(["RUN rm -rf build"], executor, gate)

    with pytest.raises(RunAborted, match="user rejected command"):
        loop.run()

    assert executor.commands == []
    assert "$ rm -rf build" in gate.confirm_messages[0]
    assert len(loop.history) == 2


def test_unrecognized_reply_asks_to_continue_and_reports_parse_failure(
    executor: RecordingExecutor, gate: ScriptedGate
) -> None:
    reply = "I think you should run ls"
    loop, _ = _loop([reply, "TASK_COMPLETE"], executor, gate)

    loop.run()

    assert gate.confirm_messages == ["shai provided an unparseable response. Continue the loop?"]
    assert _user_contents(loop)[1] == (
        "UNPARSEABLE_RESPONSE_ERROR: Your previous response did not follow the protocol. "
        f"Your previous output was:\n{reply}"
    )
    assert loop.step == 2


def test_unrecognized_reply_rejected_aborts(executor: RecordingExecutor) -> None:
    gate = ScriptedGate(confirmations=[False])
    loop, _ = _loop(["```bash\nls\n```"], executor, gate)

    with pytest.raises(RunAborted, match="unparseable"):
        loop.run()


def test_unreachable_endpoint_aborts_on_step_one_with_seed_history_only(
    executor: RecordingExecutor, gate: ScriptedGate
) -> None:
    class RefusingSession:
        def post(self, url: str, **kwargs: object) -> None:
            raise requests.exceptions.ConnectionError("[Errno 111] Connection refused")

    client = ChatClient(AgentConfig(ollama_url="http://127.0.0.1:9/api/chat"), session=RefusingSession())
    loop = AgentLoop(client, executor, gate, SYSTEM)

    with pytest.raises(NetworkError):
        loop.run()

    assert loop.step == 1
    assert loop.history == (Message(Role.USER, "START"),)
    assert executor.commands == []


def test_run_starts_from_fresh_state(executor: RecordingExecutor, gate: ScriptedGate) -> None:
    loop, client = _loop(["RUN ls", "TASK_COMPLETE", "TASK_COMPLETE"], executor, gate)

    loop.run()
    loop.run()

    assert loop.step == 1
    assert len(loop.history) == 2


def test_history_snapshot_is_read_only() -> None:
    history = ConversationHistory()
    history.append_assistant("RUN ls")

    snapshot = history.messages
    history.append_user("result")

    assert len(snapshot) == 2
    assert len(history) == 3
    assert [m.role for m in history] == [Role.USER, Role.ASSISTANT, Role.USER]
