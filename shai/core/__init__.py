"""Core application logic for shai."""

from .agent_loop import (
    AgentLoop,
    AgentOutcome,
    ConversationHistory,
    Message,
    Role,
    RunAborted,
    create_agent_loop,
)
from .application import Shai, create_application

__all__ = [
    "AgentLoop",
    "AgentOutcome",
    "ConversationHistory",
    "Message",
    "Role",
    "RunAborted",
    "create_agent_loop",
    "Shai",
    "create_application",
]
