"""LLM integration for shai."""

from .client import (
    ChatClient,
    ChatClientError,
    NetworkError,
    ProtocolError,
    create_chat_client,
)
from .payload import PromptBuilder, build_chat_payload, create_prompt_builder
from .parsers import ActionKind, ParsedAction, parse_action, split_keyword

__all__ = [
    "ChatClient",
    "ChatClientError",
    "NetworkError",
    "ProtocolError",
    "create_chat_client",
    "PromptBuilder",
    "build_chat_payload",
    "create_prompt_builder",
    "ActionKind",
    "ParsedAction",
    "parse_action",
    "split_keyword",
]
