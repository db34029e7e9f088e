"""Chat client for the local model endpoint."""

from typing import Any, Optional, Sequence

import requests

from ..config.manager import AgentConfig
from ..utils.logging import logger
from .payload import build_chat_payload


class ChatClientError(Exception):
    """Base class for failures talking to the chat endpoint."""


class NetworkError(ChatClientError):
    """The endpoint could not be reached or did not answer in time."""


class ProtocolError(ChatClientError):
    """The endpoint answered, but not with a usable chat reply."""


class ChatClient:
    """Sends the conversation to an Ollama-style /api/chat endpoint."""

    def __init__(self, config: AgentConfig, session: Optional[Any] = None):
        """Initialize chat client.

        Args:
            config: Configuration for this run (endpoint, model, timeout)
            session: Object with a requests-compatible ``post``; defaults to
                module-level ``requests.post``
        """
        self.config = config
        self.endpoint = config.ollama_url
        self.model = config.ollama_model
        self.timeout = config.request_timeout
        self.session = session

    def send(self, messages: Sequence[Any], system_instruction: str) -> str:
        """Send one chat request and return the assistant's reply text.

        The system instruction is prepended for this call only; the caller's
        message list is not modified.

        Args:
            messages: Conversation history (objects with ``to_dict`` or plain dicts)
            system_instruction: Text of the leading system message

        Returns:
            Content of the assistant message

        Raises:
            NetworkError: If the endpoint is unreachable or times out
            ProtocolError: If the status is not 200 or the body is malformed
        """
        full_messages = [{"role": "system", "content": system_instruction}]
        full_messages.extend(self._as_dict(m) for m in messages)
        payload = build_chat_payload(self.model, full_messages)

        logger.debug(f"Sending {len(full_messages)} messages to {self.endpoint} (model {self.model})")

        try:
            post = self.session.post if self.session is not None else requests.post
            response = post(
                self.endpoint,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(
                f"failed to send request to Ollama: {e}. Is Ollama running at {self.endpoint}?"
            ) from e

        if response.status_code != 200:
            raise ProtocolError(
                f"Ollama API returned non-200 status code: {response.status_code}. Body: {response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(f"failed to decode Ollama chat response: {e}") from e

        return self._extract_content(body)

    @staticmethod
    def _as_dict(message: Any) -> dict:
        if isinstance(message, dict):
            return {"role": message["role"], "content": message["content"]}
        return message.to_dict()

    @staticmethod
    def _extract_content(body: Any) -> str:
        message = body.get("message") if isinstance(body, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ProtocolError(
                "failed to decode Ollama chat response: expected a 'message' object with string 'content'"
            )
        logger.debug(f"Raw model reply:\n{content}")
        return content


def create_chat_client(config: AgentConfig, session: Optional[Any] = None) -> ChatClient:
    """Create a configured chat client instance."""
    return ChatClient(config, session)
