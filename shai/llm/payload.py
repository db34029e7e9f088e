"""Prompt and request payload preparation for shai."""

from typing import Any, Dict, List, Sequence

from ..config.manager import AgentConfig
from ..config.templates import SYSTEM_PROMPT_TEMPLATE, ADDITIONAL_CONTEXT_TEMPLATE
from ..constants import DEFAULT_KEEP_ALIVE
from ..utils.logging import logger


class PromptBuilder:
    """Builds the system instruction that opens every model call of a run."""

    def __init__(self, config: AgentConfig):
        """Initialize prompt builder.

        Args:
            config: Configuration for this run
        """
        self.config = config

    def build(self, task: str, os_name: str, shell: str, working_directory: str) -> str:
        """Assemble the system instruction.

        Args:
            task: The user's task description
            os_name: Operating system name
            shell: Shell that commands will run in
            working_directory: Directory the agent starts in

        Returns:
            The full system instruction text
        """
        prompt = SYSTEM_PROMPT_TEMPLATE.format(
            task=task,
            os_name=os_name,
            shell=shell,
            working_directory=working_directory,
        )

        additional_context = self.config.additional_context
        if additional_context and additional_context.strip():
            prompt += ADDITIONAL_CONTEXT_TEMPLATE.format(additional_context=additional_context)

        logger.debug(f"System instruction:\n{prompt}")
        return prompt


def build_chat_payload(model: str, messages: Sequence[Dict[str, str]]) -> Dict[str, Any]:
    """Body of a non-streaming Ollama /api/chat request."""
    message_list: List[Dict[str, str]] = [dict(m) for m in messages]
    return {
        "model": model,
        "messages": message_list,
        "stream": False,
        "keep_alive": DEFAULT_KEEP_ALIVE,
    }


def create_prompt_builder(config: AgentConfig) -> PromptBuilder:
    """Create a configured prompt builder instance."""
    return PromptBuilder(config)
