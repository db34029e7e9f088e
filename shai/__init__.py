"""
shai - an autonomous shell agent driven by a local LLM.

The agent asks a local Ollama chat model for the next action (run a command,
ask the operator a question, or finish), runs approved commands, and feeds
the results back to the model until the task is complete or stopped.
"""

__version__ = "1.0.0"

from .core.application import Shai, create_application
from .core.agent_loop import AgentLoop, AgentOutcome, create_agent_loop
from .config.manager import AgentConfig, ConfigManager, create_config_manager

__all__ = [
    "Shai",
    "create_application",
    "AgentLoop",
    "AgentOutcome",
    "create_agent_loop",
    "AgentConfig",
    "ConfigManager",
    "create_config_manager",
    "__version__",
]
