"""Main application class for shai."""

import signal
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..commands import create_command_executor, create_confirmation_gate
from ..config.manager import AgentConfig, create_config_manager
from ..constants import EXIT_OK, EXIT_FAILURE, EXIT_INTERRUPTED
from ..llm import ChatClientError, create_chat_client, create_prompt_builder
from ..utils.helpers import detect_shell, get_os_name, get_working_directory
from ..utils.logging import logger
from .agent_loop import RunAborted, create_agent_loop


class Shai:
    """Wires configuration, environment and the agent loop together."""

    def __init__(self, config_dir: Optional[str] = None, debug: bool = False):
        """Initialize the application.

        Args:
            config_dir: Custom configuration directory path
            debug: Enable debug logging

        Raises:
            ConfigError: If the configuration cannot be loaded
        """
        # Set up logging first
        logger.set_debug(debug)

        # Load configuration, writing defaults on first run
        config_path = Path(config_dir) if config_dir else None
        self.config_manager = create_config_manager(config_path)
        self.config_manager.load()
        self.config: AgentConfig = self.config_manager.config

        # Config can switch debug on when the flag was not given
        if not debug and self.config.enable_debug:
            logger.set_debug(True)

        # Detect the platform and the shell commands run in
        self.os_name = get_os_name()
        self.shell = detect_shell(self.os_name)

        logger.debug("Application initialization complete")

    def run_task(self, task: str) -> int:
        """Run the agent on one task.

        Returns:
            Process exit code
        """
        # Build the system instruction for this task
        system_instruction = create_prompt_builder(self.config).build(
            task=task,
            os_name=self.os_name,
            shell=self.shell,
            working_directory=get_working_directory(),
        )

        logger.system(f"👋 shai initialized with task: {task}")
        logger.system(f"Platform: {self.os_name} | Shell: {self.shell}")
        logger.system(f"Using Ollama URL: {self.config.ollama_url} | Model: {self.config.ollama_model}")

        # Wire the loop to the model, the shell and the operator
        loop = create_agent_loop(
            create_chat_client(self.config),
            create_command_executor(self.shell, self.os_name),
            create_confirmation_gate(),
            system_instruction,
        )

        self._setup_signal_handlers()
        try:
            outcome = loop.run()
        except RunAborted as e:
            logger.error(f"Agent error: {e}")
            return EXIT_OK
        except ChatClientError as e:
            logger.error(f"Agent error: Ollama API call failed: {e}")
            return EXIT_FAILURE

        logger.debug(f"Run finished with {outcome.value} after {loop.step} step(s)")
        return EXIT_OK

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(sig, frame):
            logger.system(f"Received signal {sig}, shutting down...")
            sys.exit(EXIT_INTERRUPTED)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        if hasattr(signal, 'SIGHUP'):
            signal.signal(signal.SIGHUP, signal_handler)

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration."""
        config = self.config_manager.config
        return {
            "config_file": str(self.config_manager.config_file),
            "ollama_url": config.ollama_url,
            "ollama_model": config.ollama_model,
            "additional_context": "set" if config.additional_context else "not set",
            "request_timeout": config.request_timeout,
            "enable_debug": config.enable_debug,
            "platform": self.os_name,
            "shell": self.shell,
        }

    def print_config_summary(self) -> None:
        """Print a summary of the current configuration."""
        logger.system("Configuration Summary:")
        for key, value in self.get_config_summary().items():
            logger.system(f"  {key}: {value}")


def create_application(config_dir: Optional[str] = None, debug: bool = False) -> Shai:
    """Create and initialize a Shai application instance."""
    return Shai(config_dir, debug)
