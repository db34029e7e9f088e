"""Human-in-the-loop confirmation for shai."""

import sys
from typing import Callable, Optional

from ..constants import (
    REJECT_TOKEN, QUIT_TOKENS, EXIT_OK,
    CLR_YELLOW, CLR_BOLD_YELLOW, CLR_GREEN, CLR_BOLD_GREEN, CLR_RESET
)
from ..utils.logging import logger


class ClarificationUnavailable(Exception):
    """Standard input closed before the operator answered a question."""


class ConfirmationGate:
    """Blocking yes/no/quit prompts on standard input.

    Empty input and anything other than ``n`` approve. ``q`` (or ``quit``)
    exits the process at once. End of input is treated like quit.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None):
        """Initialize the gate.

        Args:
            input_func: Line reader taking a prompt; defaults to ``input``
        """
        self.input_func = input_func or input

    def confirm(self, message: str) -> bool:
        """Ask the operator to approve an action.

        Args:
            message: Description of what is about to happen

        Returns:
            True if approved, False if rejected
        """
        try:
            answer = self.input_func(f"\n{CLR_YELLOW}{message} {CLR_BOLD_YELLOW}[Y/n/q]: {CLR_RESET}")
        except EOFError:
            logger.user("Input closed; quitting.")
            sys.exit(EXIT_OK)

        choice = answer.strip().lower()
        if choice in QUIT_TOKENS:
            logger.user("Quit requested; exiting.")
            sys.exit(EXIT_OK)
        if choice == REJECT_TOKEN:
            logger.user("Rejected.")
            return False
        return True

    def ask(self, question: str) -> str:
        """Show a question from the model and read one line of free text.

        Raises:
            ClarificationUnavailable: If standard input is closed
        """
        logger.marker("\n❓ shai needs clarification:", CLR_BOLD_GREEN)
        print(question)
        try:
            answer = self.input_func(f"{CLR_GREEN}Your response to shai: {CLR_RESET}")
        except EOFError as e:
            raise ClarificationUnavailable("standard input closed while waiting for a clarification") from e
        return answer.strip()


def create_confirmation_gate(input_func: Optional[Callable[[str], str]] = None) -> ConfirmationGate:
    """Create a confirmation gate reading from ``input_func`` (or stdin)."""
    return ConfirmationGate(input_func)
