"""Model reply parsing for shai."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..utils.logging import logger


class ActionKind(Enum):
    """The action a model reply asks for."""
    RUN = "RUN"
    ASK = "ASK"
    COMPLETE = "TASK_COMPLETE"
    STOPPED = "TASK_STOPPED"
    UNRECOGNIZED = "UNRECOGNIZED"


_KEYWORDS = {
    ActionKind.RUN.value: ActionKind.RUN,
    ActionKind.ASK.value: ActionKind.ASK,
    ActionKind.COMPLETE.value: ActionKind.COMPLETE,
    ActionKind.STOPPED.value: ActionKind.STOPPED,
}

# Only a space or a newline ends the keyword
_SEPARATORS = (" ", "\n")


@dataclass(frozen=True)
class ParsedAction:
    """One classified model reply. Built per step and then discarded."""
    kind: ActionKind
    payload: str
    raw_reply: str

    @property
    def is_malformed(self) -> bool:
        """RUN or ASK without the command/question that must follow it."""
        return self.kind in (ActionKind.RUN, ActionKind.ASK) and not self.payload


def _find_separator(text: str) -> int:
    positions = [text.find(sep) for sep in _SEPARATORS]
    found = [pos for pos in positions if pos != -1]
    return min(found) if found else -1


def split_keyword(reply: str) -> Tuple[str, str]:
    """Split a trimmed reply into (uppercased keyword, trimmed payload).

    Args:
        reply: Raw model reply

    Returns:
        Tuple of (keyword, payload); payload is empty when the reply is one word
    """
    text = reply.strip()
    idx = _find_separator(text)
    if idx == -1:
        return text.upper(), ""
    keyword = text[:idx].rstrip("\r").upper()
    return keyword, text[idx + 1:].strip()


def parse_action(reply: str) -> ParsedAction:
    """Classify a model reply into one of the protocol actions.

    The parse is lenient: no grammar, no escaping and no code-fence
    stripping. Unknown keywords yield UNRECOGNIZED with the whole trimmed
    reply as payload. RUN/ASK with an empty payload keep their kind; callers
    check ``is_malformed``.
    """
    text = reply.strip()
    keyword, payload = split_keyword(text)
    kind = _KEYWORDS.get(keyword)

    if kind is None:
        logger.debug(f"Unrecognized action keyword: '{keyword}'")
        return ParsedAction(ActionKind.UNRECOGNIZED, text, text)

    return ParsedAction(kind, payload, text)
