"""
History trimmer — picks the slice of the client transcript sent as context.

The newest entry is the turn being answered and is sent separately, so the
window skips it and keeps at most the three turns before it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from quote_agent.schemas.chat import ChatMessage

logger = logging.getLogger(__name__)

_SKIP_NEWEST = 1
_CONTEXT_TURNS = 3


def trim_history(history: Any) -> list[ChatMessage]:
    """
    Return up to three turns preceding the newest entry of ``history``.

    Anything that is not a list/tuple counts as an empty history. Entries that
    are not ``{"role": "user" | "assistant", "content": str}`` are dropped
    after windowing, so they never widen the window.
    """
    if not isinstance(history, Sequence) or isinstance(history, (str, bytes)):
        return []

    end = len(history) - _SKIP_NEWEST
    if end <= 0:
        return []
    window = history[max(0, end - _CONTEXT_TURNS):end]

    trimmed: list[ChatMessage] = []
    for entry in window:
        if isinstance(entry, ChatMessage):
            trimmed.append(entry)
            continue
        try:
            trimmed.append(ChatMessage.model_validate(entry))
        except PydanticValidationError:
            logger.debug("Dropping malformed history entry: %.100r", entry)
    return trimmed
