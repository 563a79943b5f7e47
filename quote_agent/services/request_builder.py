"""
Request builder — turns one /send body into a GenerationPayload.

Two construction paths:

  image present → one user message: [TextPart if text] + [ImagePart]
                  history is ignored; rules attached when configured
  text only     → trimmed history + {user: text or "Hello"}
                  rules always attached as the system instruction
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from quote_agent.errors import ValidationError
from quote_agent.schemas.generation import GenerationPayload, ImagePart, Message, TextPart
from quote_agent.services.history import trim_history

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "Hello"


def build_payload(
    text: Optional[str],
    image: Optional[str],
    history: Any,
    system_prompt: str,
    *,
    attach_rules_to_images: bool = True,
) -> GenerationPayload:
    """Build the generation payload, or raise ValidationError when there is nothing to send."""
    if not text and not image:
        raise ValidationError("Text or image is required")

    if image:
        parts: list[TextPart | ImagePart] = []
        if text:
            parts.append(TextPart(text=text))
        parts.append(ImagePart(image=image))
        logger.debug("Built image payload (image length=%d, text=%s)", len(image), bool(text))
        return GenerationPayload(
            system_instruction=system_prompt if attach_rules_to_images else None,
            messages=[Message(role="user", parts=parts)],
        )

    messages = [Message.from_text(turn.role, turn.content) for turn in trim_history(history)]
    messages.append(Message.from_text("user", text or FALLBACK_TEXT))
    logger.debug("Built text payload with %d message(s)", len(messages))
    return GenerationPayload(system_instruction=system_prompt, messages=messages)
