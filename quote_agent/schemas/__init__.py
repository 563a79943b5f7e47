"""Pydantic schemas package."""

from quote_agent.schemas.chat import ChatMessage, SendRequest, SendResponse
from quote_agent.schemas.generation import (
    GenerationPayload,
    ImagePart,
    Message,
    Part,
    TextPart,
)
from quote_agent.schemas.rules import RulesResponse, RulesUpdate, RulesUpdated

__all__ = [
    "ChatMessage", "SendRequest", "SendResponse",
    "GenerationPayload", "ImagePart", "Message", "Part", "TextPart",
    "RulesResponse", "RulesUpdate", "RulesUpdated",
]
