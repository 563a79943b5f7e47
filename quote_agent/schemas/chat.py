"""Pydantic schemas for the send endpoint."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single turn in the conversation history."""

    role: Literal["user", "assistant"]
    content: str


class SendRequest(BaseModel):
    """Body for POST /send — sent by the quote assistant client."""

    text: Optional[str] = None
    image: Optional[str] = Field(None, description="Image as a data URL (data:<mime>;base64,...).")
    # Malformed entries are dropped by the history trimmer, not rejected here.
    history: Any = None


class SendResponse(BaseModel):
    response: str
