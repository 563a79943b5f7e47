"""Pydantic schemas for the rules (system prompt) endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, StrictStr


class RulesResponse(BaseModel):
    content: str


class RulesUpdate(BaseModel):
    """Body for POST /rules. A missing ``content`` is rejected by the store."""

    content: Optional[StrictStr] = None


class RulesUpdated(BaseModel):
    success: bool = True
    message: str
