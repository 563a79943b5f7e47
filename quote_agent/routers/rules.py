"""Rules endpoints — read and replace the assistant's system prompt."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from quote_agent.schemas.rules import RulesResponse, RulesUpdate, RulesUpdated
from quote_agent.services.prompt_store import PromptStore, get_prompt_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("", response_model=RulesResponse)
async def get_rules(store: PromptStore = Depends(get_prompt_store)) -> RulesResponse:
    """Return the rules text exactly as stored."""
    return RulesResponse(content=await store.read())


@router.post("", response_model=RulesUpdated)
async def update_rules(
    body: RulesUpdate,
    store: PromptStore = Depends(get_prompt_store),
) -> RulesUpdated:
    """
    Replace the rules text.

    The new rules apply to the next /send call; no restart is needed.
    """
    await store.write(body.content)
    return RulesUpdated(
        success=True,
        message="Rules updated successfully. New messages use the updated rules.",
    )
