"""
Send endpoint — one chat turn from the quote assistant client.
Builds the Gemini payload from the body and the current rules, and returns the
generated text in a single JSON response.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from quote_agent.config import Settings, get_settings
from quote_agent.schemas.chat import SendRequest, SendResponse
from quote_agent.services.gemini import GeminiClient, get_generation_client
from quote_agent.services.prompt_store import PromptStore, get_prompt_store
from quote_agent.services.request_builder import build_payload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/send", response_model=SendResponse)
async def send(
    body: SendRequest,
    store: PromptStore = Depends(get_prompt_store),
    client: GeminiClient = Depends(get_generation_client),
    current: Settings = Depends(get_settings),
) -> SendResponse:
    """
    Forward one user turn (text, image or both) to Gemini.

    Returns {"response": "..."}; 400 when neither text nor image is present,
    500 when the key is missing or the provider call fails.
    """
    payload = build_payload(
        body.text,
        body.image,
        body.history,
        store.current,
        attach_rules_to_images=current.attach_rules_to_images,
    )
    text = await client.generate(payload)
    return SendResponse(response=text)
