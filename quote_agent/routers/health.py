"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from quote_agent import __version__
from quote_agent.errors import StorageError
from quote_agent.services.gemini import GeminiClient, get_generation_client
from quote_agent.services.prompt_store import PromptStore, get_prompt_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe — returns 200 if the process is running."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready(
    store: PromptStore = Depends(get_prompt_store),
    client: GeminiClient = Depends(get_generation_client),
) -> JSONResponse:
    """
    Readiness probe — checks the rules file and the Gemini API key.
    Returns 200 with {"rules": "ok", "gemini_api_key": "ok"} when fully ready,
    or 503 with the failing component marked "error".
    """
    status: dict[str, str] = {}
    all_ok = True

    try:
        await store.read()
        status["rules"] = "ok"
    except StorageError as exc:
        logger.warning("Rules check failed: %s", exc)
        status["rules"] = "error"
        all_ok = False

    status["gemini_api_key"] = "ok" if client.is_configured else "error"
    if not client.is_configured:
        all_ok = False

    http_status = 200 if all_ok else 503
    return JSONResponse(content=status, status_code=http_status)
