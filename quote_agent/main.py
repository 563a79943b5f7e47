"""
Quote Agent — FastAPI application entry point.
Lifespan: load (or seed) the rules file → build the Gemini client.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from quote_agent import __version__
from quote_agent.config import get_settings, settings
from quote_agent.errors import QuoteAgentError
from quote_agent.routers import chat, health, rules
from quote_agent.services.gemini import GeminiClient
from quote_agent.services.prompt_store import PromptStore
from quote_agent.utils.prompts import get_default_prompt

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

for lib_logger_name in ("httpx", "httpcore", "uvicorn.access"):
    logging.getLogger(lib_logger_name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Load the rules file, seeding it from the configured variant if missing.
    2. Build the Gemini client (a missing key is logged, not fatal).
    """
    current = get_settings()
    logger.info("Starting Quote Agent (env=%s)", current.app_env)

    # Step 1: rules
    store = PromptStore(current.rules_path, get_default_prompt(current.assistant_variant))
    await store.load()
    app.state.prompt_store = store

    # Step 2: Gemini client
    app.state.generation_client = GeminiClient.from_settings(current)
    logger.info("Gemini client ready (model=%s)", current.gemini_model)

    yield

    logger.info("Shutting down Quote Agent.")


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_bytes`` with 413.

    The declared Content-Length is checked up front; bodies without one
    (chunked uploads) are counted as they are received.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                response = JSONResponse(status_code=400, content={"error": "Invalid Content-Length header"})
                await response(scope, receive, send)
                return
            if size > self.max_bytes:
                self._log_rejection(scope, size)
                response = JSONResponse(status_code=413, content={"error": "Request body too large"})
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    self._log_rejection(scope, received)
                    # FastAPI re-raises HTTPException from body parsing; anything else becomes 400.
                    raise HTTPException(status_code=413, detail="Request body too large")
            return message

        await self.app(scope, limited_receive, send)

    def _log_rejection(self, scope: Scope, size: int) -> None:
        logger.warning(
            "Rejected %s %s: body of %d+ bytes exceeds limit of %d",
            scope.get("method"), scope.get("path"), size, self.max_bytes,
        )


app = FastAPI(
    title="Quote Agent",
    description="Relays quote assistant chat turns and images to Gemini.",
    version=__version__,
    lifespan=lifespan,
)

# ── Middleware ───────────────────────────────────────────────────────────────

app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials="*" not in settings.allowed_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(chat.router, prefix=settings.api_prefix)
app.include_router(rules.router, prefix=settings.api_prefix)


# ── Exception handlers ───────────────────────────────────────────────────────

@app.exception_handler(QuoteAgentError)
async def quote_agent_exception_handler(request: Request, exc: QuoteAgentError) -> JSONResponse:
    """Map the error taxonomy onto status codes and JSON bodies."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s: %s", request.method, request.url.path, exc.error, exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors (404, 405, 413 ...) with the same {error} body as the taxonomy."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 {error, message} for bodies that fail schema validation."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning("%s %s rejected: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "message": details},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
