"""
Gemini service — wraps Google Generative AI calls.

Model : GEMINI_MODEL (default: gemini-2.5-flash)
Key   : GEMINI_API_KEY, else GOOGLE_GENERATIVE_AI_API_KEY

A GenerationPayload is converted to Gemini contents (``assistant`` turns
become ``model`` turns, image data URLs become inline blobs) and sent once.
Failures are never retried: the caller gets a single pass/fail per request.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import google.generativeai as genai
from fastapi import Request

from quote_agent.config import Settings
from quote_agent.errors import ConfigError, ProviderError
from quote_agent.schemas.generation import GenerationPayload, ImagePart, TextPart

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 500

_ROLE_MAP = {"user": "user", "assistant": "model"}


def to_gemini_contents(payload: GenerationPayload) -> list[dict[str, Any]]:
    """
    Convert payload messages to the ``contents`` list accepted by generate_content.

    Raises ValueError if an image part cannot be decoded.
    """
    contents: list[dict[str, Any]] = []
    for message in payload.messages:
        parts: list[Any] = []
        for part in message.parts:
            if isinstance(part, TextPart):
                parts.append(part.text)
            elif isinstance(part, ImagePart):
                parts.append(part.to_blob())
        contents.append({"role": _ROLE_MAP[message.role], "parts": parts})
    return contents


def _preview(payload: GenerationPayload) -> str:
    """Short JSON preview of the payload for debug logs; image data is elided."""
    data = payload.model_dump()
    for message in data["messages"]:
        for part in message["parts"]:
            if part.get("type") == "image":
                part["image"] = f"<{len(part['image'])} chars>"
    return json.dumps(data, ensure_ascii=False)[:_PREVIEW_CHARS]


class GeminiClient:
    """Sends GenerationPayloads to Gemini and returns the generated text."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str,
        *,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key.strip() if api_key else None
        self.model_name = model_name
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        if self.api_key:
            genai.configure(api_key=self.api_key)
        else:
            logger.warning("No Gemini API key configured — /send will fail until one is set.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            settings.gemini_api_key,
            settings.gemini_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            timeout=settings.generation_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _generation_config(self) -> Optional[genai.GenerationConfig]:
        if self.temperature is None and self.max_output_tokens is None:
            return None
        return genai.GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

    def _call(self, payload: GenerationPayload, contents: list[dict[str, Any]]) -> str:
        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=payload.system_instruction or None,
        )
        response = model.generate_content(
            contents,
            generation_config=self._generation_config(),
        )
        return response.text

    async def generate(self, payload: GenerationPayload) -> str:
        """
        Generate text for ``payload``.

        Raises ConfigError before any outbound call when no API key is set,
        and ProviderError for every failure of the call itself.
        """
        if not self.is_configured:
            raise ConfigError(
                "Set GEMINI_API_KEY or GOOGLE_GENERATIVE_AI_API_KEY to enable generation."
            )

        if payload.has_image:
            image_chars = sum(len(part.image) for part in payload.images)
            logger.info("Processing request with image, image length: %d", image_chars)
        logger.debug("Gemini payload (%s): %s", self.model_name, _preview(payload))

        try:
            contents = to_gemini_contents(payload)
        except ValueError as exc:
            logger.warning("Malformed image in request: %s", exc)
            raise ProviderError(str(exc)) from exc

        call = asyncio.to_thread(self._call, payload, contents)
        try:
            if self.timeout:
                text = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                text = await call
        except asyncio.TimeoutError as exc:
            logger.error("Gemini call timed out after %.1fs", self.timeout)
            raise ProviderError(f"Gemini did not respond within {self.timeout}s") from exc
        except Exception as exc:
            logger.error("Error calling Gemini API (%s): %s", self.model_name, exc)
            raise ProviderError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("Gemini response (%d chars)", len(text))
        return text


def get_generation_client(request: Request) -> GeminiClient:
    """FastAPI dependency: the GeminiClient created in the lifespan handler."""
    return request.app.state.generation_client
