"""Shared fixtures: a file-backed PromptStore and a recording fake Gemini client."""

from __future__ import annotations

import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from quote_agent.config import settings
from quote_agent.errors import ConfigError
from quote_agent.main import app
from quote_agent.schemas.generation import GenerationPayload
from quote_agent.services.gemini import get_generation_client
from quote_agent.services.prompt_store import PromptStore, get_prompt_store

PREFIX = settings.api_prefix
STORED_RULES = "You are a professional handyman quote assistant.\nASK ONE question at a time."
DATA_URL = "data:image/png;base64,iVBORw0KGgo="


class FakeGenerationClient:
    """Stands in for GeminiClient and records every payload it receives."""

    def __init__(self, reply: str = "model text", error: Optional[Exception] = None,
                 configured: bool = True) -> None:
        self.reply = reply
        self.error = error
        self.configured = configured
        self.payloads: list[GenerationPayload] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, payload: GenerationPayload) -> str:
        if not self.configured:
            raise ConfigError("Set GEMINI_API_KEY or GOOGLE_GENERATIVE_AI_API_KEY to enable generation.")
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def rules_path(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text(STORED_RULES, encoding="utf-8")
    return path


@pytest.fixture
def prompt_store(rules_path) -> PromptStore:
    store = PromptStore(rules_path, "default rules")
    asyncio.run(store.load())
    return store


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def client(prompt_store, fake_client):
    app.dependency_overrides[get_prompt_store] = lambda: prompt_store
    app.dependency_overrides[get_generation_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
