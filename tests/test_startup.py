import pytest
from fastapi.testclient import TestClient

from quote_agent.config import Settings, get_settings
from quote_agent.errors import ConfigError
from quote_agent.main import app
from quote_agent.utils.prompts import HANDYMAN_QUOTE_PROMPT, get_default_prompt

from tests.conftest import PREFIX


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_GENERATIVE_AI_API_KEY", raising=False)
    monkeypatch.setenv("RULES_PATH", str(tmp_path / "rules.txt"))
    get_settings.cache_clear()
    yield tmp_path / "rules.txt"
    get_settings.cache_clear()


def test_startup_seeds_rules_and_reports_missing_key(fresh_settings):
    with TestClient(app) as client:
        assert fresh_settings.read_text(encoding="utf-8") == HANDYMAN_QUOTE_PROMPT
        assert client.get(f"{PREFIX}/rules").json() == {"content": HANDYMAN_QUOTE_PROMPT}

        ready = client.get("/ready")
        assert ready.status_code == 503
        assert ready.json() == {"rules": "ok", "gemini_api_key": "error"}

        resp = client.post(f"{PREFIX}/send", json={"text": "toilet is leaking"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Gemini API key not configured"


def test_api_key_from_either_variable(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "google-key")
    assert Settings(_env_file=None).gemini_api_key == "google-key"

    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    assert Settings(_env_file=None).gemini_api_key == "gemini-key"


def test_settings_defaults(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY", "PORT", "API_PREFIX", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    current = Settings(_env_file=None)
    assert current.port == 3000
    assert current.api_prefix == "/gemini-ai"
    assert current.gemini_model == "gemini-2.5-flash"
    assert current.allowed_origins_list == ["*"]
    assert current.max_body_bytes == 50 * 1024 * 1024
    assert current.gemini_api_key is None


def test_unknown_assistant_variant():
    assert get_default_prompt(" Handyman ") == HANDYMAN_QUOTE_PROMPT
    with pytest.raises(ConfigError, match="Unknown assistant variant"):
        get_default_prompt("plumber-pro")
