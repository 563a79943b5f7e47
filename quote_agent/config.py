"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Google AI — either variable name is accepted, GEMINI_API_KEY wins
    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    # Unset means the call waits for the provider or its transport to give up
    generation_timeout_seconds: Optional[float] = None

    # Assistant rules
    rules_path: str = "rules.txt"
    assistant_variant: str = "handyman"
    attach_rules_to_images: bool = True

    # HTTP
    api_prefix: str = "/gemini-ai"
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: str = "*"
    max_body_bytes: int = 50 * 1024 * 1024

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
