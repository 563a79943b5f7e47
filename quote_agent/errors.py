"""
Error taxonomy shared by services and routers.

Every error carries the HTTP status it maps to and a short label that becomes
the ``error`` field of the JSON body. Server-side failures also expose the
underlying message as ``message``.
"""

from __future__ import annotations

from typing import Optional


class QuoteAgentError(Exception):
    """Base class for errors that are converted into JSON responses."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, *, error: Optional[str] = None) -> None:
        super().__init__(message)
        if error is not None:
            self.error = error

    @property
    def message(self) -> str:
        return str(self)

    def to_body(self) -> dict[str, str]:
        """Return the JSON body for this error."""
        if self.status_code < 500:
            return {"error": self.error}
        return {"error": self.error, "message": self.message}


class ValidationError(QuoteAgentError):
    """Required input is missing or has the wrong type."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, error=message)


class ConfigError(QuoteAgentError):
    """No Gemini API key is configured."""

    error = "Gemini API key not configured"


class ProviderError(QuoteAgentError):
    """The Gemini call failed: auth, network, quota, blocked or malformed content."""

    error = "Failed to process request"


class StorageError(QuoteAgentError):
    """The rules file could not be read or written."""
