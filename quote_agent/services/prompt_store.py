"""
Prompt store — the file-backed assistant rules.

One instance lives on ``app.state`` for the lifetime of the process. The
in-memory copy (``current``) is what /send uses; it is refreshed on every read
and write, so an update through POST /rules applies to the next message.
Concurrent writers are not serialised: the last write wins.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from fastapi import Request

from quote_agent.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


class PromptStore:
    """Read/replace access to the rules file with an in-memory copy."""

    def __init__(self, path: str | Path, default_content: str) -> None:
        self.path = Path(path)
        self._default_content = default_content
        self._current: Optional[str] = None

    @property
    def current(self) -> str:
        """The rules as last loaded, read or written."""
        if self._current is None:
            raise StorageError("Rules have not been loaded", error="Failed to read rules")
        return self._current

    async def load(self) -> str:
        """Load the rules at startup, seeding the file with the default prompt if missing."""
        if not await asyncio.to_thread(self.path.exists):
            logger.info("Rules file %s not found — seeding with default prompt", self.path)
            await self.write(self._default_content)
            return self._default_content
        content = await self.read()
        logger.info("Loaded rules from %s (%d chars)", self.path, len(content))
        return content

    async def read(self) -> str:
        """Return the rules text verbatim from disk."""
        try:
            content = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read rules from %s: %s", self.path, exc)
            raise StorageError(str(exc), error="Failed to read rules") from exc
        self._current = content
        return content

    async def write(self, content: Any) -> None:
        """Replace the whole rules text. The previous content is not kept."""
        if content is None or not isinstance(content, str):
            raise ValidationError("Content is required and must be a string")
        try:
            await asyncio.to_thread(self._replace_file, content)
        except OSError as exc:
            logger.error("Failed to write rules to %s: %s", self.path, exc)
            raise StorageError(str(exc), error="Failed to update rules") from exc
        self._current = content
        logger.info("Rules updated (%d chars)", len(content))

    def _replace_file(self, content: str) -> None:
        # Readers see either the old or the new text, never a partial write.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def get_prompt_store(request: Request) -> PromptStore:
    """FastAPI dependency: the PromptStore created in the lifespan handler."""
    return request.app.state.prompt_store
