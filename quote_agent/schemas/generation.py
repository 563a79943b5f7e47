"""
Provider-neutral generation payload.

A ``GenerationPayload`` is an optional system instruction plus an ordered list
of ``Message`` objects. Each message is made of tagged parts — ``TextPart`` or
``ImagePart`` — discriminated on ``type``.
"""

from __future__ import annotations

import base64
import binascii
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    """An image carried as a data URL, or as bare base64 (assumed JPEG)."""

    type: Literal["image"] = "image"
    image: str

    def to_blob(self) -> dict[str, object]:
        """
        Decode the image into ``{"mime_type": ..., "data": bytes}``.

        Raises ValueError when the data URL is not base64 encoded or the
        payload does not decode.
        """
        mime_type = DEFAULT_IMAGE_MIME_TYPE
        payload = self.image.strip()
        if payload.startswith("data:"):
            header, sep, payload = payload.partition(",")
            if not sep:
                raise ValueError("Image data URL has no payload")
            meta = header[len("data:"):].split(";")
            if "base64" not in meta[1:]:
                raise ValueError("Image data URL must be base64 encoded")
            if meta[0]:
                mime_type = meta[0]
        try:
            data = base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Image payload is not valid base64: {exc}") from exc
        if not data:
            raise ValueError("Image payload is empty")
        return {"mime_type": mime_type, "data": data}


Part = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class Message(BaseModel):
    role: Literal["user", "assistant"]
    parts: list[Part]

    @classmethod
    def from_text(cls, role: str, text: str) -> "Message":
        return cls(role=role, parts=[TextPart(text=text)])


class GenerationPayload(BaseModel):
    system_instruction: Optional[str] = None
    messages: list[Message]

    @property
    def images(self) -> list[ImagePart]:
        return [p for m in self.messages for p in m.parts if isinstance(p, ImagePart)]

    @property
    def has_image(self) -> bool:
        return bool(self.images)
