"""Gemini transports (image editing and short text)."""

from __future__ import annotations

import base64
import os
from typing import Any, Sequence

from google import genai
from google.genai import types

from .base import ImagePayload, ImageReply

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image-preview"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"


def _api_key() -> str:
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise RuntimeError("GEMINI_API_KEY or GOOGLE_API_KEY not set.")
    return api_key


class GeminiImageTransport:
    name = "gemini"

    def __init__(self, model: str | None = None, client: Any | None = None) -> None:
        self.model = model or str(os.getenv("KRITRIM_IMAGE_MODEL") or "").strip() or DEFAULT_IMAGE_MODEL
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=_api_key())
        return self._client

    async def generate(self, image: ImagePayload, prompt: str) -> ImageReply:
        client = self._get_client()
        parts = [
            types.Part(inline_data=types.Blob(data=image.to_bytes(), mime_type=image.mime_type)),
            types.Part(text=prompt),
        ]
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=parts,
            config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
        )
        candidates = getattr(response, "candidates", []) or []
        blob = _first_image_blob(candidates)
        if blob is not None:
            return ImageReply(image=blob)
        return ImageReply(text=_response_text(response, candidates))


class GeminiTextTransport:
    name = "gemini"

    def __init__(self, model: str | None = None, client: Any | None = None) -> None:
        self.model = model or str(os.getenv("KRITRIM_TEXT_MODEL") or "").strip() or DEFAULT_TEXT_MODEL
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=_api_key())
        return self._client

    async def complete(self, prompt: str) -> str:
        client = self._get_client()
        response = await client.aio.models.generate_content(model=self.model, contents=prompt)
        candidates = getattr(response, "candidates", []) or []
        return _response_text(response, candidates)


def _first_image_blob(candidates: Sequence[Any]) -> ImagePayload | None:
    for candidate in candidates[:1]:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or getattr(candidate, "parts", None) or []
        for part in parts:
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if data is None:
                continue
            mime_type = getattr(inline_data, "mime_type", None) or "image/png"
            if isinstance(data, str):
                # Already base64 (REST-shaped payloads).
                return ImagePayload(mime_type=mime_type, data=data)
            if isinstance(data, (bytes, bytearray)):
                return ImagePayload(mime_type=mime_type, data=base64.b64encode(bytes(data)).decode("ascii"))
    return None


def _response_text(response: Any, candidates: Sequence[Any]) -> str:
    try:
        text = getattr(response, "text", None)
    except Exception:
        text = None
    if isinstance(text, str) and text.strip():
        return text.strip()
    chunks: list[str] = []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or getattr(candidate, "parts", None) or []
        for part in parts:
            chunk = getattr(part, "text", None)
            if isinstance(chunk, str) and chunk.strip():
                chunks.append(chunk.strip())
    return "\n".join(chunks).strip()
