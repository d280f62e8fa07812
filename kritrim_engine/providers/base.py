"""Transport base classes."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from ..errors import InvalidImageFormat


_DATA_URL_RE = re.compile(r"^data:(image/[\w.+-]+);base64,(.*)$", re.DOTALL)


@dataclass(frozen=True)
class ImagePayload:
    mime_type: str
    data: str  # base64

    @classmethod
    def from_data_url(cls, value: str) -> "ImagePayload":
        match = _DATA_URL_RE.match(str(value or ""))
        if not match or not match.group(2):
            raise InvalidImageFormat()
        payload = cls(mime_type=match.group(1), data=match.group(2))
        payload.to_bytes()
        return payload

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "ImagePayload":
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))

    @classmethod
    def from_path(cls, path: Path) -> "ImagePayload":
        mime_type = mime_type_for_suffix(path.suffix)
        if mime_type is None:
            raise InvalidImageFormat(f"Unsupported image file type: {path.suffix or path.name}")
        return cls.from_bytes(path.read_bytes(), mime_type)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidImageFormat(f"Image payload is not valid base64: {exc}") from exc


@dataclass(frozen=True)
class ImageReply:
    """What the model sent back: an image, or text explaining why it did not."""

    image: ImagePayload | None = None
    text: str | None = None

    @property
    def has_image(self) -> bool:
        return self.image is not None


class ImageTransport(Protocol):
    name: str

    async def generate(self, image: ImagePayload, prompt: str) -> ImageReply:
        ...


class TextTransport(Protocol):
    name: str

    async def complete(self, prompt: str) -> str:
        ...


@dataclass(frozen=True)
class TransportPair:
    image: ImageTransport
    text: TextTransport


class TransportRegistry:
    def __init__(self, entries: Iterable[tuple[str, type, type]]) -> None:
        self._factories = {name: (image_cls, text_cls) for name, image_cls, text_cls in entries}

    def build(self, name: str) -> TransportPair:
        factories = self._factories.get(name)
        if factories is None:
            raise KeyError(f"Unknown provider: {name}. Available: {', '.join(self.list())}")
        image_cls, text_cls = factories
        return TransportPair(image=image_cls(), text=text_cls())

    def list(self) -> list[str]:
        return sorted(self._factories.keys())


def mime_type_for_suffix(suffix: str) -> str | None:
    lowered = str(suffix or "").strip().lower()
    if lowered == ".png":
        return "image/png"
    if lowered in {".jpg", ".jpeg"}:
        return "image/jpeg"
    if lowered == ".webp":
        return "image/webp"
    return None


def suffix_for_mime_type(mime_type: str | None) -> str:
    lowered = str(mime_type or "").strip().lower()
    if lowered == "image/jpeg":
        return ".jpg"
    if lowered == "image/webp":
        return ".webp"
    return ".png"
