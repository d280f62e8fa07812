"""Dry-run transports (offline)."""

from __future__ import annotations

import hashlib
import io
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

from .base import ImagePayload, ImageReply

_DRYRUN_SIZE = (512, 640)

_DRYRUN_SUGGESTIONS = (
    "A neon-lit floating market above the clouds",
    "Baroque armor woven from living ivy",
    "Mid-leap across a moonlit rooftop",
    "Silver braids laced with tiny lanterns",
    "Glowing amber eyes with a calm gaze",
)


class DryRunImageTransport:
    """Renders a flat placeholder image; prompts containing a blocked term get text instead."""

    name = "dryrun"

    def __init__(self, blocked_terms: Iterable[str] = ()) -> None:
        self.blocked_terms = tuple(term.lower() for term in blocked_terms)

    async def generate(self, image: ImagePayload, prompt: str) -> ImageReply:
        lowered = prompt.lower()
        if any(term in lowered for term in self.blocked_terms):
            return ImageReply(text="I can't create that image.")
        canvas = Image.new("RGB", _DRYRUN_SIZE, _color_from_prompt(prompt))
        draw = ImageDraw.Draw(canvas)
        draw.text((20, 20), f"dryrun\n{prompt[:60]}", fill=(255, 255, 255), font=ImageFont.load_default())
        buf = io.BytesIO()
        canvas.save(buf, format="PNG")
        return ImageReply(image=ImagePayload.from_bytes(buf.getvalue(), "image/png"))


class DryRunTextTransport:
    name = "dryrun"

    async def complete(self, prompt: str) -> str:
        marker = "The user's details are: \""
        if marker in prompt:
            details = prompt.split(marker, 1)[1].rstrip().rstrip('"')
            return details.strip()
        digest = hashlib.sha256(prompt.encode("utf-8")).digest()
        return _DRYRUN_SUGGESTIONS[digest[0] % len(_DRYRUN_SUGGESTIONS)]


def _color_from_prompt(prompt: str) -> tuple[int, int, int]:
    digest = hashlib.sha256(prompt.encode("utf-8")).digest()
    return digest[0], digest[1], digest[2]
