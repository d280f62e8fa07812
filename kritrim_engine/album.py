"""Album page compositing for finished results."""

from __future__ import annotations

import io
import math
from typing import Mapping

from PIL import Image, ImageDraw, ImageFont, ImageOps

from .providers.base import ImagePayload

ALBUM_TITLE = "Generated with Kritrim"

_CARD_IMAGE_SIZE = (480, 600)
_CARD_PADDING = 24
_CAPTION_HEIGHT = 64
_GUTTER = 48
_MARGIN = 72
_HEADER_HEIGHT = 120
_BACKGROUND = (24, 24, 24)
_CARD_COLOR = (250, 248, 242)
_CAPTION_COLOR = (40, 40, 40)
_TITLE_COLOR = (235, 235, 235)


def compose_album(images: Mapping[str, str], *, title: str = ALBUM_TITLE, columns: int | None = None) -> str:
    """Lay out each ``label -> image data URL`` as a captioned card; return a JPEG data URL."""
    if not images:
        raise ValueError("No successful images to put in an album.")
    count = len(images)
    cols = columns or (1 if count == 1 else 2 if count <= 4 else 3)
    rows = math.ceil(count / cols)

    card_w = _CARD_IMAGE_SIZE[0] + _CARD_PADDING * 2
    card_h = _CARD_IMAGE_SIZE[1] + _CARD_PADDING * 2 + _CAPTION_HEIGHT
    width = _MARGIN * 2 + cols * card_w + (cols - 1) * _GUTTER
    height = _MARGIN * 2 + _HEADER_HEIGHT + rows * card_h + (rows - 1) * _GUTTER

    page = Image.new("RGB", (width, height), _BACKGROUND)
    draw = ImageDraw.Draw(page)
    font = ImageFont.load_default()
    _draw_centered(draw, title, (0, _MARGIN, width, _MARGIN + _HEADER_HEIGHT // 2), font, _TITLE_COLOR)

    for idx, (label, data_url) in enumerate(images.items()):
        row, col = divmod(idx, cols)
        left = _MARGIN + col * (card_w + _GUTTER)
        top = _MARGIN + _HEADER_HEIGHT + row * (card_h + _GUTTER)
        draw.rectangle((left, top, left + card_w, top + card_h), fill=_CARD_COLOR)
        photo = _load_photo(data_url)
        page.paste(photo, (left + _CARD_PADDING, top + _CARD_PADDING))
        caption_top = top + _CARD_PADDING + _CARD_IMAGE_SIZE[1]
        _draw_centered(draw, label, (left, caption_top, left + card_w, caption_top + _CAPTION_HEIGHT), font, _CAPTION_COLOR)

    buf = io.BytesIO()
    page.save(buf, format="JPEG", quality=90)
    return ImagePayload.from_bytes(buf.getvalue(), "image/jpeg").to_data_url()


def _load_photo(data_url: str) -> Image.Image:
    raw = ImagePayload.from_data_url(data_url).to_bytes()
    with Image.open(io.BytesIO(raw)) as image:
        # Crop to the card's aspect rather than letterboxing.
        return ImageOps.fit(image.convert("RGB"), _CARD_IMAGE_SIZE)


def _draw_centered(
    draw: ImageDraw.ImageDraw,
    text: str,
    box: tuple[int, int, int, int],
    font: ImageFont.ImageFont | ImageFont.FreeTypeFont,
    fill: tuple[int, int, int],
) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_w = right - left
    text_h = bottom - top
    x = box[0] + (box[2] - box[0] - text_w) // 2
    y = box[1] + (box[3] - box[1] - text_h) // 2
    draw.text((x, y), text, fill=fill, font=font)
