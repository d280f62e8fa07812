from __future__ import annotations

from pathlib import Path

import pytest

from kritrim_engine.errors import InvalidImageFormat
from kritrim_engine.providers.base import ImagePayload, mime_type_for_suffix, suffix_for_mime_type


def test_from_data_url_splits_mime_and_payload() -> None:
    payload = ImagePayload.from_data_url("data:image/webp;base64,ZmFrZQ==")
    assert payload.mime_type == "image/webp"
    assert payload.to_bytes() == b"fake"
    assert payload.to_data_url() == "data:image/webp;base64,ZmFrZQ=="


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not a data url",
        "data:text/plain;base64,ZmFrZQ==",
        "data:image/png,ZmFrZQ==",
        "data:image/png;base64,",
        "data:image/png;base64,@@not-base64@@",
    ],
)
def test_from_data_url_rejects_malformed_values(value: str) -> None:
    with pytest.raises(InvalidImageFormat):
        ImagePayload.from_data_url(value)


def test_from_path_uses_suffix(tmp_path: Path) -> None:
    path = tmp_path / "photo.JPEG"
    path.write_bytes(b"jpeg-bytes")
    payload = ImagePayload.from_path(path)
    assert payload.mime_type == "image/jpeg"
    assert payload.to_bytes() == b"jpeg-bytes"

    with pytest.raises(InvalidImageFormat):
        ImagePayload.from_path(tmp_path / "photo.gif")


def test_suffix_mapping() -> None:
    assert mime_type_for_suffix(".png") == "image/png"
    assert mime_type_for_suffix(".bmp") is None
    assert suffix_for_mime_type("image/jpeg") == ".jpg"
    assert suffix_for_mime_type("image/webp") == ".webp"
    assert suffix_for_mime_type(None) == ".png"
