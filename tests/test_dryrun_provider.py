from __future__ import annotations

import asyncio
import io

import pytest
from PIL import Image

from kritrim_engine.providers import default_registry
from kritrim_engine.providers.base import ImagePayload
from kritrim_engine.providers.dryrun import DryRunImageTransport, DryRunTextTransport
from kritrim_engine.suggestions import refinement_instruction

SOURCE = ImagePayload.from_data_url("data:image/png;base64,ZmFrZS1zb3VyY2U=")


def test_dryrun_image_is_a_real_png() -> None:
    reply = asyncio.run(DryRunImageTransport().generate(SOURCE, "A dramatic coastline"))
    assert reply.has_image
    assert reply.image.mime_type == "image/png"
    with Image.open(io.BytesIO(reply.image.to_bytes())) as image:
        assert image.size == (512, 640)


def test_dryrun_image_color_is_stable_per_prompt() -> None:
    transport = DryRunImageTransport()
    first = asyncio.run(transport.generate(SOURCE, "A dramatic coastline"))
    second = asyncio.run(transport.generate(SOURCE, "A dramatic coastline"))
    assert first.image == second.image


def test_dryrun_blocked_terms_return_text() -> None:
    reply = asyncio.run(DryRunImageTransport(blocked_terms=("Gladiator",)).generate(SOURCE, "Roman gladiator"))
    assert not reply.has_image
    assert reply.text == "I can't create that image."


def test_dryrun_text_echoes_refinement_details() -> None:
    transport = DryRunTextTransport()
    reply = asyncio.run(transport.complete(refinement_instruction("Reimagine the person in this photo. X.")))
    assert reply == "Reimagine the person in this photo. X."
    suggestion = asyncio.run(transport.complete("The category is: a scene or location."))
    assert suggestion


def test_registry_builds_named_pairs() -> None:
    registry = default_registry()
    assert registry.list() == ["dryrun", "gemini"]
    pair = registry.build("dryrun")
    assert isinstance(pair.image, DryRunImageTransport)
    assert isinstance(pair.text, DryRunTextTransport)
    with pytest.raises(KeyError):
        registry.build("openai")
