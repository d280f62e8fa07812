from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from kritrim_engine.errors import GenerationBlocked, GenerationFailed, InvalidImageFormat
from kritrim_engine.generation import GenerationClient
from kritrim_engine.prompts import get_fallback_prompt
from kritrim_engine.providers.base import ImagePayload, ImageReply
from kritrim_engine.runs.events import EventWriter

SOURCE = "data:image/png;base64,ZmFrZS1zb3VyY2U="
RESULT = ImagePayload(mime_type="image/png", data="cmVzdWx0")


class ScriptedTransport:
    """Replays a list of replies (or exceptions), recording every prompt it sees."""

    name = "scripted"

    def __init__(self, script: list[ImageReply | Exception]) -> None:
        self.script = list(script)
        self.prompts: list[str] = []

    async def generate(self, image: ImagePayload, prompt: str) -> ImageReply:
        self.prompts.append(prompt)
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


async def _no_sleep(delay: float) -> None:
    return None


def _client(transport: ScriptedTransport, events: EventWriter | None = None) -> GenerationClient:
    return GenerationClient(transport, events=events, sleep=_no_sleep)


def test_invalid_source_image_issues_no_request() -> None:
    transport = ScriptedTransport([])
    with pytest.raises(InvalidImageFormat):
        asyncio.run(_client(transport).generate("not-a-data-url", "prompt", "Viking Warrior"))
    assert transport.prompts == []


def test_success_returns_data_url_without_fallback() -> None:
    transport = ScriptedTransport([ImageReply(image=RESULT)])
    result = asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert result == "data:image/png;base64,cmVzdWx0"
    assert transport.prompts == ["primary prompt"]


def test_text_only_reply_triggers_exactly_one_fallback() -> None:
    transport = ScriptedTransport([ImageReply(text="I can't do that."), ImageReply(image=RESULT)])
    result = asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert result == RESULT.to_data_url()
    assert transport.prompts == ["primary prompt", get_fallback_prompt("Viking Warrior")]


def test_blocked_twice_raises_generation_blocked() -> None:
    transport = ScriptedTransport([ImageReply(text="no"), ImageReply(text="still no")])
    with pytest.raises(GenerationBlocked) as excinfo:
        asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Golden Hour"))
    assert excinfo.value.classification == "theme"
    assert excinfo.value.last_text == "still no"
    assert "still no" in str(excinfo.value)
    assert len(transport.prompts) == 2


def test_transient_errors_retry_within_the_primary_attempt() -> None:
    transport = ScriptedTransport([RuntimeError("500 INTERNAL"), ImageReply(image=RESULT)])
    result = asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert result == RESULT.to_data_url()
    assert transport.prompts == ["primary prompt", "primary prompt"]


def test_exhausted_retries_fail_primary_stage_without_fallback() -> None:
    transport = ScriptedTransport([RuntimeError("500 INTERNAL")] * 3)
    with pytest.raises(GenerationFailed) as excinfo:
        asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert excinfo.value.stage == "primary"
    assert "500 INTERNAL" in str(excinfo.value)
    assert transport.prompts == ["primary prompt"] * 3


def test_non_transient_error_fails_immediately() -> None:
    transport = ScriptedTransport([RuntimeError("400 INVALID_ARGUMENT")])
    with pytest.raises(GenerationFailed):
        asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert len(transport.prompts) == 1


def test_fallback_error_reports_fallback_stage() -> None:
    transport = ScriptedTransport([ImageReply(text="blocked"), RuntimeError("quota exceeded")])
    with pytest.raises(GenerationFailed) as excinfo:
        asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert excinfo.value.stage == "fallback"
    assert str(excinfo.value).startswith("The AI model failed with both original and fallback prompts.")


def test_generation_events_are_logged(tmp_path: Path) -> None:
    events = EventWriter(tmp_path / "events.jsonl", "run-1")
    transport = ScriptedTransport([ImageReply(text="blocked"), ImageReply(image=RESULT)])
    asyncio.run(_client(transport, events).generate(SOURCE, "primary prompt", "Viking Warrior"))
    types = [event["type"] for event in events.read()]
    assert types == ["generation_attempt", "generation_blocked", "generation_attempt", "generation_succeeded"]
    blocked = events.read()[1]
    assert blocked["classification"] == "era"


def test_fallback_attempt_has_its_own_retry_budget() -> None:
    transport = ScriptedTransport(
        [
            ImageReply(text="blocked"),
            RuntimeError("500 INTERNAL"),
            RuntimeError("500 INTERNAL"),
            ImageReply(image=RESULT),
        ]
    )
    result = asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert result == RESULT.to_data_url()
    assert transport.prompts == ["primary prompt"] + [get_fallback_prompt("Viking Warrior")] * 3


def test_fallback_retries_exhausted_fail_fallback_stage() -> None:
    transport = ScriptedTransport([ImageReply(text="blocked")] + [RuntimeError("500 INTERNAL")] * 3)
    with pytest.raises(GenerationFailed) as excinfo:
        asyncio.run(_client(transport).generate(SOURCE, "primary prompt", "Viking Warrior"))
    assert excinfo.value.stage == "fallback"
    assert len(transport.prompts) == 4
    assert transport.script == []
