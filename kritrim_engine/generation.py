"""Image generation with transient-error retries and a blocked-prompt fallback."""

from __future__ import annotations

import asyncio
from typing import Any

from .errors import GenerationBlocked, GenerationFailed
from .prompts import classify_context, get_fallback_prompt
from .providers.base import ImagePayload, ImageReply, ImageTransport
from .retry import RetryPolicy, SleepFn, retry_async
from .runs.events import EventWriter, emit_event


class GenerationClient:
    """Turns ``(source image, prompt, context)`` into a generated image data URL.

    Each call makes at most two logical attempts: the original prompt, and, only
    when the model answered with text instead of an image, one fallback prompt
    derived from ``context``. Both attempts get their own retry budget for
    transient server errors.
    """

    def __init__(
        self,
        transport: ImageTransport,
        *,
        events: EventWriter | None = None,
        policy: RetryPolicy | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.transport = transport
        self.events = events
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def generate(self, source_image: str, prompt: str, context: str) -> str:
        image = ImagePayload.from_data_url(source_image)

        try:
            reply = await self._call(image, prompt, context, stage="primary")
        except Exception as exc:
            emit_event(self.events, "generation_failed", context=context, stage="primary", error=str(exc))
            raise GenerationFailed(str(exc), stage="primary") from exc
        if reply.has_image:
            return self._succeeded(reply.image, context, stage="primary")

        classification = classify_context(context)
        fallback_prompt = get_fallback_prompt(context)
        emit_event(
            self.events,
            "generation_blocked",
            context=context,
            classification=classification,
            text=reply.text,
        )

        try:
            fallback_reply = await self._call(image, fallback_prompt, context, stage="fallback")
        except Exception as exc:
            emit_event(self.events, "generation_failed", context=context, stage="fallback", error=str(exc))
            raise GenerationFailed(str(exc), stage="fallback") from exc
        if fallback_reply.has_image:
            return self._succeeded(fallback_reply.image, context, stage="fallback")

        emit_event(
            self.events,
            "generation_failed",
            context=context,
            stage="fallback",
            error="blocked",
            text=fallback_reply.text,
        )
        raise GenerationBlocked(
            context=context,
            classification=classification,
            fallback_prompt=fallback_prompt,
            last_text=fallback_reply.text,
        )

    async def _call(self, image: ImagePayload, prompt: str, context: str, *, stage: str) -> ImageReply:
        attempts = 0

        async def _attempt() -> ImageReply:
            nonlocal attempts
            attempts += 1
            emit_event(
                self.events,
                "generation_attempt",
                context=context,
                stage=stage,
                attempt=attempts,
                max_attempts=self.policy.max_attempts,
                transport=getattr(self.transport, "name", None),
            )
            return await self.transport.generate(image, prompt)

        def _on_retry(attempt: int, delay: float, exc: BaseException) -> None:
            emit_event(
                self.events,
                "generation_retry_scheduled",
                context=context,
                stage=stage,
                attempt=attempt,
                delay_s=delay,
                error=str(exc),
            )

        return await retry_async(_attempt, policy=self.policy, sleep=self._sleep, on_retry=_on_retry)

    def _succeeded(self, image: ImagePayload, context: str, *, stage: str) -> str:
        payload: dict[str, Any] = {"context": context, "stage": stage, "mime_type": image.mime_type}
        emit_event(self.events, "generation_succeeded", **payload)
        return image.to_data_url()
