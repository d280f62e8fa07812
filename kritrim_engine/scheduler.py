"""Fixed-size worker pool that drains a batch of generation jobs."""

from __future__ import annotations

import asyncio
from typing import Sequence

from .generation import GenerationClient
from .jobs import JobTracker
from .runs.events import EventWriter, emit_event

DEFAULT_CONCURRENCY = 2


class BatchScheduler:
    def __init__(
        self,
        client: GenerationClient,
        tracker: JobTracker,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        events: EventWriter | None = None,
    ) -> None:
        self.client = client
        self.tracker = tracker
        self.concurrency = max(1, int(concurrency))
        self.events = events

    async def run(self, source_image: str, keys: Sequence[str], session: int) -> None:
        """Drive every key to ``done`` or ``error``; one failing job never stops the others.

        Repeated keys are queued once so no key ever has two drivers.
        """
        unique_keys = list(dict.fromkeys(keys))
        queue: asyncio.Queue[str] = asyncio.Queue()
        for key in unique_keys:
            queue.put_nowait(key)
        worker_count = min(self.concurrency, max(1, len(unique_keys)))
        emit_event(self.events, "batch_started", session=session, jobs=len(unique_keys), workers=worker_count)
        workers = [
            asyncio.create_task(self._worker(index, queue, source_image, session))
            for index in range(worker_count)
        ]
        await asyncio.gather(*workers)
        emit_event(self.events, "batch_finished", session=session)

    async def run_one(self, source_image: str, key: str, session: int, *, context: str | None = None) -> None:
        await self._drive(key, source_image, session, context=context)

    async def _worker(self, index: int, queue: asyncio.Queue[str], source_image: str, session: int) -> None:
        while True:
            try:
                key = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            emit_event(self.events, "job_claimed", session=session, key=key, worker=index)
            await self._drive(key, source_image, session)

    async def _drive(self, key: str, source_image: str, session: int, *, context: str | None = None) -> None:
        job = self.tracker.get(key)
        prompt = job.prompt if job is not None else None
        if not prompt:
            self.tracker.mark_error(key, "Could not find original prompt to regenerate.", session)
            emit_event(self.events, "job_failed", session=session, key=key, error="missing prompt")
            return
        try:
            result = await self.client.generate(source_image, prompt, context or key)
        except Exception as exc:
            applied = self.tracker.mark_error(key, str(exc), session)
            emit_event(self.events, "job_failed", session=session, key=key, error=str(exc), applied=applied)
            return
        applied = self.tracker.mark_done(key, result, session)
        emit_event(self.events, "job_done", session=session, key=key, applied=applied)
