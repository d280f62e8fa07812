"""Generation session orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .errors import MissingSourceImage
from .generation import GenerationClient
from .jobs import Job, JobTracker
from .prompts import PromptPlan, plan_selection
from .providers.base import ImagePayload
from .runs.events import EventWriter, emit_event
from .scheduler import DEFAULT_CONCURRENCY, BatchScheduler
from .selection import (
    CulturalSelection,
    FilterSelection,
    ImaginationInputs,
    ImaginationSelection,
    QuickTripSelection,
    Selection,
)
from .suggestions import SuggestionClient


class KritrimEngine:
    def __init__(
        self,
        generation: GenerationClient,
        suggestions: SuggestionClient,
        *,
        tracker: JobTracker | None = None,
        events: EventWriter | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self.generation = generation
        self.suggestions = suggestions
        self.tracker = tracker or JobTracker()
        self.events = events
        self.scheduler = BatchScheduler(generation, self.tracker, concurrency=concurrency, events=events)
        self.source_image: str | None = None
        self._contexts: dict[str, str] = {}

    def load_image(self, data_url: str) -> None:
        payload = ImagePayload.from_data_url(data_url)
        self.source_image = payload.to_data_url()
        emit_event(self.events, "image_loaded", mime_type=payload.mime_type)

    def load_image_file(self, path: Path) -> None:
        self.load_image(ImagePayload.from_path(path).to_data_url())

    async def generate(self, selection: Selection) -> dict[str, Job]:
        """Build prompts for ``selection`` and run them as a fresh session."""
        source_image = self._require_image()
        plans = await plan_selection(selection, self.suggestions)
        session = self._start(selection, plans)
        keys = [plan.key for plan in plans]
        if isinstance(selection, QuickTripSelection):
            await self.scheduler.run(source_image, keys, session)
        else:
            plan = plans[0]
            await self.scheduler.run_one(source_image, plan.key, session, context=plan.context)
        emit_event(self.events, "session_settled", session=session, summary=self._summary())
        return self.tracker.snapshot()

    async def generate_quick_trip(self, eras: list[str] | tuple[str, ...]) -> dict[str, Job]:
        return await self.generate(QuickTripSelection(tuple(eras)))

    async def generate_cultural(self, country: str | None, region: str | None) -> dict[str, Job]:
        return await self.generate(CulturalSelection(country=country, region=region))

    async def generate_imagination(self, inputs: ImaginationInputs) -> dict[str, Job]:
        return await self.generate(ImaginationSelection(inputs=inputs))

    async def generate_filter(self, filter_name: str | None) -> dict[str, Job]:
        return await self.generate(FilterSelection(filter_name=filter_name))

    async def regenerate(self, key: str) -> Job | None:
        """Re-run one job with the exact prompt it was first issued with."""
        source_image = self._require_image()
        try:
            _, session = self.tracker.begin_regenerate(key)
        except Exception as exc:
            emit_event(self.events, "regenerate_rejected", key=key, error=str(exc))
            raise
        emit_event(self.events, "regenerate_started", session=session, key=key)
        await self.scheduler.run_one(source_image, key, session, context=self._contexts.get(key, key))
        if self.tracker.session != session:
            # Reset or replaced while the request was in flight; the result was dropped.
            return None
        return self.tracker.get(key)

    async def suggest(self, field: str) -> str:
        return await self.suggestions.suggest(field)

    def jobs(self) -> dict[str, Job]:
        return self.tracker.snapshot()

    def album_images(self) -> dict[str, str]:
        return self.tracker.results()

    def reset(self) -> None:
        session = self.tracker.reset()
        self.source_image = None
        self._contexts = {}
        emit_event(self.events, "session_reset", session=session)

    def _start(self, selection: Selection, plans: list[PromptPlan]) -> int:
        session = self.tracker.start_session({plan.key: plan.prompt for plan in plans})
        self._contexts = {plan.key: plan.context for plan in plans}
        emit_event(
            self.events,
            "session_started",
            session=session,
            mode=selection.mode,
            jobs=[{"key": plan.key, "context": plan.context, "prompt": plan.prompt} for plan in plans],
        )
        return session

    def _require_image(self) -> str:
        if not self.source_image:
            raise MissingSourceImage()
        return self.source_image

    def _summary(self) -> dict[str, Any]:
        counts: dict[str, int] = {}
        for job in self.tracker.snapshot().values():
            counts[job.status.value] = counts.get(job.status.value, 0) + 1
        return counts
