"""Surprise-me suggestions and imagination prompt refinement."""

from __future__ import annotations

from .catalog import UNSPECIFIED_FIGURE_SIZE
from .errors import EmptySuggestion, InvalidCategory, SuggestionFailed
from .providers.base import TextTransport
from .runs.events import EventWriter, emit_event
from .selection import ImaginationInputs


_BASE_INSTRUCTION = (
    "Generate a short, creative, and visually rich description suitable for an AI image "
    "generation prompt. Be concise, under 15 words, and cover a wide range of genres like "
    "fantasy, sci-fi, historical, and surreal. Do not use quotes or introductory phrases. "
    "The category is: "
)

_CATEGORY_INSTRUCTIONS = {
    "scenery": "a scene or location.",
    "attire": "an outfit or clothing style.",
    "pose": "a character's pose or action. Make it under 10 words.",
    "hair_style": "a unique hair style. Make it under 10 words.",
    "eye_style": "a character's eye style or expression. Make it under 10 words.",
}

_CATEGORY_ALIASES = {
    "hairStyle": "hair_style",
    "eyeStyle": "eye_style",
}

SUGGESTION_FIELDS: tuple[str, ...] = tuple(_CATEGORY_INSTRUCTIONS)


def normalize_category(field: str) -> str:
    category = _CATEGORY_ALIASES.get(field, field)
    if category not in _CATEGORY_INSTRUCTIONS:
        raise InvalidCategory(field)
    return category


def suggestion_instruction(field: str) -> str:
    return _BASE_INSTRUCTION + _CATEGORY_INSTRUCTIONS[normalize_category(field)]


def assemble_raw_prompt(inputs: ImaginationInputs) -> str:
    parts: list[str] = []
    if inputs.image_framing:
        parts.append(f"The image framing is a {inputs.image_framing}.")
    if inputs.aspect_ratio:
        parts.append(f"The aspect ratio is {inputs.aspect_ratio}.")
    if inputs.scenery:
        parts.append(f"The setting is: {inputs.scenery}.")
    if inputs.attire:
        parts.append(f"They are wearing: {inputs.attire}.")
    if inputs.pose:
        parts.append(f"Their pose is: {inputs.pose}.")
    if inputs.hair_style:
        parts.append(f"Their hair style is: {inputs.hair_style}.")
    if inputs.eye_style:
        parts.append(f"Their eye style is: {inputs.eye_style}.")
    if inputs.figure_size and inputs.figure_size != UNSPECIFIED_FIGURE_SIZE:
        parts.append(f"Their body type is described as: {inputs.figure_size}.")
    if inputs.style:
        parts.append(f"The artistic style is: {inputs.style}.")
    return f"Reimagine the person in this photo. {' '.join(parts)}".strip()


def refinement_instruction(raw_prompt: str) -> str:
    return (
        "You are an expert prompt engineer. Your task is to refine the following user-provided "
        "details into a single, cohesive, and descriptive paragraph for an AI image generator. "
        "Combine the elements naturally. Do not add any new concepts. Focus on making the "
        "description vivid and coherent. Do not use markdown or special formatting. "
        f'The user\'s details are: "{raw_prompt}"'
    )


class SuggestionClient:
    def __init__(self, transport: TextTransport, *, events: EventWriter | None = None) -> None:
        self.transport = transport
        self.events = events

    async def suggest(self, field: str) -> str:
        category = normalize_category(field)
        prompt = suggestion_instruction(category)
        try:
            text = await self.transport.complete(prompt)
        except Exception as exc:
            emit_event(self.events, "suggestion_failed", category=category, error=str(exc))
            raise SuggestionFailed() from exc
        suggestion = str(text or "").strip()
        if not suggestion:
            emit_event(self.events, "suggestion_failed", category=category, error="empty")
            raise EmptySuggestion()
        emit_event(self.events, "suggestion_ready", category=category, text=suggestion)
        return suggestion

    async def refine(self, inputs: ImaginationInputs) -> str:
        """Best-effort rewrite of the imagination inputs; never raises."""
        raw_prompt = assemble_raw_prompt(inputs)
        try:
            text = await self.transport.complete(refinement_instruction(raw_prompt))
        except Exception as exc:
            emit_event(self.events, "prompt_refine_failed", error=str(exc))
            return raw_prompt
        refined = str(text or "").strip()
        if not refined:
            emit_event(self.events, "prompt_refine_failed", error="empty")
            return raw_prompt
        emit_event(self.events, "prompt_refined", chars=len(refined))
        return refined
