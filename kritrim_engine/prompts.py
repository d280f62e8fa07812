"""Prompt templates for every generation mode plus the blocked-prompt fallback."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from .errors import MissingRequiredField, MissingSelection
from .selection import (
    CulturalSelection,
    FilterSelection,
    ImaginationInputs,
    ImaginationSelection,
    QuickTripSelection,
    Selection,
)


QUALITY_SUFFIX = (
    "The final output should be an award-winning photograph of masterpiece quality, "
    "with cinematic composition and lighting. The image must be hyper-detailed, "
    "photorealistic, and in very high quality 8k resolution."
)

IMAGINATION_THEME_KEY = "Your Imagination"
IMAGINATION_DEFAULT_CONTEXT = "a custom scene"
CONTEXT_MAX_CHARS = 50

_ERA_CONTEXT_RE = re.compile(
    r"\d{4}s|\b(viking|roman|samurai|detective|hippie|punk|grunge|pharaoh|gladiator|knight"
    r"|artist|noble|pirate|explorer|flapper|star)\b",
    re.IGNORECASE,
)


class PromptRefiner(Protocol):
    async def refine(self, inputs: ImaginationInputs) -> str:
        ...


@dataclass(frozen=True)
class PromptPlan:
    """One job to enqueue: display key, fallback context and the exact prompt."""

    key: str
    context: str
    prompt: str


def build_era_prompt(era: str) -> str:
    if not str(era or "").strip():
        raise MissingSelection("Select at least one era to build a prompt.")
    return (
        f'Reimagine the person in this photo in the style of "{era}". This includes appropriate '
        "clothing, hairstyle, accessories, background, photo/art style, and the overall aesthetic "
        "of that era. The person must be shown clearly, consistent with the requested style. "
        f"{QUALITY_SUFFIX}"
    )


def build_cultural_prompt(country: str | None, region: str | None) -> str:
    if not str(country or "").strip() or not str(region or "").strip():
        raise MissingSelection("Please select a Country and a Region/Attire to build a prompt.")
    return (
        f"Reimagine the person in this photo wearing traditional {region} attire from {country}. "
        "The image should be a respectful and authentic representation. Place them in a setting "
        "that is culturally relevant, like a traditional marketplace, a scenic landscape typical "
        "of the region, or in front of classic local architecture. "
        f"{QUALITY_SUFFIX}"
    )


async def build_imagination_prompt(inputs: ImaginationInputs, refiner: PromptRefiner) -> str:
    missing = inputs.missing_required()
    if missing:
        raise MissingRequiredField(missing)
    refined = await refiner.refine(inputs)
    return (
        f"{refined} The person must be seamlessly integrated into the described scene. "
        f"{QUALITY_SUFFIX}"
    )


def build_filter_prompt(filter_name: str | None) -> str:
    if not str(filter_name or "").strip():
        raise MissingSelection("Select a filter to build a prompt.")
    return (
        f'Reimagine the person in this photo with a "{filter_name}" photographic filter effect. '
        "The overall composition and the person should remain the same, but the image should be "
        "transformed to have the distinct visual characteristics of that style, including color "
        "grading, grain, and lighting, perfectly capturing the filter's essence. "
        f"{QUALITY_SUFFIX}"
    )


def is_era_context(context: str) -> bool:
    return _ERA_CONTEXT_RE.search(str(context or "")) is not None


def classify_context(context: str) -> str:
    return "era" if is_era_context(context) else "theme"


def get_fallback_prompt(context: str) -> str:
    """Simpler rephrasing used after the original prompt came back without an image.

    The era check is a keyword heuristic; anything it misses gets the generic
    theme wording, which works for every context.
    """
    if is_era_context(context):
        return (
            f"Create a photograph of the person in this image as if they were living in the {context} era. "
            "The photograph should capture the distinct fashion, hairstyles, and overall atmosphere of "
            f"that time period in great detail. {QUALITY_SUFFIX}"
        )
    return (
        "Create a photorealistic image reimagining the person in this image according to this theme: "
        f'"{context}". Ensure the final image respects the described elements. {QUALITY_SUFFIX}'
    )


def imagination_context(inputs: ImaginationInputs) -> str:
    context = inputs.style or inputs.scenery or inputs.attire or IMAGINATION_DEFAULT_CONTEXT
    return context[:CONTEXT_MAX_CHARS]


async def plan_selection(selection: Selection, refiner: PromptRefiner) -> list[PromptPlan]:
    if isinstance(selection, QuickTripSelection):
        if not selection.eras:
            raise MissingSelection("Select at least one era to build a prompt.")
        return [PromptPlan(key=era, context=era, prompt=build_era_prompt(era)) for era in selection.eras]
    if isinstance(selection, CulturalSelection):
        prompt = build_cultural_prompt(selection.country, selection.region)
        key = selection.theme_key
        return [PromptPlan(key=key, context=key, prompt=prompt)]
    if isinstance(selection, ImaginationSelection):
        prompt = await build_imagination_prompt(selection.inputs, refiner)
        return [
            PromptPlan(
                key=IMAGINATION_THEME_KEY,
                context=imagination_context(selection.inputs),
                prompt=prompt,
            )
        ]
    if isinstance(selection, FilterSelection):
        prompt = build_filter_prompt(selection.filter_name)
        name = str(selection.filter_name)
        return [PromptPlan(key=name, context=name, prompt=prompt)]
    raise TypeError(f"Unsupported selection: {type(selection).__name__}")
