"""Generation mode selections.

Each mode carries exactly the fields it needs; switching modes means building
a new selection value, so no input leaks from one mode into another.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from .catalog import MAX_QUICK_TRIP_ERAS, UNSPECIFIED_FIGURE_SIZE
from .errors import TooManyEras


_CAMEL_FIELDS = {
    "hairStyle": "hair_style",
    "eyeStyle": "eye_style",
    "figureSize": "figure_size",
    "aspectRatio": "aspect_ratio",
    "imageFraming": "image_framing",
}


@dataclass(frozen=True)
class ImaginationInputs:
    scenery: str = ""
    attire: str = ""
    pose: str = ""
    hair_style: str = ""
    eye_style: str = ""
    figure_size: str = UNSPECIFIED_FIGURE_SIZE
    style: str = ""
    aspect_ratio: str = "Portrait (3:4)"
    image_framing: str = "Full Body Shot"

    @classmethod
    def from_mapping(cls, payload: Mapping[str, str | None]) -> "ImaginationInputs":
        values: dict[str, str] = {}
        for raw_key, value in payload.items():
            key = _CAMEL_FIELDS.get(raw_key, raw_key)
            if key in cls.__dataclass_fields__ and value is not None:
                values[key] = str(value)
        return cls(**values)

    def missing_required(self) -> list[str]:
        missing: list[str] = []
        if not self.scenery.strip():
            missing.append("scenery")
        if not self.attire.strip():
            missing.append("attire")
        return missing


@dataclass(frozen=True)
class QuickTripSelection:
    """Ordered, duplicate-free eras; more than six raises ``TooManyEras``."""

    eras: tuple[str, ...] = ()
    mode: str = field(default="quick", init=False)

    def __post_init__(self) -> None:
        # Each era is one job key, so repeats collapse to their first position.
        eras = tuple(dict.fromkeys(self.eras))
        if len(eras) > MAX_QUICK_TRIP_ERAS:
            raise TooManyEras(len(eras), MAX_QUICK_TRIP_ERAS)
        object.__setattr__(self, "eras", eras)

    def toggle(self, era: str) -> "QuickTripSelection":
        if era in self.eras:
            return QuickTripSelection(tuple(item for item in self.eras if item != era))
        if len(self.eras) >= MAX_QUICK_TRIP_ERAS:
            return self
        return QuickTripSelection(self.eras + (era,))


@dataclass(frozen=True)
class CulturalSelection:
    country: str | None = None
    region: str | None = None
    mode: str = field(default="cultural", init=False)

    def with_country(self, country: str | None) -> "CulturalSelection":
        # A new country invalidates the previously picked region.
        return CulturalSelection(country=country, region=None)

    def with_region(self, region: str | None) -> "CulturalSelection":
        return CulturalSelection(country=self.country, region=region)

    @property
    def theme_key(self) -> str:
        return f"{self.region}, {self.country}"


@dataclass(frozen=True)
class ImaginationSelection:
    inputs: ImaginationInputs = field(default_factory=ImaginationInputs)
    mode: str = field(default="imagination", init=False)


@dataclass(frozen=True)
class FilterSelection:
    filter_name: str | None = None
    mode: str = field(default="filter", init=False)


Selection = Union[QuickTripSelection, CulturalSelection, ImaginationSelection, FilterSelection]
