"""Transport registry."""

from __future__ import annotations

from .base import TransportRegistry
from .dryrun import DryRunImageTransport, DryRunTextTransport
from .gemini import GeminiImageTransport, GeminiTextTransport


def default_registry() -> TransportRegistry:
    return TransportRegistry(
        [
            ("dryrun", DryRunImageTransport, DryRunTextTransport),
            ("gemini", GeminiImageTransport, GeminiTextTransport),
        ]
    )
