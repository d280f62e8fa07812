"""JSONL event log for a generation run."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..utils import now_utc_iso, sanitize_payload


@dataclass
class EventWriter:
    """Appends one JSON object per event; image payloads are replaced before writing."""

    path: Path
    run_id: str
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, init=False)

    def emit(self, event_type: str, **payload: Any) -> dict[str, Any]:
        event: dict[str, Any] = {"type": event_type, "run_id": self.run_id, "ts": now_utc_iso()}
        event.update(sanitize_payload(payload))
        encoded = json.dumps(event, ensure_ascii=False)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(encoded + "\n")
        return event

    def read(self) -> list[dict[str, Any]]:
        with self._lock:
            if not self.path.exists():
                return []
            raw = self.path.read_text(encoding="utf-8")
        return [json.loads(line) for line in raw.splitlines() if line.strip()]


def emit_event(events: EventWriter | None, event_type: str, **payload: Any) -> None:
    if events is None:
        return
    events.emit(event_type, **payload)
