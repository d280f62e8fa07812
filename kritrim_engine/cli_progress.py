"""Terminal feedback while a generation session runs."""

from __future__ import annotations

import shutil
import sys
import threading
import time
from typing import Mapping, TextIO

from .jobs import Job, JobStatus

_BOLD = "\x1b[1m"
_DIM = "\x1b[2m"
_RED = "\x1b[31m"
_RESET = "\x1b[0m"
_CLEAR_LINE = "\x1b[K"

_STATUS_MARKS = {
    JobStatus.PENDING: "…",
    JobStatus.DONE: "✓",
    JobStatus.ERROR: "✗",
}


def format_elapsed(seconds: float) -> str:
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def job_lines(jobs: Mapping[str, Job], *, color: bool = False) -> list[str]:
    lines: list[str] = []
    for key, job in jobs.items():
        line = f"  {_STATUS_MARKS[job.status]} {key}"
        if job.status is JobStatus.ERROR and job.error:
            detail = f": {job.error}"
            line += f"{_RED}{detail}{_RESET}" if color else detail
        lines.append(line)
    return lines


def summary_rule(text: str, width: int) -> str:
    """Center ``text`` in a horizontal rule, or return it bare when the terminal is too narrow."""
    padded = f" {text} "
    if width < len(padded) + 4:
        return text
    return padded.center(width, "─")


class ProgressTicker:
    """Shows ``• label (elapsed)`` while work runs.

    On a TTY a background thread rewrites the line in place every
    ``interval_s``; other streams get one start line and one summary line.
    """

    def __init__(
        self,
        label: str,
        start: float | None = None,
        stream: TextIO | None = None,
        interval_s: float = 1.0,
    ) -> None:
        self.label = label
        self.stream = stream or sys.stdout
        self.started_at = start if start is not None else time.monotonic()
        self.interval_s = max(0.2, interval_s)
        self.interactive = bool(getattr(self.stream, "isatty", lambda: False)())
        self._halt = threading.Event()
        self._ticker: threading.Thread | None = None

    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    def start_ticking(self) -> None:
        if not self.interactive:
            self._emit(f"{self._status_text()}\n")
            return
        self._redraw()
        self._ticker = threading.Thread(target=self._tick, daemon=True)
        self._ticker.start()

    def stop(self, summary: str = "Finished") -> None:
        if self._ticker is not None:
            self._halt.set()
            self._ticker.join()
            self._ticker = None
        width = shutil.get_terminal_size(fallback=(100, 20)).columns
        rule = summary_rule(f"{summary} in {format_elapsed(self.elapsed())}", width)
        if self.interactive:
            self._emit(f"\r{_DIM}{rule}{_RESET}{_CLEAR_LINE}\n")
        else:
            self._emit(f"{rule}\n")

    def _status_text(self) -> str:
        return f"• {self.label} ({format_elapsed(self.elapsed())})"

    def _tick(self) -> None:
        while not self._halt.wait(self.interval_s):
            self._redraw()

    def _redraw(self) -> None:
        self._emit(f"\r{_BOLD}{self._status_text()}{_RESET}{_CLEAR_LINE}")

    def _emit(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()
