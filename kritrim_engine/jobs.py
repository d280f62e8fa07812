"""Per-key generation job state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from .errors import JobInProgress, MissingPrompt


class JobStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class Job:
    key: str
    status: JobStatus = JobStatus.PENDING
    prompt: str | None = None
    result: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.result is not None) != (self.status is JobStatus.DONE):
            raise ValueError(f"Job {self.key!r}: result must be set exactly when status is done.")
        if (self.error is not None) != (self.status is JobStatus.ERROR):
            raise ValueError(f"Job {self.key!r}: error must be set exactly when status is error.")

    def to_dict(self) -> dict[str, str | None]:
        return {
            "key": self.key,
            "status": self.status.value,
            "prompt": self.prompt,
            "result": self.result,
            "error": self.error,
        }


@dataclass
class JobTracker:
    """Insertion-ordered job set owned by one generation session at a time.

    Every mutation takes the lock and replaces a single entry, so workers
    finishing concurrently never overwrite each other's keys. Updates carry the
    session id they were started under; once a new session begins, late
    results from the old one are dropped.
    """

    _jobs: dict[str, Job] = field(default_factory=dict, init=False, repr=False)
    _session: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def session(self) -> int:
        return self._session

    def start_session(self, prompts: Mapping[str, str]) -> int:
        with self._lock:
            self._session += 1
            self._jobs = {key: Job(key=key, prompt=prompt) for key, prompt in prompts.items()}
            return self._session

    def reset(self) -> int:
        with self._lock:
            self._session += 1
            self._jobs = {}
            return self._session

    def get(self, key: str) -> Job | None:
        with self._lock:
            return self._jobs.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._jobs)

    def snapshot(self) -> dict[str, Job]:
        with self._lock:
            return dict(self._jobs)

    def mark_done(self, key: str, result: str, session: int) -> bool:
        return self._finish(key, session, status=JobStatus.DONE, result=result)

    def mark_error(self, key: str, message: str, session: int) -> bool:
        return self._finish(key, session, status=JobStatus.ERROR, error=message or "Unknown error.")

    def begin_regenerate(self, key: str) -> tuple[str, int]:
        """Put ``key`` back to pending with its stored prompt.

        Raises ``MissingPrompt`` (after recording it on the job) when there is no
        prompt to reuse, and ``JobInProgress`` if the job is still running.
        """
        with self._lock:
            job = self._jobs.get(key)
            if job is None:
                raise KeyError(key)
            if job.status is JobStatus.PENDING:
                raise JobInProgress(key)
            if not job.prompt:
                error = MissingPrompt(key)
                self._jobs[key] = Job(key=key, status=JobStatus.ERROR, prompt=job.prompt, error=str(error))
                raise error
            self._jobs[key] = Job(key=key, prompt=job.prompt)
            return job.prompt, self._session

    def results(self) -> dict[str, str]:
        with self._lock:
            return {
                key: job.result
                for key, job in self._jobs.items()
                if job.status is JobStatus.DONE and job.result is not None
            }

    def is_settled(self) -> bool:
        with self._lock:
            return all(job.status is not JobStatus.PENDING for job in self._jobs.values())

    def _finish(
        self,
        key: str,
        session: int,
        *,
        status: JobStatus,
        result: str | None = None,
        error: str | None = None,
    ) -> bool:
        with self._lock:
            if session != self._session:
                return False
            current = self._jobs.get(key)
            if current is None:
                return False
            self._jobs[key] = Job(key=key, status=status, prompt=current.prompt, result=result, error=error)
            return True
