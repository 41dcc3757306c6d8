"""In-memory JobQueue for tests and local runs.

List-backed, no I/O. ``pop_job`` returns None when empty instead of
blocking; an injected ``fail_with`` error simulates a broken transport.
"""

from __future__ import annotations

from collections import deque

from sentinel.errors import TransportError


class InMemoryJobQueue:
    """Deque-backed JobQueue."""

    def __init__(self, jobs: list[str] | None = None) -> None:
        self._jobs: deque[str] = deque(jobs or [])
        self.results: list[str] = []
        self.fail_with: TransportError | None = None

    def enqueue(self, payload: str) -> None:
        self._jobs.append(payload)

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def pop_job(self, timeout: int = 0) -> str | None:
        if self.fail_with is not None:
            raise self.fail_with
        if not self._jobs:
            return None
        return self._jobs.popleft()

    def push_result(self, payload: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.results.append(payload)
