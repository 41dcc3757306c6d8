"""Protocol for the work-queue transport.

The Redis implementation and the in-memory test double satisfy it
structurally (no inheritance).
"""

from typing import Protocol


class JobQueue(Protocol):
    def pop_job(self, timeout: int = 0) -> str | None:
        """Block for one job payload; None only when ``timeout`` elapses.

        ``timeout=0`` waits indefinitely. Raises ``TransportError`` on
        transport failure.
        """
        ...

    def push_result(self, payload: str) -> None: ...
