"""Redis list transport: BLPOP for jobs, RPUSH for results.

Delivery is at-most-once; nothing is acknowledged or re-queued.
"""

from __future__ import annotations

import logging

import redis

from sentinel.errors import TransportError

logger = logging.getLogger(__name__)


class RedisJobQueue:
    """JobQueue backed by two Redis lists."""

    def __init__(
        self,
        client: redis.Redis,
        job_queue: str,
        result_queue: str,
    ) -> None:
        self._client = client
        self._job_queue = job_queue
        self._result_queue = result_queue

    @classmethod
    def from_url(
        cls, url: str, job_queue: str, result_queue: str
    ) -> RedisJobQueue:
        client = redis.Redis.from_url(url, decode_responses=True)
        return cls(client, job_queue, result_queue)

    @property
    def job_queue(self) -> str:
        return self._job_queue

    @property
    def result_queue(self) -> str:
        return self._result_queue

    def ping(self) -> None:
        """Fail fast if the server is unreachable."""
        try:
            self._client.ping()
        except redis.RedisError as exc:
            msg = f"Cannot reach Redis: {exc}"
            raise TransportError(msg) from exc

    def pop_job(self, timeout: int = 0) -> str | None:
        try:
            item = self._client.blpop([self._job_queue], timeout=timeout)
        except redis.RedisError as exc:
            msg = f"Failed to pop from {self._job_queue}: {exc}"
            raise TransportError(msg) from exc
        if item is None:
            return None
        _key, payload = item
        if isinstance(payload, bytes):
            return payload.decode("utf-8", errors="replace")
        return payload

    def push_result(self, payload: str) -> None:
        try:
            self._client.rpush(self._result_queue, payload)
        except redis.RedisError as exc:
            msg = f"Failed to push to {self._result_queue}: {exc}"
            raise TransportError(msg) from exc

    def close(self) -> None:
        self._client.close()
