"""Work-queue transports."""

from sentinel.queue.memory import InMemoryJobQueue
from sentinel.queue.protocols import JobQueue
from sentinel.queue.redis_queue import RedisJobQueue

__all__ = ["InMemoryJobQueue", "JobQueue", "RedisJobQueue"]
