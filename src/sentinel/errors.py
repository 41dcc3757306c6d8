"""Exception hierarchy for the worker.

Malformed jobs are dropped by the orchestrator. Transport errors are
fatal for the worker process and are never retried per job.
"""

from __future__ import annotations


class SentinelError(Exception):
    """Base class for all worker errors."""


class MalformedJobError(SentinelError):
    """Job payload does not parse into the job schema."""


class TransportError(SentinelError):
    """Dequeue or publish failed at the queue transport."""


class RegistryError(SentinelError):
    """Registry override file is unreadable or invalid."""


class AnalysisError(SentinelError):
    """A detector raised while evaluating a job; no result is published."""
