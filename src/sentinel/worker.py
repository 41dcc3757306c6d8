"""Job orchestrator: pull one job, analyze, publish one result.

State machine ``IDLE -> PROCESSING -> IDLE``. Jobs are processed one at
a time with no state carried between them. A payload that fails to
parse, or whose analysis raises, is logged and dropped without a
result. Transport errors are not
retried; they propagate and end the worker loop.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable

from pydantic import ValidationError

from sentinel.analysis.detectors import DEFAULT_DETECTORS, select_detectors
from sentinel.analysis.engine import analyze_job
from sentinel.analysis.lines import index_lines
from sentinel.analysis.registry import (
    DEFAULT_REGISTRIES,
    Registries,
    load_registries,
)
from sentinel.analysis.rules import DetectorSpec
from sentinel.config import Settings
from sentinel.constants import (
    DEFAULT_WORKER_NAME,
    ERROR_TRUNCATION_CHARS,
    WorkerState,
)
from sentinel.errors import AnalysisError, MalformedJobError, TransportError
from sentinel.logger import WorkerLogger
from sentinel.queue.protocols import JobQueue
from sentinel.schemas import AnalysisJob, AnalysisResult

logger = logging.getLogger(__name__)


def parse_job(raw: str) -> AnalysisJob:
    """Parse one job payload; raises MalformedJobError."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Job payload is not valid JSON: {exc.msg}"
        raise MalformedJobError(msg) from exc
    try:
        return AnalysisJob.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid job payload: {exc.error_count()} error(s)"
        raise MalformedJobError(msg) from exc


class JobOrchestrator:
    """Sequential consumer of one job queue."""

    def __init__(
        self,
        queue: JobQueue,
        *,
        worker_name: str = DEFAULT_WORKER_NAME,
        registries: Registries = DEFAULT_REGISTRIES,
        detectors: Iterable[DetectorSpec] = DEFAULT_DETECTORS,
        pop_timeout: int = 0,
        job_logger: WorkerLogger | None = None,
    ) -> None:
        self._queue = queue
        self._worker_name = worker_name
        self._registries = registries
        self._detectors = tuple(detectors)
        self._pop_timeout = pop_timeout
        self._job_logger = job_logger
        self._state = WorkerState.IDLE

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def worker_name(self) -> str:
        return self._worker_name

    def handle_payload(self, raw: str) -> AnalysisResult | None:
        """Analyze one payload.

        Returns None when the payload is dropped or a detector fails;
        either way nothing is published for it.
        """
        self._state = WorkerState.PROCESSING
        try:
            try:
                job = parse_job(raw)
            except MalformedJobError as exc:
                logger.error(
                    "Dropping malformed job: %s (payload: %r)",
                    exc,
                    raw[:ERROR_TRUNCATION_CHARS],
                )
                if self._job_logger:
                    self._job_logger.log_dropped(str(exc))
                return None

            logger.info("Processing Job ID: %s", job.job_id)
            start = time.monotonic()
            try:
                findings = analyze_job(
                    job,
                    registries=self._registries,
                    detectors=self._detectors,
                )
            except AnalysisError as exc:
                logger.error(
                    "Analysis failed for Job ID: %s",
                    job.job_id,
                    exc_info=True,
                )
                if self._job_logger:
                    self._job_logger.log_error(
                        job.job_id, "analysis", str(exc)
                    )
                return None
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                "Analysis complete. Found %d issues for Job ID: %s",
                len(findings),
                job.job_id,
            )
            if self._job_logger:
                self._job_logger.log_job(
                    job.job_id,
                    self._worker_name,
                    len(findings),
                    index_lines(job.source_code).line_count,
                    duration_ms,
                )
            return AnalysisResult(
                job_id=job.job_id,
                worker_name=self._worker_name,
                output=findings,
            )
        finally:
            self._state = WorkerState.IDLE

    def run_once(self) -> bool:
        """Pop and process one job.

        Returns False when the pop timed out with no job. Raises
        TransportError if the queue fails on pop or publish.
        """
        raw = self._queue.pop_job(timeout=self._pop_timeout)
        if raw is None:
            return False
        result = self.handle_payload(raw)
        if result is not None:
            try:
                self._queue.push_result(result.model_dump_json())
            except TransportError as exc:
                if self._job_logger:
                    self._job_logger.log_error(
                        result.job_id, "publish", str(exc)
                    )
                raise
            logger.info("Published result for Job ID: %s", result.job_id)
        return True

    def run_forever(self, max_jobs: int | None = None) -> int:
        """Loop until a transport error, interrupt, or ``max_jobs`` payloads.

        Returns the number of payloads consumed.
        """
        consumed = 0
        logger.info("%s waiting for jobs", self._worker_name)
        while max_jobs is None or consumed < max_jobs:
            if self.run_once():
                consumed += 1
        return consumed


def build_orchestrator(
    settings: Settings, queue: JobQueue
) -> JobOrchestrator:
    """Wire registries, detectors, and logging from settings."""
    return JobOrchestrator(
        queue,
        worker_name=settings.worker_name,
        registries=load_registries(settings.registry_path),
        detectors=select_detectors(settings.enabled_suites),
        pop_timeout=settings.pop_timeout_seconds,
        job_logger=WorkerLogger(settings.log_dir, settings.log_level),
    )
