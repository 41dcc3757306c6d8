"""Structured JSON logger for per-job tracking."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from sentinel.constants import ERROR_TRUNCATION_CHARS
from sentinel.logging_config import LOG_DATEFMT, LOG_FORMAT

__all__ = ["WorkerLogger", "LOG_FORMAT", "LOG_DATEFMT"]


class WorkerLogger:
    """Structured JSON-lines logger keyed by job_id."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("sentinel.jobs")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._logger.propagate = False

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / "jobs.log")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_job(
        self,
        job_id: str,
        worker_name: str,
        finding_count: int,
        line_count: int,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "job",
                "timestamp": datetime.now(UTC).isoformat(),
                "job_id": job_id,
                "worker_name": worker_name,
                "finding_count": finding_count,
                "line_count": line_count,
                "duration_ms": duration_ms,
            })
        )

    def log_dropped(self, reason: str) -> None:
        """Record a payload that never became a job."""
        self._logger.warning(
            json.dumps({
                "type": "dropped",
                "timestamp": datetime.now(UTC).isoformat(),
                "reason": reason[:ERROR_TRUNCATION_CHARS],
            })
        )

    def log_error(
        self,
        job_id: str,
        component: str,
        error: str,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "job_id": job_id,
                "component": component,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )
