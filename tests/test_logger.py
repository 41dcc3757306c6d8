"""Tests for the JSON-lines job logger."""

from __future__ import annotations

import json
from pathlib import Path

from sentinel.constants import ERROR_TRUNCATION_CHARS
from sentinel.logger import WorkerLogger


def _records(log_dir: Path) -> list[dict]:
    lines = (log_dir / "jobs.log").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_creates_log_dir(tmp_path: Path) -> None:
    log_dir = tmp_path / "nested" / "logs"
    WorkerLogger(log_dir)
    assert log_dir.is_dir()


def test_job_record_fields(tmp_path: Path) -> None:
    WorkerLogger(tmp_path).log_job("j1", "w", 3, 40, 1.5)
    (record,) = _records(tmp_path)
    assert record["type"] == "job"
    assert record["job_id"] == "j1"
    assert record["worker_name"] == "w"
    assert record["finding_count"] == 3
    assert record["line_count"] == 40
    assert record["duration_ms"] == 1.5
    assert "timestamp" in record


def test_error_is_truncated(tmp_path: Path) -> None:
    WorkerLogger(tmp_path).log_error("j2", "publish", "x" * 1000)
    (record,) = _records(tmp_path)
    assert record["type"] == "error"
    assert record["component"] == "publish"
    assert len(record["error"]) == ERROR_TRUNCATION_CHARS


def test_level_filters_info(tmp_path: Path) -> None:
    job_logger = WorkerLogger(tmp_path, level="warning")
    job_logger.log_job("j3", "w", 0, 1, 0.1)
    job_logger.log_dropped("bad payload")
    (record,) = _records(tmp_path)
    assert record == {
        "type": "dropped",
        "timestamp": record["timestamp"],
        "reason": "bad payload",
    }
