"""Environment-based configuration for the worker process."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from sentinel.constants import (
    ALL_SUITES,
    DEFAULT_SUITES,
    DEFAULT_JOB_QUEUE,
    DEFAULT_RESULT_QUEUE,
    DEFAULT_WORKER_NAME,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and SENTINEL_* environment variables."""

    # Queue transport
    redis_url: str = "redis://127.0.0.1:6379/0"
    job_queue: str = DEFAULT_JOB_QUEUE
    result_queue: str = DEFAULT_RESULT_QUEUE
    pop_timeout_seconds: int = 0  # 0 = block until a job arrives

    # Worker identity
    worker_name: str = DEFAULT_WORKER_NAME

    # Detectors
    enabled_suites: Annotated[list[str], NoDecode] = list(DEFAULT_SUITES)
    registry_path: Path | None = None

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @field_validator("enabled_suites", mode="before")
    @classmethod
    def _parse_suites(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("enabled_suites")
    @classmethod
    def _validate_suites(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "enabled_suites must contain at least one suite"
            )
        unknown = [s for s in v if s not in ALL_SUITES]
        if unknown:
            raise ValueError(
                f"Unknown detector suites: {', '.join(unknown)}. "
                f"Valid: {', '.join(ALL_SUITES)}"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for s in v:
            if s in seen:
                dupes.append(s)
            seen.add(s)
        if dupes:
            logger.warning(
                "Duplicate suites in SENTINEL_ENABLED_SUITES: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("pop_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError("pop_timeout_seconds must be >= 0")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "SENTINEL_",
        "extra": "ignore",
    }
