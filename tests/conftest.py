"""Shared test fixtures: contract sources, registries, in-memory queue."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from sentinel.analysis.lines import LineIndex, index_lines
from sentinel.analysis.registry import DEFAULT_REGISTRIES, Registries
from sentinel.queue.memory import InMemoryJobQueue

CONTRACTS_DIR = Path(__file__).resolve().parent / "fixtures" / "contracts"


def load_contract(name: str) -> str:
    """Read a fixture contract by file name."""
    return (CONTRACTS_DIR / name).read_text(encoding="utf-8")


def lines_of(*lines: str) -> LineIndex:
    """Index a source built from the given lines."""
    return index_lines("\n".join(lines) + "\n")


@pytest.fixture
def registries() -> Registries:
    return DEFAULT_REGISTRIES


@pytest.fixture
def memory_queue() -> InMemoryJobQueue:
    return InMemoryJobQueue()


@pytest.fixture(autouse=True)
def _reset_job_logger() -> Iterator[None]:
    """Detach the JSON job log handler so each test gets a fresh file."""
    yield
    job_logger = logging.getLogger("sentinel.jobs")
    for handler in list(job_logger.handlers):
        handler.close()
        job_logger.removeHandler(handler)
