"""Heuristic rule-evaluation engine: textual pattern matching, no parser."""

from sentinel.analysis.dedup import deduplicate
from sentinel.analysis.engine import analyze_job, analyze_source
from sentinel.analysis.lines import LineIndex, index_lines
from sentinel.analysis.registry import (
    DEFAULT_REGISTRIES,
    Registries,
    load_registries,
)

__all__ = [
    "DEFAULT_REGISTRIES",
    "LineIndex",
    "Registries",
    "analyze_job",
    "analyze_source",
    "deduplicate",
    "index_lines",
    "load_registries",
]
