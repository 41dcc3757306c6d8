"""Run the detector set over one source text."""

from __future__ import annotations

from collections.abc import Iterable

from sentinel.analysis.dedup import deduplicate
from sentinel.analysis.detectors import DEFAULT_DETECTORS
from sentinel.analysis.lines import index_lines
from sentinel.analysis.registry import DEFAULT_REGISTRIES, Registries
from sentinel.analysis.rules import DetectorSpec
from sentinel.errors import AnalysisError
from sentinel.schemas import AnalysisJob, ExternalContext, Finding


def analyze_source(
    source: str,
    context: ExternalContext | None = None,
    *,
    registries: Registries = DEFAULT_REGISTRIES,
    detectors: Iterable[DetectorSpec] = DEFAULT_DETECTORS,
) -> list[Finding]:
    """Evaluate every detector and deduplicate the combined output.

    Detectors are independent; each returns its own list and the
    results are concatenated. A detector that raises aborts the
    evaluation with ``AnalysisError``; a partial finding set is never
    returned.
    """
    index = index_lines(source)
    collected: list[Finding] = []
    for spec in detectors:
        try:
            collected.extend(spec.detect(index, registries, context))
        except Exception as exc:  # noqa: BLE001
            msg = f"Detector {spec.name} failed: {exc}"
            raise AnalysisError(msg) from exc
    return deduplicate(collected)


def analyze_job(
    job: AnalysisJob,
    *,
    registries: Registries = DEFAULT_REGISTRIES,
    detectors: Iterable[DetectorSpec] = DEFAULT_DETECTORS,
) -> list[Finding]:
    return analyze_source(
        job.source_code,
        job.external_context,
        registries=registries,
        detectors=detectors,
    )
