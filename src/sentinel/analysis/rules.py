"""Declarative per-line rules and the interpreter that evaluates them.

A ``LineRule`` binds one pattern to one category and its fixed texts.
Detectors with whole-file gates or derived checks are plain functions
with the ``Detector`` signature; both kinds are registered through
``DetectorSpec``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.constants import FindingCategory, Suite
from sentinel.schemas import ExternalContext, Finding

Detector: TypeAlias = Callable[
    [LineIndex, Registries, ExternalContext | None], list[Finding]
]


def make_finding(
    line: int,
    category: FindingCategory,
    description: str,
    recommendation: str,
) -> Finding:
    return Finding(
        line=line,
        issue_type=category.value,
        description=description,
        recommendation=recommendation,
    )


@dataclass(frozen=True)
class LineRule:
    """Emit one finding for every line the pattern matches."""

    category: FindingCategory
    pattern: re.Pattern[str]
    description: str
    recommendation: str

    def evaluate(self, index: LineIndex) -> list[Finding]:
        return [
            make_finding(
                line_num,
                self.category,
                self.description,
                self.recommendation,
            )
            for line_num, line in index.numbered()
            if self.pattern.search(line)
        ]


def run_line_rules(
    rules: Iterable[LineRule], index: LineIndex
) -> list[Finding]:
    """Evaluate each rule independently and concatenate the results."""
    findings: list[Finding] = []
    for rule in rules:
        findings.extend(rule.evaluate(index))
    return findings


def line_rule_detector(*rules: LineRule) -> Detector:
    """Wrap a fixed rule set in the detector signature."""

    def _detect(
        index: LineIndex,
        registries: Registries,
        context: ExternalContext | None,
    ) -> list[Finding]:
        return run_line_rules(rules, index)

    return _detect


@dataclass(frozen=True)
class DetectorSpec:
    """A named detector belonging to one suite."""

    name: str
    suite: Suite
    detect: Detector
