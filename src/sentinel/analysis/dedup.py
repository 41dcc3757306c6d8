"""Collapse structurally identical findings."""

from __future__ import annotations

from collections.abc import Iterable

from sentinel.schemas import Finding


def deduplicate(findings: Iterable[Finding]) -> list[Finding]:
    """Return the distinct findings in a stable order.

    Equality covers line, category, description, and recommendation.
    Line 0 is ordinary. Applying this twice gives the same list.
    """
    return sorted(set(findings), key=Finding.sort_key)
