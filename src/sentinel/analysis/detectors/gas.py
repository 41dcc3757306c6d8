"""Fee-model hazards on Subnets with low or zero gas prices."""

from __future__ import annotations

import re

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import FindingCategory
from sentinel.schemas import ExternalContext, Finding

GRIEFING_RE = re.compile(
    r"function\s+([a-zA-Z0-9_]+)\s*\([^)]*?(?:string|bytes)\s+memory\s+[^)]*?\)"
)


def detect_griefing_vectors(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Functions taking unbounded ``string``/``bytes`` memory parameters."""
    findings: list[Finding] = []
    for line_num, line in index.numbered():
        for m in GRIEFING_RE.finditer(line):
            findings.append(
                make_finding(
                    line_num,
                    FindingCategory.GRIEFING_VECTOR,
                    f"Function '{m.group(1)}' accepts a dynamic 'string' or "
                    "'bytes' memory parameter.",
                    "On Subnets with low/zero fees, an attacker can pass a "
                    "very large input to this function, forcing the contract "
                    "to perform expensive operations (hashing, copying) at no "
                    "cost to them. Implement strict size limits on dynamic "
                    "inputs.",
                )
            )
    return findings
