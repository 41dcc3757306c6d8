"""Checks against the deployment target's genesis metadata.

Both checks stay silent unless the job carries the matching part of the
external context.
"""

from __future__ import annotations

import re

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import WHOLE_FILE_LINE, FindingCategory
from sentinel.schemas import ExternalContext, Finding


def detect_precompile_mismatch(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Optional precompile referenced but not enabled on the target."""
    if context is None or context.enabled_features is None:
        return []
    enabled = {f.lower() for f in context.enabled_features}
    disabled = [
        (
            re.compile(rf"\b{re.escape(address)}\b", re.IGNORECASE),
            address,
            feature,
        )
        for address, feature in registries.optional_precompiles.items()
        if address.lower() not in enabled and feature.lower() not in enabled
    ]
    findings: list[Finding] = []
    for line_num, line in index.numbered():
        for pattern, address, feature in disabled:
            if pattern.search(line):
                findings.append(
                    make_finding(
                        line_num,
                        FindingCategory.PRECOMPILE_MISMATCH,
                        f"The precompile at {address} ({feature}) is "
                        "referenced, but it is not enabled in the target "
                        "Subnet's genesis.",
                        f"Enable `{feature}` in the Subnet genesis or "
                        "remove the dependency; calls to a disabled "
                        "precompile revert or silently return empty data.",
                    )
                )
    return findings


def detect_gas_limit_violation(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Coarse fixed-cost estimate against the target's block gas limit."""
    if context is None or context.gas_limit is None:
        return []
    cost = registries.simulated_execution_cost
    if cost <= context.gas_limit:
        return []
    return [
        make_finding(
            WHOLE_FILE_LINE,
            FindingCategory.GAS_LIMIT_VIOLATION,
            f"The estimated execution cost ({cost} gas) exceeds the target "
            f"Subnet's gas limit ({context.gas_limit}).",
            "Raise `feeConfig.gasLimit` in the Subnet genesis or split "
            "expensive operations across several transactions.",
        )
    ]
