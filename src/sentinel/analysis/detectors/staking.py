"""Staking precompile interactions and validator-set assumptions.

Every precompile hit is followed by derived checks on the enclosing
function, resolved with the lexical scans in ``analysis.context``.
"""

from __future__ import annotations

import re

from sentinel.analysis.context import (
    ACCESS_CONTROL_RE,
    has_body_access_control,
    resolve_function,
)
from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import WHOLE_FILE_LINE, FindingCategory
from sentinel.schemas import ExternalContext, Finding

PAYABLE_RE = re.compile(r"\bpayable\b")
RAW_CALL_RE = re.compile(r"\.(?:call|delegatecall|staticcall)\s*[({]")
NODE_ID_RE = re.compile(r"\bNodeID-[1-9A-HJ-NP-Za-km-z]{20,}")
REWARD_WITHDRAWAL_RE = re.compile(
    r"function\s+(?:withdraw|claim)[a-zA-Z0-9_]*Rewards?\s*\("
)


def _address_patterns(
    book: dict[str, str],
) -> list[tuple[re.Pattern[str], str]]:
    return [
        (re.compile(rf"\b{re.escape(address)}\b", re.IGNORECASE), name)
        for address, name in book.items()
    ]


def precompile_hits(
    index: LineIndex, registries: Registries
) -> list[tuple[int, str]]:
    """``(line_idx, precompile_name)`` for every address match, 0-based."""
    patterns = _address_patterns(registries.staking_precompiles)
    hits: list[tuple[int, str]] = []
    for i, line in enumerate(index.lines):
        for pattern, name in patterns:
            if pattern.search(line):
                hits.append((i, name))
    return hits


def detect_precompile_interactions(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    findings: list[Finding] = []
    for i, name in precompile_hits(index, registries):
        line_num = i + 1
        line = index.lines[i]
        findings.append(
            make_finding(
                line_num,
                FindingCategory.PRECOMPILE_INTERACTION,
                f"Direct interaction with the {name} precompile detected.",
                "This is a powerful, low-level operation. Review its "
                "correctness and security properties. Specific checks below.",
            )
        )

        func = resolve_function(index, i)

        if not PAYABLE_RE.search(func.signature):
            shown = func.signature or "no enclosing function found"
            findings.append(
                make_finding(
                    line_num,
                    FindingCategory.MISSING_PAYABLE,
                    "Interaction with a staking precompile requires "
                    f"`payable`, but the containing function ('{shown}') "
                    "is not marked `payable`.",
                    "Ensure functions interacting with staking precompiles "
                    "that send AVAX (e.g., delegate, addLiquidity) are "
                    "marked `payable`.",
                )
            )

        if (
            RAW_CALL_RE.search(line)
            and "require(" not in line
            and "=" not in line
        ):
            findings.append(
                make_finding(
                    line_num,
                    FindingCategory.UNCHECKED_RETURN,
                    "The return value of a low-level call to a precompile "
                    "is not explicitly checked.",
                    "Always check the `success` boolean return value of "
                    "low-level calls (`(bool success, bytes memory data) = "
                    'addr.call(...)`). Use `require(success, "Call failed")` '
                    "to prevent silent failures.",
                )
            )

        if (
            func.is_public
            and not ACCESS_CONTROL_RE.search(func.signature)
            and not has_body_access_control(index, i)
        ):
            findings.append(
                make_finding(
                    line_num,
                    FindingCategory.WEAK_ACCESS_CONTROL,
                    "A public/external function interacting with a staking "
                    "precompile lacks explicit access control.",
                    "Functions that can alter staking state should be "
                    "strictly controlled (e.g., `onlyOwner`, multi-sig, or "
                    "DAO). Public access is a major security risk.",
                )
            )
    return findings


def detect_validator_dependencies(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Hardcoded NodeIDs, and staking without a way to withdraw rewards."""
    findings = [
        make_finding(
            line_num,
            FindingCategory.HARDCODED_VALIDATOR,
            "A hardcoded validator NodeID was found.",
            "Validator sets change over time. Pass validator identifiers as "
            "parameters or keep them in governed storage instead of "
            "compiling them into the contract.",
        )
        for line_num, line in index.numbered()
        if NODE_ID_RE.search(line)
    ]

    if precompile_hits(index, registries) and not REWARD_WITHDRAWAL_RE.search(
        index.text
    ):
        findings.append(
            make_finding(
                WHOLE_FILE_LINE,
                FindingCategory.MISSING_REWARD_WITHDRAWAL,
                "The contract interacts with a staking precompile but "
                "declares no reward withdrawal function.",
                "Add a function (e.g., `withdrawRewards()`) so staking "
                "rewards paid to this contract are not locked forever.",
            )
        )
    return findings
