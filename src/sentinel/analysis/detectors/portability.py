"""Assumptions that break when a contract moves off the C-Chain."""

from __future__ import annotations

import re

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import LineRule, make_finding, run_line_rules
from sentinel.constants import FindingCategory
from sentinel.schemas import ExternalContext, Finding

PORTABILITY_RULES: tuple[LineRule, ...] = (
    LineRule(
        category=FindingCategory.HARDCODED_CHAIN,
        pattern=re.compile(r"\bchainid\b"),
        description="The `chainid` opcode was used.",
        recommendation=(
            "Avoid using `chainid` for core logic. On a new Subnet, this "
            "value will be different and may break your contract."
        ),
    ),
    LineRule(
        category=FindingCategory.NATIVE_TOKEN,
        pattern=re.compile(r"\bmsg\.value\b"),
        description=(
            "The `msg.value` keyword was used, assuming a native, "
            "value-bearing token."
        ),
        recommendation=(
            "Be aware that many Subnets may use a valueless native token "
            "for gas, or may not use a native token at all (e.g., in favor "
            "of an ERC20 for fees). Logic relying on `msg.value > 0` may "
            "not be portable."
        ),
    ),
    LineRule(
        category=FindingCategory.NATIVE_TOKEN,
        pattern=re.compile(r"\.balance\b"),
        description=(
            "The `.balance` property was used, assuming a native, "
            "value-bearing token."
        ),
        recommendation=(
            "Similar to `msg.value`, be aware that the native token on a "
            "custom Subnet may not be AVAX and could have different "
            "properties. Logic checking `address.balance` might not behave "
            "as expected."
        ),
    ),
    LineRule(
        category=FindingCategory.HARDCODED_GAS,
        pattern=re.compile(r"\.call\s*\{\s*gas:"),
        description=(
            "A low-level call with a hardcoded gas amount "
            "(`.call{gas: ...}`) was detected."
        ),
        recommendation=(
            "This is a fragile pattern. Gas costs for opcodes can change, "
            "and Subnets may have different gas semantics. Avoid hardcoding "
            "gas unless absolutely necessary."
        ),
    ),
)


def detect_portability_hazards(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    return run_line_rules(PORTABILITY_RULES, index)


def detect_cchain_dependencies(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Hardcoded addresses of protocols deployed only on the C-Chain."""
    book = [
        (address.lower(), name)
        for address, name in registries.protocol_deployments.items()
    ]
    findings: list[Finding] = []
    for line_num, line in index.numbered():
        lowered = line.lower()
        for address, name in book:
            if address in lowered:
                findings.append(
                    make_finding(
                        line_num,
                        FindingCategory.CCHAIN_DEPENDENCY,
                        "A hardcoded address for a known C-Chain protocol "
                        f"({name}) was found.",
                        "This contract will not exist on a new Subnet. Pass "
                        "protocol addresses in the constructor or a setter "
                        "function to make your contract portable.",
                    )
                )
    return findings
