"""Consensus-safety heuristics: reorg exposure, spot prices, missing timelocks."""

from __future__ import annotations

import re

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import FindingCategory
from sentinel.schemas import ExternalContext, Finding

COMMIT_RE = re.compile(r"function\s+(commit|register|submit)\s*\(\s*bytes32")
REVEAL_RE = re.compile(r"function\s+(reveal|claim|solve)\s*\(")
BLOCK_NUMBER_RE = re.compile(r"\bblock\.number\b")

SPOT_PRICE_RE = re.compile(
    r"\.(getReserves|token0|token1|balanceOf)\s*\(\s*\)", re.IGNORECASE
)
PRICE_FEED_CONTRACT_RE = re.compile(
    r"contract\s+[a-zA-Z0-9_]+\s+(?:is|implements)\s+"
    r"(?:AggregatorV3Interface|Chainlink|PriceOracle)"
)

_BLOCK_CLOCK = r"\b(?:block\.timestamp|block\.number)\b"
# Excludes the arrows in `=>` and `->`.
_COMPARISON = r"(?<![=-])(?:>=|<=|>|<)"
TIME_LOCK_RE = re.compile(
    rf"{_BLOCK_CLOCK}.*{_COMPARISON}|{_COMPARISON}.*{_BLOCK_CLOCK}"
)


def detect_reorg_hazard(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Commit-reveal scheme without a block-height delay."""
    code = index.text
    if not (COMMIT_RE.search(code) and REVEAL_RE.search(code)):
        return []
    if BLOCK_NUMBER_RE.search(code):
        return []
    # A reveal declaration split across lines matches whole-file only,
    # which leaves the report on line 0.
    return [
        make_finding(
            index.first_match(REVEAL_RE),
            FindingCategory.REORG_SAFETY,
            "A commit-reveal scheme was detected, but it does not appear "
            "to use `block.number` to enforce a delay between the commit "
            "and reveal phases.",
            "While safe on Avalanche due to fast finality, this pattern is "
            "vulnerable to reorgs on other chains. To ensure universal "
            "compatibility, use `block.number` to enforce a delay.",
        )
    ]


def detect_spot_price_oracle(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Direct DEX reserve reads, unless the file is itself a price feed."""
    if PRICE_FEED_CONTRACT_RE.search(index.text):
        return []
    return [
        make_finding(
            line_num,
            FindingCategory.SPOT_PRICE_ORACLE,
            "Direct read of spot price from a DEX (e.g., `getReserves()`) "
            "detected. This is vulnerable to flash loan manipulation on "
            "slower-finality chains.",
            "Always use a Time-Weighted Average Price (TWAP) oracle or a "
            "decentralized oracle network (like Chainlink) for robust price "
            "feeds, especially when interacting with chains susceptible to "
            "reorgs.",
        )
        for line_num, line in index.numbered()
        if SPOT_PRICE_RE.search(line)
    ]


def _role_patterns(roles: tuple[str, ...]) -> tuple[re.Pattern[str], re.Pattern[str]]:
    names = "|".join(re.escape(r) for r in roles)
    capitalized = "|".join(re.escape(r[:1].upper() + r[1:]) for r in roles)
    setter = re.compile(rf"function\s+(set|change)({capitalized})\s*\(")
    usage = re.compile(rf"\b({names})\b")
    return setter, usage


def detect_missing_timelock(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Privileged role setter with no block-clock comparison in the file."""
    setter_re, usage_re = _role_patterns(registries.privileged_roles)
    code = index.text
    if not (setter_re.search(code) and usage_re.search(code)):
        return []
    if any(TIME_LOCK_RE.search(line) for line in index.lines):
        return []
    return [
        make_finding(
            index.first_match(setter_re),
            FindingCategory.MULTI_TX_DEPENDENCY,
            "A critical state variable (e.g., owner, admin) can be set and "
            "immediately used without a time-lock. This is vulnerable to "
            "front-running and reorgs on slower-finality chains.",
            "Implement a time-lock or a two-step process for critical state "
            "changes. E.g., `proposeNewAdmin(address)` in one tx, "
            "`acceptAdmin()` in a later tx after a time delay "
            "(`block.timestamp + DELAY`).",
        )
    ]
