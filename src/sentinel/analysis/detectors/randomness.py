"""On-chain randomness derived from manipulable chain state."""

from __future__ import annotations

import re

from sentinel.analysis.rules import LineRule, line_rule_detector
from sentinel.constants import FindingCategory

HASH_CALL = r"\b(?:keccak256|sha256|ripemd160)\s*\("
CHAIN_STATE = (
    r"(?:\bblock\.(?:number|timestamp|coinbase)\b|\bblockhash\s*\()"
)

# Both lookaheads must succeed on the same physical line.
UNSAFE_RANDOMNESS_RULE = LineRule(
    category=FindingCategory.UNSAFE_RANDOMNESS,
    pattern=re.compile(rf"^(?=.*{HASH_CALL})(?=.*{CHAIN_STATE})"),
    description=(
        "A hash of block data (`block.number`, `block.timestamp`, "
        "`blockhash`, or `block.coinbase`) appears to be used as a source "
        "of randomness."
    ),
    recommendation=(
        "Block producers can influence or predict these values. Use a "
        "verifiable randomness source (e.g., Chainlink VRF) or a "
        "commit-reveal scheme with a block delay."
    ),
)

detect_unsafe_randomness = line_rule_detector(UNSAFE_RANDOMNESS_RULE)
