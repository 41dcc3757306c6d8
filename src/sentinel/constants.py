"""Shared constants: single source of truth for cross-module values.

Finding categories are StrEnum members so they serialize as the plain
category text in result payloads.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class FindingCategory(StrEnum):
    """Closed set of finding categories emitted by the detectors."""

    REORG_SAFETY = "Reorg Safety Hazard (Implicit Finality Assumption)"
    SPOT_PRICE_ORACLE = "Spot Price Oracle Hazard"
    MULTI_TX_DEPENDENCY = "Multi-Transaction Dependency Hazard"
    UNSAFE_RANDOMNESS = "Unsafe Randomness Source"
    PRECOMPILE_INTERACTION = "P-Chain Precompile Interaction"
    MISSING_PAYABLE = "Missing Payable Modifier"
    UNCHECKED_RETURN = "Unchecked Return Value"
    WEAK_ACCESS_CONTROL = "Weak Access Control"
    HARDCODED_VALIDATOR = "Hardcoded Validator Dependency"
    MISSING_REWARD_WITHDRAWAL = "Missing Reward Withdrawal"
    HARDCODED_CHAIN = "Hardcoded Chain Assumption"
    NATIVE_TOKEN = "Native Token Assumption"
    HARDCODED_GAS = "Hardcoded Gas Amount"
    CCHAIN_DEPENDENCY = "C-Chain Dependency"
    PRECOMPILE_MISMATCH = "Precompile Mismatch"
    GAS_LIMIT_VIOLATION = "Gas Limit Violation"
    FLOATING_PRAGMA = "Floating Pragma"
    UNKNOWN_SOURCE = "Unknown Source"
    OUTDATED_VERSION = "Outdated Version"
    GRIEFING_VECTOR = "Griefing Vector Hazard"
    MISSING_AWM_IMPORT = "Missing Import"
    MISSING_RECEIVE = "Missing `receive` Function"
    UNVALIDATED_SOURCE_CHAIN = "Critical Security Risk"
    UNVALIDATED_SENDER = "High Security Risk"


class Suite(StrEnum):
    """Detector groups a worker can enable independently."""

    CONSENSUS = "consensus"
    RANDOMNESS = "randomness"
    STAKING = "staking"
    PORTABILITY = "portability"
    ENVIRONMENT = "environment"
    ECOSYSTEM = "ecosystem"
    GAS = "gas"
    AWM = "awm"


class WorkerState(StrEnum):
    """Job orchestrator lifecycle."""

    IDLE = "idle"
    PROCESSING = "processing"


ALL_SUITES: tuple[str, ...] = tuple(s.value for s in Suite)
# Warp receiver checks are opt-in.
DEFAULT_SUITES: tuple[str, ...] = tuple(
    s for s in ALL_SUITES if s != Suite.AWM
)

# ── Queue Defaults ───────────────────────────────────────

DEFAULT_JOB_QUEUE = "sentinel_jobs"
DEFAULT_RESULT_QUEUE = "sentinel_results"
DEFAULT_WORKER_NAME = "SentinelHeuristicWorkerV3"

# ── Misc ─────────────────────────────────────────────────

WHOLE_FILE_LINE = 0
ERROR_TRUNCATION_CHARS = 200
