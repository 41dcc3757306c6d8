"""Avalanche Warp Messaging receivers: interface import and ``receive`` guards.

The suite is opt-in; every check assumes the contract consumes Warp
messages.
"""

from __future__ import annotations

import re

from sentinel.analysis.detectors.ecosystem import IMPORT_RE
from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import WHOLE_FILE_LINE, FindingCategory
from sentinel.schemas import ExternalContext, Finding

AWM_INTERFACE = "IAvalancheWarpMessenger.sol"
RECEIVE_DECL_RE = re.compile(r"\bfunction\s+receive\s*\(")


def function_body(text: str, start: int) -> str:
    """Text inside the braces of the declaration beginning at ``start``.

    Braces are balanced by counting; strings and comments are not
    skipped. A ``;`` before the first ``{`` means no body and gives "".
    An unclosed body runs to the end of the text.
    """
    open_pos = -1
    depth = 0
    for pos in range(start, len(text)):
        ch = text[pos]
        if open_pos < 0:
            if ch == ";":
                return ""
            if ch == "{":
                open_pos = pos
                depth = 1
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[open_pos + 1 : pos]
    return text[open_pos + 1 :] if open_pos >= 0 else ""


def detect_awm_import(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    imports = (m.group(1) for m in IMPORT_RE.finditer(index.text))
    if any(AWM_INTERFACE in path for path in imports):
        return []
    return [
        make_finding(
            WHOLE_FILE_LINE,
            FindingCategory.MISSING_AWM_IMPORT,
            f"The contract does not import `{AWM_INTERFACE}`.",
            "Ensure you import the official AWM interface to properly "
            "handle incoming Warp messages.",
        )
    ]


def detect_warp_receive(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """Missing ``receive``, or a ``receive`` that never checks its origin.

    The last ``receive`` declaration in the file is the one inspected.
    """
    matches = list(RECEIVE_DECL_RE.finditer(index.text))
    if not matches:
        return [
            make_finding(
                WHOLE_FILE_LINE,
                FindingCategory.MISSING_RECEIVE,
                "The contract is missing the `receive` function required "
                "to accept Warp messages.",
                "Implement a `receive(bytes calldata signedMessage)` "
                "function to process incoming messages.",
            )
        ]

    decl = matches[-1]
    line_num = index.text.count("\n", 0, decl.start()) + 1
    body = function_body(index.text, decl.end())
    findings: list[Finding] = []
    if "sourceChainId" not in body:
        findings.append(
            make_finding(
                line_num,
                FindingCategory.UNVALIDATED_SOURCE_CHAIN,
                "The `receive` function does not appear to validate "
                "`warpMessage.sourceChainId`.",
                "ALWAYS verify the source chain ID to prevent messages from "
                "unauthorized or malicious Subnets. E.g., "
                "`require(warpMessage.sourceChainId == expectedChainId, "
                "...)`",
            )
        )
    if "sender" not in body:
        findings.append(
            make_finding(
                line_num,
                FindingCategory.UNVALIDATED_SENDER,
                "The `receive` function does not appear to validate "
                "`warpMessage.sender`.",
                "ALWAYS verify the sender address to ensure the message "
                "originates from a trusted contract or user on the source "
                "chain.",
            )
        )
    return findings
