"""Heuristic function-context resolution by lexical line scans.

No brace-depth tracking and no parser: the enclosing function is the
nearest declaration line above a match, and a function body ends at the
first line containing ``}``. Nested blocks mis-bound the body; that is
an accepted limitation of the heuristic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sentinel.analysis.lines import LineIndex

FUNCTION_DECL_RE = re.compile(
    r"function\s+([a-zA-Z0-9_]+)\s*\((.*?)\)\s*"
    r"(public|external|internal|private)\s*(.*?)\s*\{"
)
ACCESS_CONTROL_RE = re.compile(
    r"\b(?:onlyOwner|onlyRole|_checkRole)\b"
    r"|\brequire\s*\(\s*msg\.sender\s*==\s*[a-zA-Z0-9_]+\s*[,)]"
)
PUBLIC_VISIBILITY = ("public", "external")


@dataclass(frozen=True)
class FunctionContext:
    """Nearest enclosing declaration for a line."""

    start_line: int  # 1-based; 0 = no enclosing function
    signature: str = ""

    @property
    def found(self) -> bool:
        return self.start_line > 0

    @property
    def is_public(self) -> bool:
        return any(v in self.signature for v in PUBLIC_VISIBILITY)


def resolve_function(
    index: LineIndex,
    line_idx: int,
    decl_re: re.Pattern[str] = FUNCTION_DECL_RE,
) -> FunctionContext:
    """Scan backward from ``line_idx`` (0-based, inclusive) for a declaration."""
    for j in range(min(line_idx, index.line_count - 1), -1, -1):
        m = decl_re.search(index.lines[j])
        if m:
            return FunctionContext(start_line=j + 1, signature=m.group(0))
    return FunctionContext(start_line=0)


def has_body_access_control(
    index: LineIndex,
    line_idx: int,
    access_re: re.Pattern[str] = ACCESS_CONTROL_RE,
) -> bool:
    """Scan forward from ``line_idx`` until the first ``}`` for an access idiom."""
    for k in range(max(line_idx, 0), index.line_count):
        body_line = index.lines[k]
        if "}" in body_line:
            return False
        if access_re.search(body_line):
            return True
    return False
