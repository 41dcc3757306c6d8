"""Line-indexed view over raw source text."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class LineIndex:
    """Source text plus its lines; line ``i`` is reported as ``i + 1``."""

    text: str
    lines: tuple[str, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def numbered(self) -> Iterator[tuple[int, str]]:
        """Yield ``(line_number, line)`` pairs, 1-based."""
        for i, line in enumerate(self.lines):
            yield i + 1, line

    def first_match(self, pattern: re.Pattern[str]) -> int:
        """1-based number of the first line matching pattern, else 0."""
        for line_num, line in self.numbered():
            if pattern.search(line):
                return line_num
        return 0


def index_lines(text: str) -> LineIndex:
    """Split text on newlines.

    A trailing ``\\r`` is stripped from each line and a trailing newline
    does not produce an empty last line. Empty text yields no lines.
    """
    if not text:
        return LineIndex(text=text, lines=())
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    lines = tuple(
        part[:-1] if part.endswith("\r") else part for part in parts
    )
    return LineIndex(text=text, lines=lines)
