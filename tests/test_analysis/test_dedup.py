"""Tests for finding deduplication."""

from sentinel.analysis.dedup import deduplicate
from sentinel.schemas import Finding


def _finding(line: int, issue: str = "Cat", text: str = "d") -> Finding:
    return Finding(
        line=line, issue_type=issue, description=text, recommendation="r"
    )


def test_identical_findings_collapse() -> None:
    a = _finding(3)
    b = _finding(3)
    assert deduplicate([a, b]) == [a]


def test_distinct_description_is_kept() -> None:
    result = deduplicate([_finding(3, text="x"), _finding(3, text="y")])
    assert len(result) == 2


def test_sorted_by_line_then_category() -> None:
    result = deduplicate(
        [_finding(9, "B"), _finding(0, "Z"), _finding(9, "A")]
    )
    assert [(f.line, f.issue_type) for f in result] == [
        (0, "Z"),
        (9, "A"),
        (9, "B"),
    ]


def test_line_zero_is_an_ordinary_value() -> None:
    result = deduplicate([_finding(0), _finding(0), _finding(1)])
    assert [f.line for f in result] == [0, 1]


def test_idempotent() -> None:
    once = deduplicate([_finding(2), _finding(1), _finding(2, "Other")])
    assert deduplicate(once) == once


def test_empty_input() -> None:
    assert deduplicate([]) == []
