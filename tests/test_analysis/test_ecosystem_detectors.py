"""Tests for pragma, import, and griefing-vector checks."""

from __future__ import annotations

from conftest import lines_of

from sentinel.analysis.detectors.ecosystem import (
    coerce_version,
    detect_floating_pragma,
    detect_import_hazards,
)
from sentinel.analysis.detectors.gas import detect_griefing_vectors
from sentinel.analysis.registry import Registries
from sentinel.constants import FindingCategory

# ── pragma ───────────────────────────────────────────────────


def test_caret_pragma_is_floating(registries: Registries) -> None:
    index = lines_of("pragma solidity ^0.8.0;")
    findings = detect_floating_pragma(index, registries, None)
    assert [(f.line, f.issue_type) for f in findings] == [
        (1, FindingCategory.FLOATING_PRAGMA)
    ]
    assert "^0.8.0" in findings[0].description


def test_tilde_pragma_is_floating(registries: Registries) -> None:
    index = lines_of("pragma solidity ~0.8.19;")
    assert len(detect_floating_pragma(index, registries, None)) == 1


def test_pinned_pragma_is_fine(registries: Registries) -> None:
    index = lines_of("pragma solidity 0.8.20;")
    assert detect_floating_pragma(index, registries, None) == []


# ── imports ──────────────────────────────────────────────────


def test_url_import_is_unknown_source(registries: Registries) -> None:
    index = lines_of('import "https://github.com/x/y/Math.sol";')
    findings = detect_import_hazards(index, registries, None)
    assert [f.issue_type for f in findings] == [FindingCategory.UNKNOWN_SOURCE]


def test_outdated_library_version(registries: Registries) -> None:
    index = lines_of(
        'import "@openzeppelin/contracts@4.9.0/token/ERC20/IERC20.sol";'
    )
    findings = detect_import_hazards(index, registries, None)
    assert [f.issue_type for f in findings] == [
        FindingCategory.OUTDATED_VERSION
    ]
    assert "(4.9.0)" in findings[0].description
    assert "5.0.0" in findings[0].recommendation


def test_named_import_of_upgradeable_uses_longest_name(
    registries: Registries,
) -> None:
    index = lines_of(
        "import {OwnableUpgradeable} from "
        '"@openzeppelin/contracts-upgradeable@4.8.1/access/Ownable.sol";'
    )
    findings = detect_import_hazards(index, registries, None)
    assert len(findings) == 1
    assert "@openzeppelin/contracts-upgradeable" in findings[0].description


def test_current_and_unversioned_imports_pass(
    registries: Registries,
) -> None:
    index = lines_of(
        'import "@openzeppelin/contracts@5.0.2/access/Ownable.sol";',
        'import "@openzeppelin/contracts/access/Ownable.sol";',
        'import "./Local.sol";',
    )
    assert detect_import_hazards(index, registries, None) == []


def test_coerce_version_fills_missing_parts() -> None:
    assert coerce_version("4.9") == (4, 9, 0)
    assert coerce_version("5.0.0-rc.1") == (5, 0, 0)
    assert coerce_version("latest") is None


# ── griefing ─────────────────────────────────────────────────


def test_dynamic_memory_parameter(registries: Registries) -> None:
    index = lines_of(
        "function store(uint256 id, bytes memory blob) external {",
        "function count(uint256 id) external view returns (uint256) {",
    )
    findings = detect_griefing_vectors(index, registries, None)
    assert [(f.line, f.issue_type) for f in findings] == [
        (1, FindingCategory.GRIEFING_VECTOR)
    ]
    assert "'store'" in findings[0].description


def test_calldata_parameter_is_not_flagged(registries: Registries) -> None:
    index = lines_of("function store(bytes calldata blob) external {")
    assert detect_griefing_vectors(index, registries, None) == []
