"""Tests for chain-portability and randomness detectors."""

from __future__ import annotations

from conftest import lines_of

from sentinel.analysis.detectors.portability import (
    detect_cchain_dependencies,
    detect_portability_hazards,
)
from sentinel.analysis.detectors.randomness import detect_unsafe_randomness
from sentinel.analysis.registry import Registries
from sentinel.constants import FindingCategory


def _pairs(findings: list) -> list[tuple[int, str]]:
    return sorted((f.line, f.issue_type) for f in findings)


# ── portability ──────────────────────────────────────────────


def test_chainid_reference(registries: Registries) -> None:
    index = lines_of('require(block.chainid == 43114, "wrong chain");')
    assert _pairs(detect_portability_hazards(index, registries, None)) == [
        (1, FindingCategory.HARDCODED_CHAIN)
    ]


def test_chainid_inside_identifier_is_ignored(
    registries: Registries,
) -> None:
    index = lines_of("uint256 mychainids = 1;")
    assert detect_portability_hazards(index, registries, None) == []


def test_gas_stipend_and_value_on_one_line(registries: Registries) -> None:
    index = lines_of(
        '(bool ok, ) = to.call{gas: 2300, value: msg.value}("");',
        "uint256 b = address(this).balance;",
    )
    assert _pairs(detect_portability_hazards(index, registries, None)) == [
        (1, FindingCategory.HARDCODED_GAS),
        (1, FindingCategory.NATIVE_TOKEN),
        (2, FindingCategory.NATIVE_TOKEN),
    ]


def test_native_token_findings_have_distinct_texts(
    registries: Registries,
) -> None:
    index = lines_of("if (msg.value > address(this).balance) revert();")
    findings = detect_portability_hazards(index, registries, None)
    assert len(findings) == 2
    assert len({f.description for f in findings}) == 2


def test_cchain_address_any_case(registries: Registries) -> None:
    index = lines_of(
        "address r = 0x60ae616a2155ee3d9a68541ba4544862310933d4;",
        "address q = 0xE54CA86531E17EF3616D22CA28B0D458B6C89106;",
    )
    findings = detect_cchain_dependencies(index, registries, None)
    assert [f.line for f in findings] == [1, 2]
    assert "Trader Joe V2 Router" in findings[0].description
    assert "Pangolin Router" in findings[1].description


def test_cchain_book_comes_from_registry() -> None:
    custom = Registries(protocol_deployments={})
    index = lines_of("address r = 0x60aE616a2155Ee3d9A68541Ba4544862310933d4;")
    assert detect_cchain_dependencies(index, custom, None) == []


# ── randomness ───────────────────────────────────────────────


def test_hash_of_timestamp_on_one_line(registries: Registries) -> None:
    index = lines_of(
        "uint r = uint(keccak256(abi.encodePacked(block.timestamp)));"
    )
    findings = detect_unsafe_randomness(index, registries, None)
    assert _pairs(findings) == [(1, FindingCategory.UNSAFE_RANDOMNESS)]


def test_chain_state_before_hash_call(registries: Registries) -> None:
    index = lines_of("bytes32 s = blockhash(n - 1) ^ sha256(seed);")
    assert len(detect_unsafe_randomness(index, registries, None)) == 1


def test_coinbase_and_number_count(registries: Registries) -> None:
    index = lines_of(
        "a = keccak256(abi.encode(block.coinbase));",
        "b = ripemd160(abi.encode(block.number));",
    )
    findings = detect_unsafe_randomness(index, registries, None)
    assert [f.line for f in findings] == [1, 2]


def test_parts_on_separate_lines_do_not_fire(
    registries: Registries,
) -> None:
    index = lines_of(
        "uint t = block.timestamp;",
        "bytes32 h = keccak256(abi.encode(t));",
    )
    assert detect_unsafe_randomness(index, registries, None) == []


def test_hash_without_chain_state(registries: Registries) -> None:
    index = lines_of("bytes32 h = keccak256(abi.encode(msg.sender));")
    assert detect_unsafe_randomness(index, registries, None) == []
