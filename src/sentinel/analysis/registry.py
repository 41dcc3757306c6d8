"""Fixed registries (address books, keyword sets) injected into detectors.

Defaults are compiled in; a YAML file can override any top-level key.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sentinel.errors import RegistryError

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_addresses(book: dict[str, str]) -> dict[str, str]:
    bad = [a for a in book if not _ADDRESS_RE.match(a)]
    if bad:
        raise ValueError(f"Invalid addresses: {', '.join(bad)}")
    return book


class Registries(BaseModel):
    """Immutable lookup tables consulted by the detector set."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # address -> human name
    staking_precompiles: dict[str, str] = {
        "0x0100000000000000000000000000000000000000": "P-Chain Handler",
    }
    # address -> feature identifier in a subnet genesis config
    optional_precompiles: dict[str, str] = {
        "0x0200000000000000000000000000000000000000": (
            "contractDeployerAllowListConfig"
        ),
        "0x0200000000000000000000000000000000000001": (
            "contractNativeMinterConfig"
        ),
        "0x0200000000000000000000000000000000000002": "txAllowListConfig",
        "0x0200000000000000000000000000000000000003": "feeManagerConfig",
        "0x0200000000000000000000000000000000000004": "rewardManagerConfig",
        "0x0200000000000000000000000000000000000005": "warpConfig",
    }
    # address -> protocol deployed only on the C-Chain
    protocol_deployments: dict[str, str] = {
        # DEXs
        "0x9Ad6C38BE94206cA50bb0d90783181662f0Cfa10": "Trader Joe V1 Router",
        "0x60aE616a2155Ee3d9A68541Ba4544862310933d4": "Trader Joe V2 Router",
        "0xE54Ca86531e17Ef3616d22Ca28b0D458b6C89106": "Pangolin Router",
        # Lending
        "0xd00ae08403B959254dbA1188b832b412A4461b95": (
            "Benqi Lending Market (qiAVAX)"
        ),
        "0x2b2C81e08f1Af8835a78Bb2A90AE924ACE0eA4be": "Aave V2 Lending Pool",
    }
    privileged_roles: tuple[str, ...] = ("admin", "owner", "pauser", "operator")
    # import path prefix -> recommended version
    known_libraries: dict[str, str] = {
        "@openzeppelin/contracts": "5.0.0",
        "@openzeppelin/contracts-upgradeable": "5.0.0",
        "@avalabs/core": "0.5.5",
    }
    simulated_execution_cost: int = 8_000_000

    @field_validator(
        "staking_precompiles",
        "optional_precompiles",
        "protocol_deployments",
    )
    @classmethod
    def _validate_addresses(cls, v: dict[str, str]) -> dict[str, str]:
        return _check_addresses(v)

    @field_validator("privileged_roles")
    @classmethod
    def _validate_roles(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("privileged_roles must not be empty")
        bad = [r for r in v if not _IDENTIFIER_RE.match(r)]
        if bad:
            raise ValueError(f"Invalid role names: {', '.join(bad)}")
        return v

    @field_validator("simulated_execution_cost")
    @classmethod
    def _validate_cost(cls, v: int) -> int:
        if v < 0:
            raise ValueError("simulated_execution_cost must be >= 0")
        return v


DEFAULT_REGISTRIES = Registries()


def load_registries(path: Path | None = None) -> Registries:
    """Load registries, overriding defaults with keys from a YAML file.

    Raises ``RegistryError`` if the file is missing, is not a YAML
    mapping, or fails validation.
    """
    if path is None:
        return DEFAULT_REGISTRIES

    if not path.is_file():
        msg = f"Registry file not found: {path}"
        raise RegistryError(msg)

    try:
        raw: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        msg = f"Registry file is not valid YAML: {path}"
        raise RegistryError(msg) from exc

    if raw is None:
        return DEFAULT_REGISTRIES
    if not isinstance(raw, dict):
        msg = f"Registry file must contain a mapping: {path}"
        raise RegistryError(msg)

    merged = {**DEFAULT_REGISTRIES.model_dump(), **raw}
    try:
        return Registries.model_validate(merged)
    except ValidationError as exc:
        msg = f"Invalid registry file {path}: {exc}"
        raise RegistryError(msg) from exc
