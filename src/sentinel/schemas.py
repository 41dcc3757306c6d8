"""Pydantic models for job and result payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ExternalContext(BaseModel):
    """Deployment-target metadata consulted by context-aware detectors."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    gas_limit: int | None = None
    enabled_features: frozenset[str] | None = None

    @field_validator("enabled_features", mode="before")
    @classmethod
    def _coerce_features(cls, v: Any) -> Any:
        """Accept a list, a set, or a mapping whose keys are feature ids."""
        if isinstance(v, Mapping):
            return frozenset(str(k) for k in v)
        return v

    @classmethod
    def from_genesis(cls, genesis: Mapping[str, Any]) -> ExternalContext:
        """Build context from a subnet genesis document.

        ``config.feeConfig.gasLimit`` becomes the resource limit. Every
        other ``*Config`` entry of ``config`` holding a mapping is an
        enabled precompile feature.
        """
        config = genesis.get("config")
        if not isinstance(config, Mapping):
            return cls()

        gas_limit: int | None = None
        fee_config = config.get("feeConfig")
        if isinstance(fee_config, Mapping):
            raw_limit = fee_config.get("gasLimit")
            if isinstance(raw_limit, (int, float)) and not isinstance(
                raw_limit, bool
            ):
                gas_limit = int(raw_limit)

        features = frozenset(
            str(key)
            for key, value in config.items()
            if str(key).endswith("Config")
            and key != "feeConfig"
            and isinstance(value, Mapping)
        )
        return cls(gas_limit=gas_limit, enabled_features=features)


class AnalysisJob(BaseModel):
    """One source submission pulled from the job queue."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    job_id: str
    source_code: str
    external_context: ExternalContext | None = None
    subnet_genesis: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_context(cls, data: Any) -> Any:
        if (
            isinstance(data, dict)
            and data.get("external_context") is None
            and isinstance(data.get("subnet_genesis"), Mapping)
        ):
            data = dict(data)
            data["external_context"] = ExternalContext.from_genesis(
                data["subnet_genesis"]
            )
        return data


class Finding(BaseModel):
    """One reported issue. Equality and hashing cover all four fields."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)  # 0 = whole file
    issue_type: str
    description: str
    recommendation: str

    def sort_key(self) -> tuple[int, str, str, str]:
        return (
            self.line,
            self.issue_type,
            self.description,
            self.recommendation,
        )


class AnalysisResult(BaseModel):
    """Published once per successfully parsed job."""

    job_id: str
    worker_name: str
    output: list[Finding] = Field(default_factory=list)
