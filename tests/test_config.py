"""Tests for Settings suite parsing and validators."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sentinel.config import Settings
from sentinel.constants import (
    DEFAULT_JOB_QUEUE,
    DEFAULT_RESULT_QUEUE,
    DEFAULT_SUITES,
)


class TestDefaults:
    def test_queue_names(self) -> None:
        s = Settings()
        assert s.job_queue == DEFAULT_JOB_QUEUE
        assert s.result_queue == DEFAULT_RESULT_QUEUE
        assert s.pop_timeout_seconds == 0

    def test_default_suites_leave_out_awm(self) -> None:
        suites = Settings().enabled_suites
        assert suites == list(DEFAULT_SUITES)
        assert "awm" not in suites

    def test_no_registry_override(self) -> None:
        assert Settings().registry_path is None


class TestSuiteParsing:
    def test_comma_separated_string_parsed_to_list(self) -> None:
        s = Settings(enabled_suites="consensus,staking")  # type: ignore[arg-type]
        assert s.enabled_suites == ["consensus", "staking"]

    def test_comma_separated_with_spaces(self) -> None:
        s = Settings(enabled_suites="gas , ecosystem")  # type: ignore[arg-type]
        assert s.enabled_suites == ["gas", "ecosystem"]

    def test_opt_in_suite_accepted(self) -> None:
        s = Settings(enabled_suites="awm")  # type: ignore[arg-type]
        assert s.enabled_suites == ["awm"]

    def test_json_list_passthrough(self) -> None:
        s = Settings(enabled_suites=["randomness"])
        assert s.enabled_suites == ["randomness"]

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SENTINEL_ENABLED_SUITES", "portability,gas")
        assert Settings().enabled_suites == ["portability", "gas"]


class TestSuiteValidation:
    def test_empty_list_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one suite"):
            Settings(enabled_suites=[])

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one suite"):
            Settings(enabled_suites="")  # type: ignore[arg-type]

    def test_unknown_suite_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown detector suites: nope"):
            Settings(enabled_suites=["gas", "nope"])

    def test_duplicate_suites_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="sentinel.config"):
            s = Settings(enabled_suites=["gas", "gas", "staking"])
        assert "Duplicate suites in SENTINEL_ENABLED_SUITES" in caplog.text
        # Order preserved as given
        assert s.enabled_suites == ["gas", "gas", "staking"]

    def test_no_warning_without_duplicates(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="sentinel.config"):
            Settings(enabled_suites=["gas", "staking"])
        assert "Duplicate" not in caplog.text


class TestEnvironment:
    def test_prefixed_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SENTINEL_REDIS_URL", "redis://queue:6380/2")
        monkeypatch.setenv("SENTINEL_POP_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("SENTINEL_REGISTRY_PATH", "/etc/registries.yaml")
        s = Settings()
        assert s.redis_url == "redis://queue:6380/2"
        assert s.pop_timeout_seconds == 30
        assert s.registry_path == Path("/etc/registries.yaml")

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="pop_timeout_seconds"):
            Settings(pop_timeout_seconds=-1)
