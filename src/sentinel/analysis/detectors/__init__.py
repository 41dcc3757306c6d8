"""The detector set, grouped by suite."""

from collections.abc import Iterable

from sentinel.analysis.detectors.awm import (
    detect_awm_import,
    detect_warp_receive,
)
from sentinel.analysis.detectors.consensus import (
    detect_missing_timelock,
    detect_reorg_hazard,
    detect_spot_price_oracle,
)
from sentinel.analysis.detectors.ecosystem import (
    detect_floating_pragma,
    detect_import_hazards,
)
from sentinel.analysis.detectors.environment import (
    detect_gas_limit_violation,
    detect_precompile_mismatch,
)
from sentinel.analysis.detectors.gas import detect_griefing_vectors
from sentinel.analysis.detectors.portability import (
    detect_cchain_dependencies,
    detect_portability_hazards,
)
from sentinel.analysis.detectors.randomness import detect_unsafe_randomness
from sentinel.analysis.detectors.staking import (
    detect_precompile_interactions,
    detect_validator_dependencies,
)
from sentinel.analysis.rules import DetectorSpec
from sentinel.constants import DEFAULT_SUITES, Suite

ALL_DETECTORS: tuple[DetectorSpec, ...] = (
    DetectorSpec("reorg_hazard", Suite.CONSENSUS, detect_reorg_hazard),
    DetectorSpec("spot_price_oracle", Suite.CONSENSUS, detect_spot_price_oracle),
    DetectorSpec("missing_timelock", Suite.CONSENSUS, detect_missing_timelock),
    DetectorSpec(
        "unsafe_randomness", Suite.RANDOMNESS, detect_unsafe_randomness
    ),
    DetectorSpec(
        "precompile_interactions",
        Suite.STAKING,
        detect_precompile_interactions,
    ),
    DetectorSpec(
        "validator_dependencies",
        Suite.STAKING,
        detect_validator_dependencies,
    ),
    DetectorSpec(
        "portability_hazards", Suite.PORTABILITY, detect_portability_hazards
    ),
    DetectorSpec(
        "cchain_dependencies", Suite.PORTABILITY, detect_cchain_dependencies
    ),
    DetectorSpec(
        "precompile_mismatch", Suite.ENVIRONMENT, detect_precompile_mismatch
    ),
    DetectorSpec(
        "gas_limit_violation", Suite.ENVIRONMENT, detect_gas_limit_violation
    ),
    DetectorSpec("floating_pragma", Suite.ECOSYSTEM, detect_floating_pragma),
    DetectorSpec("import_hazards", Suite.ECOSYSTEM, detect_import_hazards),
    DetectorSpec("griefing_vectors", Suite.GAS, detect_griefing_vectors),
    DetectorSpec("awm_import", Suite.AWM, detect_awm_import),
    DetectorSpec("warp_receive", Suite.AWM, detect_warp_receive),
)

DEFAULT_DETECTORS: tuple[DetectorSpec, ...] = tuple(
    d for d in ALL_DETECTORS if d.suite in DEFAULT_SUITES
)


def select_detectors(
    suites: Iterable[str] | None = None,
) -> tuple[DetectorSpec, ...]:
    """Detectors belonging to the given suites.

    None selects the default suites, which leave out the opt-in ones.
    """
    if suites is None:
        return DEFAULT_DETECTORS
    wanted = set(suites)
    return tuple(d for d in ALL_DETECTORS if d.suite in wanted)


__all__ = ["ALL_DETECTORS", "DEFAULT_DETECTORS", "select_detectors"]
