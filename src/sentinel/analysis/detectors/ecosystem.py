"""Dependency hygiene: pragmas and imports.

Offline checks only; no explorer or registry lookups.
"""

from __future__ import annotations

import re

from sentinel.analysis.lines import LineIndex
from sentinel.analysis.registry import Registries
from sentinel.analysis.rules import make_finding
from sentinel.constants import FindingCategory
from sentinel.schemas import ExternalContext, Finding

IMPORT_RE = re.compile(
    r"""import\s+(?:[^"';]*?\s+from\s+)?["']([^"']+)["']"""
)
PRAGMA_RE = re.compile(r"pragma\s+solidity\s*([^\s;]+)")
PATH_VERSION_RE = re.compile(r"@(\d[\d.]*-?[A-Za-z.\d]*)")
_NUMERIC_RE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def coerce_version(raw: str) -> tuple[int, int, int] | None:
    """Loose ``major.minor.patch`` parse; missing parts count as 0."""
    m = _NUMERIC_RE.search(raw)
    if m is None:
        return None
    return (
        int(m.group(1)),
        int(m.group(2) or 0),
        int(m.group(3) or 0),
    )


def _format_version(version: tuple[int, int, int]) -> str:
    return ".".join(str(part) for part in version)


def detect_floating_pragma(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    findings: list[Finding] = []
    for line_num, line in index.numbered():
        for m in PRAGMA_RE.finditer(line):
            constraint = m.group(1)
            if constraint.startswith(("^", "~")):
                findings.append(
                    make_finding(
                        line_num,
                        FindingCategory.FLOATING_PRAGMA,
                        "A floating pragma ('pragma solidity "
                        f"{constraint}') was detected.",
                        "For production contracts, pin to an exact Solidity "
                        "version (e.g., `pragma solidity 0.8.20;`) to ensure "
                        "verifiability.",
                    )
                )
    return findings


def detect_import_hazards(
    index: LineIndex,
    registries: Registries,
    context: ExternalContext | None,
) -> list[Finding]:
    """URL imports and imports of known libraries pinned below the recommendation."""
    # Longest name first so "-upgradeable" wins over its prefix.
    libraries = sorted(
        registries.known_libraries.items(),
        key=lambda item: len(item[0]),
        reverse=True,
    )
    findings: list[Finding] = []
    for line_num, line in index.numbered():
        for m in IMPORT_RE.finditer(line):
            import_path = m.group(1)

            if import_path.startswith(("http:", "https:")):
                findings.append(
                    make_finding(
                        line_num,
                        FindingCategory.UNKNOWN_SOURCE,
                        "Import from a direct URL is detected.",
                        "Use a package manager with version pinning to "
                        "ensure dependency integrity.",
                    )
                )
                continue

            lib = next(
                (item for item in libraries if item[0] in import_path),
                None,
            )
            if lib is None:
                continue
            lib_name, recommended = lib
            version_match = PATH_VERSION_RE.search(import_path)
            if version_match is None:
                continue
            imported = coerce_version(version_match.group(1))
            latest = coerce_version(recommended)
            if imported is None or latest is None or imported >= latest:
                continue
            findings.append(
                make_finding(
                    line_num,
                    FindingCategory.OUTDATED_VERSION,
                    f"An outdated version of {lib_name} "
                    f"({_format_version(imported)}) is imported.",
                    f"The recommended version is {recommended}. Outdated "
                    "libraries may contain known vulnerabilities.",
                )
            )
    return findings
