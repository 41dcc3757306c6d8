"""CLI entry point: ``sentinel worker`` and ``sentinel scan``."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from sentinel import __version__
from sentinel.analysis.detectors import select_detectors
from sentinel.analysis.engine import analyze_source
from sentinel.analysis.registry import load_registries
from sentinel.config import Settings
from sentinel.constants import ALL_SUITES, DEFAULT_SUITES
from sentinel.errors import AnalysisError, RegistryError, TransportError
from sentinel.logging_config import setup_logging
from sentinel.schemas import ExternalContext, Finding


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"sentinel {__version__}")
        return 0

    if args.command == "worker":
        return _run_worker(args)
    if args.command == "scan":
        return _run_scan(args)
    parser.print_help()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sentinel",
        description=(
            "Heuristic smart-contract analysis worker: "
            "pattern-based findings for Subnet deployments."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    worker = sub.add_parser(
        "worker",
        help="Consume jobs from the Redis job queue",
    )
    worker.add_argument(
        "--max-jobs",
        type=int,
        default=None,
        help="Stop after this many payloads (default: run forever)",
    )

    scan = sub.add_parser(
        "scan",
        help="Analyze a local source file",
    )
    scan.add_argument(
        "source_path",
        type=str,
        help="Path to a Solidity source file",
    )
    scan.add_argument(
        "--genesis",
        "-g",
        default=None,
        help="Subnet genesis JSON used as external context",
    )
    scan.add_argument(
        "--suites",
        "-s",
        type=str,
        default=None,
        help=(
            "Comma-separated detector suites "
            f"(default: {', '.join(DEFAULT_SUITES)}; "
            f"valid: {', '.join(ALL_SUITES)})"
        ),
    )
    scan.add_argument(
        "--registry",
        "-r",
        default=None,
        help="YAML registry override file",
    )
    scan.add_argument(
        "--json",
        action="store_true",
        help="Print findings as JSON",
    )

    return parser


def _run_worker(args: argparse.Namespace) -> int:
    """Run the orchestrator loop against Redis."""
    from sentinel.queue.redis_queue import RedisJobQueue
    from sentinel.worker import build_orchestrator

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    setup_logging(settings.log_level)

    queue = RedisJobQueue.from_url(
        settings.redis_url, settings.job_queue, settings.result_queue
    )
    try:
        queue.ping()
        orchestrator = build_orchestrator(settings, queue)
        print(
            f"{settings.worker_name} listening on '{settings.job_queue}'",
            file=sys.stderr,
        )
        orchestrator.run_forever(max_jobs=args.max_jobs)
    except (TransportError, RegistryError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted, shutting down.", file=sys.stderr)
    finally:
        queue.close()
    return 0


def _run_scan(args: argparse.Namespace) -> int:
    """Analyze one file and print its findings."""
    setup_logging("WARNING")

    source_path = Path(args.source_path)
    if not source_path.is_file():
        print(f"Error: {source_path} does not exist", file=sys.stderr)
        return 1

    suites = (
        [s.strip() for s in args.suites.split(",") if s.strip()]
        if args.suites
        else None
    )
    if suites:
        for name in suites:
            if name not in ALL_SUITES:
                print(
                    f"Error: unknown suite '{name}'. "
                    f"Valid: {', '.join(ALL_SUITES)}",
                    file=sys.stderr,
                )
                return 1

    context: ExternalContext | None = None
    if args.genesis:
        genesis_path = Path(args.genesis)
        try:
            genesis = json.loads(genesis_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Error: cannot read genesis: {exc}", file=sys.stderr)
            return 1
        if not isinstance(genesis, dict):
            print("Error: genesis must be a JSON object", file=sys.stderr)
            return 1
        context = ExternalContext.from_genesis(genesis)

    try:
        registries = load_registries(
            Path(args.registry) if args.registry else None
        )
    except RegistryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    source = source_path.read_text(encoding="utf-8", errors="replace")
    try:
        findings = analyze_source(
            source,
            context,
            registries=registries,
            detectors=select_detectors(suites),
        )
    except AnalysisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(
            json.dumps(
                [f.model_dump() for f in findings], indent=2
            )
        )
    else:
        _print_findings(findings, source_path)
    return 0


def _print_findings(findings: list[Finding], source_path: Path) -> None:
    if not findings:
        print(f"{source_path}: no findings")
        return
    for f in findings:
        location = f"{source_path}:{f.line}" if f.line else str(source_path)
        print(f"{location}: [{f.issue_type}] {f.description}")
        print(f"    -> {f.recommendation}")
    print(f"\n{len(findings)} finding(s)")


if __name__ == "__main__":
    sys.exit(main())
