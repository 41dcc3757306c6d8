"""Sentinel: queue-driven heuristic analysis of smart-contract sources."""

__version__ = "0.3.0"
