"""Checker package — per-link probing and bounded fan-out."""

from linkcheck.checker.coordinator import check_links, iter_probe_results
from linkcheck.checker.models import ProbeResult, ProbeStatus
from linkcheck.checker.prober import probe

__all__ = ["check_links", "iter_probe_results", "probe", "ProbeResult", "ProbeStatus"]
