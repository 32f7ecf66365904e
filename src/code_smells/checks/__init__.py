"""Threshold checks over scanned files."""

from .evaluator import breached_limit, classify, evaluate
from .runner import CheckType, check_scan_result, run_checks

__all__ = [
    "CheckType",
    "breached_limit",
    "check_scan_result",
    "classify",
    "evaluate",
    "run_checks",
]
