"""
code-smells - Structural code smell checks

Flags long files, long functions and deeply nested functions in Elixir,
Dart, TypeScript, Python and Rust projects, using line-level heuristics
rather than full parsers.
"""

__version__ = "0.1.0"

from .checks import CheckType, run_checks
from .config import ScanSettings, Thresholds, load_settings
from .detect import DetectedLanguage, detect_languages, parse_language_list
from .models import Issue, MetricKind, Severity
from .report import Report, SeverityFilter

__all__ = [
    "run_checks",  # Main entry point
    "CheckType",
    "DetectedLanguage",
    "detect_languages",
    "parse_language_list",
    "Issue",
    "MetricKind",
    "Severity",
    "Report",
    "SeverityFilter",
    "ScanSettings",
    "Thresholds",
    "load_settings",
]
