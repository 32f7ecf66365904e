"""Shared CLI helpers."""

from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanSettings, load_settings
from ..report import SeverityFilter

# stderr, so JSON on stdout stays parseable
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def resolve_settings(
    project_dir: Path,
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ScanSettings:
    """Build settings from CLI options."""
    return load_settings(
        config_file=config,
        project_dir=project_dir,
        workers=workers,
        verbose=verbose,
        quiet=quiet,
    )


def severity_filter(errors_only: bool, warnings_only: bool) -> SeverityFilter:
    if errors_only:
        return SeverityFilter.ERRORS
    if warnings_only:
        return SeverityFilter.WARNINGS
    return SeverityFilter.ALL
