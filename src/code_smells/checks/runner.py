"""Turn scan results into issues and collect them into a Report."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config import ScanSettings, Thresholds, default_settings
from ..detect import DetectedLanguage
from ..logging_config import get_logger
from ..models import Issue, MetricKind
from ..report import Report
from ..scanning import FileScanner, FileScanResult, get_language_config
from .evaluator import breached_limit, evaluate

logger = get_logger(__name__)


class CheckType(str, Enum):
    """Which metrics a run evaluates."""

    ALL = "all"
    FILE_LENGTH = "file-length"
    FUNCTIONS = "functions"
    NESTING = "nesting"

    @property
    def kinds(self) -> tuple[MetricKind, ...]:
        if self is CheckType.FILE_LENGTH:
            return (MetricKind.FILE_LENGTH,)
        if self is CheckType.FUNCTIONS:
            return (MetricKind.FUNCTION_LENGTH,)
        if self is CheckType.NESTING:
            return (MetricKind.NESTING_DEPTH,)
        return (MetricKind.FILE_LENGTH, MetricKind.FUNCTION_LENGTH, MetricKind.NESTING_DEPTH)


def _issue(
    kind: MetricKind,
    value: int,
    thresholds: Thresholds,
    file: str,
    line: Optional[int] = None,
    name: Optional[str] = None,
) -> Optional[Issue]:
    limits = thresholds.pair(kind)
    severity = evaluate(kind, value, limits.warn, limits.error)
    if severity is None:
        return None
    return Issue(
        severity=severity,
        file=file,
        kind=kind,
        value=value,
        limit=breached_limit(severity, limits),
        line=line,
        name=name,
    )


def check_scan_result(
    result: FileScanResult,
    thresholds: Thresholds,
    check_type: CheckType = CheckType.ALL,
) -> list[Issue]:
    """Evaluate one scanned file. At most one issue per metric per function."""
    kinds = check_type.kinds
    issues: list[Issue] = []

    if MetricKind.FILE_LENGTH in kinds:
        issue = _issue(MetricKind.FILE_LENGTH, result.line_count, thresholds, result.path)
        if issue is not None:
            issues.append(issue)

    for func in result.functions:
        if MetricKind.FUNCTION_LENGTH in kinds:
            issue = _issue(
                MetricKind.FUNCTION_LENGTH,
                func.line_count,
                thresholds,
                result.path,
                func.start_line,
                func.name,
            )
            if issue is not None:
                issues.append(issue)
        if MetricKind.NESTING_DEPTH in kinds:
            issue = _issue(
                MetricKind.NESTING_DEPTH,
                func.max_depth,
                thresholds,
                result.path,
                func.start_line,
                func.name,
            )
            if issue is not None:
                issues.append(issue)

    return issues


def _check_file(scanner: FileScanner, path: Path, thresholds: Thresholds, check_type: CheckType) -> Report:
    """Scan and check a single file into its own partial report."""
    partial = Report()
    result = scanner.scan_file(path)
    if result is not None:
        partial.files_scanned = 1
        partial.extend(check_scan_result(result, thresholds, check_type))
    return partial


def run_checks(
    project_dir: Path,
    languages: list[DetectedLanguage],
    settings: Optional[ScanSettings] = None,
    check_type: CheckType = CheckType.ALL,
    threshold_overrides: Optional[dict[str, Optional[int]]] = None,
) -> Report:
    """Scan every detected language's source directory and check each file.

    Args:
        project_dir: Project root; issue paths are relative to it
        languages: Languages to check with their source directories
        settings: Scan settings (default: built-in defaults)
        check_type: Metrics to evaluate
        threshold_overrides: Threshold fields applied to every language,
            ``None`` values are ignored

    Returns:
        Report with all issues and the number of files scanned
    """
    settings = settings or default_settings
    project_dir = Path(project_dir)
    overrides = threshold_overrides or {}
    report = Report(project=str(project_dir), languages=[d.language for d in languages])
    workers = settings.workers or 1

    for detected in languages:
        source_dir = project_dir / detected.source_dir
        if not source_dir.is_dir():
            logger.info(f"{detected.language}: source directory {source_dir} not found, skipping")
            continue

        config = get_language_config(detected.language)
        thresholds = settings.thresholds_for(detected.language).with_overrides(**overrides)
        scanner = FileScanner(source_dir, config, settings, relative_to=project_dir)
        paths = list(scanner.iter_files())

        if workers <= 1 or len(paths) < 2:
            for path in paths:
                report.merge(_check_file(scanner, path, thresholds, check_type))
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(_check_file, scanner, path, thresholds, check_type)
                    for path in paths
                ]
                for future in as_completed(futures):
                    report.merge(future.result())

        logger.info(f"{detected.language}: checked {len(paths)} files in {source_dir}")

    logger.info(
        f"Done: {report.files_scanned} files, {report.error_count} errors, "
        f"{report.warning_count} warnings"
    )
    return report
