"""Report accumulator: issues plus the files-scanned counter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .models import Issue, Severity


class SeverityFilter(str, Enum):
    """Which issue groups a report shows."""

    ALL = "all"
    ERRORS = "errors"
    WARNINGS = "warnings"

    def shows(self, severity: Severity) -> bool:
        if self is SeverityFilter.ERRORS:
            return severity is Severity.ERROR
        if self is SeverityFilter.WARNINGS:
            return severity is Severity.WARNING
        return True


@dataclass
class Report:
    """Results of one run.

    Worker results are built as separate reports and merged by the caller,
    so a Report is never shared between threads.
    """

    project: str = ""
    languages: list[str] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    files_scanned: int = 0

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[Issue]) -> None:
        self.issues.extend(issues)

    def merge(self, other: "Report") -> None:
        """Fold another report's issues and file count into this one."""
        self.issues.extend(other.issues)
        self.files_scanned += other.files_scanned
        for language in other.languages:
            if language not in self.languages:
                self.languages.append(language)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity is Severity.WARNING)

    def exit_code(self) -> int:
        """0 when clean, 1 for warnings only, 2 when any error was found.

        Counts are taken before any display filter, so hiding a group never
        changes the exit status.
        """
        if self.error_count:
            return 2
        if self.warning_count:
            return 1
        return 0

    def sorted_issues(self, severity: Severity) -> list[Issue]:
        """Issues of one severity ordered by file, then line."""
        return sorted((i for i in self.issues if i.severity is severity), key=Issue.sort_key)
