"""Data models shared by the checks, the report and the formatters."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional


class Severity(str, Enum):
    """Issue severity. Errors outrank warnings."""

    WARNING = "warning"
    ERROR = "error"


class MetricKind(str, Enum):
    """The three metrics that are compared against thresholds."""

    FILE_LENGTH = "file-length"
    FUNCTION_LENGTH = "function-length"
    NESTING_DEPTH = "nesting-depth"


class ThresholdPair(NamedTuple):
    """(warn, error) limits for one metric kind."""

    warn: int
    error: int


@dataclass(frozen=True)
class Issue:
    """One classified finding.

    ``line`` and ``name`` are only set for function-level metrics.
    """

    severity: Severity
    file: str
    kind: MetricKind
    value: int
    limit: int
    line: Optional[int] = None
    name: Optional[str] = None

    @property
    def location(self) -> str:
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"

    @property
    def message(self) -> str:
        """Human-readable one-liner, as shown by the text report."""
        if self.kind is MetricKind.FILE_LENGTH:
            return f"{self.file} ({self.value} lines, limit: {self.limit})"
        if self.kind is MetricKind.FUNCTION_LENGTH:
            return f"{self.location} {self.name} ({self.value} lines)"
        return f"{self.location} {self.name} (depth: {self.value})"

    def sort_key(self) -> tuple:
        return (self.file, self.line or 0, self.kind.value, self.name or "")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"severity": self.severity.value, "file": self.file}
        if self.line is not None:
            data["line"] = self.line
        if self.name is not None:
            data["name"] = self.name
        data["type"] = self.kind.value
        data["value"] = self.value
        data["limit"] = self.limit
        return data
