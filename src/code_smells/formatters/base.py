"""Base formatter interface for code-smells output rendering."""

from abc import ABC, abstractmethod

from ..report import Report, SeverityFilter


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> str:
        """Return the report as plain text."""
