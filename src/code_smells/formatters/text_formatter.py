"""Human-readable report grouped by severity."""

from rich.console import Console
from rich.text import Text

from ..models import Severity
from ..report import Report, SeverityFilter
from .base import BaseFormatter

_LABELS = {
    Severity.ERROR: ("ERROR", "  ", "red"),
    Severity.WARNING: ("WARN", "   ", "yellow"),
}
_HEADINGS = {Severity.ERROR: "ERRORS", Severity.WARNING: "WARNINGS"}


def _count(value: int, style: str) -> Text:
    return Text(str(value), style=style if value else "green")


class TextFormatter(BaseFormatter):
    """Plain text layout, coloured when stdout is a terminal."""

    def render(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> None:
        # rich drops styles by itself when stdout is not a terminal
        console = Console(highlight=False, soft_wrap=True)
        for line in self.build(report, severity_filter):
            console.print(line)

    def format(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> str:
        return "\n".join(line.plain for line in self.build(report, severity_filter))

    def build(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> list[Text]:
        """Report as styled lines."""
        lines = [
            Text("=== Code Smells Report ===", style="bold"),
            Text(f"Project: {report.project}"),
            Text(f"Languages: {', '.join(report.languages)}"),
        ]

        for severity in (Severity.ERROR, Severity.WARNING):
            if not severity_filter.shows(severity):
                continue
            issues = report.sorted_issues(severity)
            if not issues:
                continue
            label, pad, style = _LABELS[severity]
            lines.append(Text())
            lines.append(Text(f"--- {_HEADINGS[severity]} ({len(issues)}) ---", style="bold"))
            for issue in issues:
                lines.append(Text.assemble((label, style), pad, issue.message))

        lines.append(Text())
        lines.append(Text("--- SUMMARY ---", style="bold"))
        lines.append(Text(f"Files scanned: {report.files_scanned}"))
        lines.append(Text.assemble("Errors: ", _count(report.error_count, "red")))
        lines.append(Text.assemble("Warnings: ", _count(report.warning_count, "yellow")))
        return lines
