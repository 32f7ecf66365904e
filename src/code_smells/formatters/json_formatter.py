"""JSON formatter for code-smells."""

import json
from typing import Any

from ..models import Issue
from ..report import Report, SeverityFilter
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as a JSON document.

    The document always lists every issue; the severity filter only affects
    the text report.
    """

    def render(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> None:
        print(self.format(report, severity_filter))

    def format(self, report: Report, severity_filter: SeverityFilter = SeverityFilter.ALL) -> str:
        return json.dumps(self.to_dict(report), indent=2)

    def to_dict(self, report: Report) -> dict[str, Any]:
        return {
            "project": report.project,
            "languages": list(report.languages),
            "issues": [i.to_dict() for i in sorted(report.issues, key=Issue.sort_key)],
            "summary": {
                "files": report.files_scanned,
                "errors": report.error_count,
                "warnings": report.warning_count,
            },
        }
