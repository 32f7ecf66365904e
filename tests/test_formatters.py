"""Tests for the formatters package."""

import json

import pytest

from code_smells.formatters import JsonFormatter, TextFormatter, get_formatter
from code_smells.models import Issue, MetricKind, Severity
from code_smells.report import Report, SeverityFilter


def _make_report():
    """A report with one issue of each kind."""
    return Report(
        project="/work/app",
        languages=["python", "rust"],
        files_scanned=7,
        issues=[
            Issue(Severity.WARNING, "src/b.py", MetricKind.NESTING_DEPTH, 5, 4, line=12, name="walk"),
            Issue(Severity.ERROR, "src/b.py", MetricKind.FUNCTION_LENGTH, 55, 50, line=3, name="load"),
            Issue(Severity.ERROR, "src/a.py", MetricKind.FILE_LENGTH, 620, 500),
        ],
    )


class TestGetFormatter:
    """Test get_formatter function."""

    def test_known_formatters(self):
        assert isinstance(get_formatter("text"), TextFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)

    def test_unknown_formatter(self):
        """Test an unknown name raises ValueError."""
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    """Test JsonFormatter class."""

    def test_document_shape(self):
        """Test the JSON document has project, languages, issues and summary."""
        data = json.loads(JsonFormatter().format(_make_report()))
        assert data["project"] == "/work/app"
        assert data["languages"] == ["python", "rust"]
        assert data["summary"] == {"files": 7, "errors": 2, "warnings": 1}

    def test_issues_sorted_with_optional_fields(self):
        """Test file issues omit line and name while function issues carry them."""
        issues = json.loads(JsonFormatter().format(_make_report()))["issues"]
        assert issues[0] == {
            "severity": "error",
            "file": "src/a.py",
            "type": "file-length",
            "value": 620,
            "limit": 500,
        }
        assert issues[1] == {
            "severity": "error",
            "file": "src/b.py",
            "line": 3,
            "name": "load",
            "type": "function-length",
            "value": 55,
            "limit": 50,
        }
        assert [i["line"] for i in issues[1:]] == [3, 12]

    def test_filter_does_not_drop_issues(self):
        """Test the severity filter does not apply to JSON."""
        data = json.loads(JsonFormatter().format(_make_report(), SeverityFilter.ERRORS))
        assert len(data["issues"]) == 3

    def test_render_prints(self, capsys):
        JsonFormatter().render(_make_report())
        assert json.loads(capsys.readouterr().out)["summary"]["files"] == 7


class TestTextFormatter:
    """Test TextFormatter class."""

    def test_layout(self):
        """Test header, groups and summary of the text report."""
        text = TextFormatter().format(_make_report())
        assert text.splitlines() == [
            "=== Code Smells Report ===",
            "Project: /work/app",
            "Languages: python, rust",
            "",
            "--- ERRORS (2) ---",
            "ERROR  src/a.py (620 lines, limit: 500)",
            "ERROR  src/b.py:3 load (55 lines)",
            "",
            "--- WARNINGS (1) ---",
            "WARN   src/b.py:12 walk (depth: 5)",
            "",
            "--- SUMMARY ---",
            "Files scanned: 7",
            "Errors: 2",
            "Warnings: 1",
        ]

    def test_errors_only_hides_warnings(self):
        """Test --errors hides the warnings group."""
        text = TextFormatter().format(_make_report(), SeverityFilter.ERRORS)
        assert "--- ERRORS (2) ---" in text
        assert "WARNINGS" not in text
        assert "Warnings: 1" in text

    def test_warnings_only_hides_errors(self):
        """Test --warnings hides the errors group."""
        text = TextFormatter().format(_make_report(), SeverityFilter.WARNINGS)
        assert "--- ERRORS" not in text
        assert "--- WARNINGS (1) ---" in text

    def test_empty_report_has_no_groups(self):
        """Test a clean report prints only header and summary."""
        text = TextFormatter().format(Report(project="/p", languages=["dart"]))
        assert "--- ERRORS" not in text
        assert text.endswith("Errors: 0\nWarnings: 0")

    def test_render_without_terminal_is_plain(self, capsys):
        """Test output to a non-terminal has no escape codes."""
        TextFormatter().render(_make_report())
        out = capsys.readouterr().out
        assert "\x1b[" not in out
        assert "ERROR  src/b.py:3 load (55 lines)" in out
