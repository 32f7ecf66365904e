"""Tests for FileScanner enumeration, skip rules and per-file results."""

import logging
from pathlib import Path

import pytest

from code_smells.config import ScanSettings
from code_smells.scanning import FileScanner, get_language_config, read_source
from code_smells.scanning.scanner import split_lines


def _write(root: Path, rel: str, content: str = "x = 1\n") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _names(scanner: FileScanner) -> list[str]:
    return [p.relative_to(scanner.root_dir).as_posix() for p in scanner.iter_files()]


class TestSkipRules:
    """Test FileScanner enumeration and skip rules."""

    def test_python_skip_dirs_and_test_files(self, tmp_path):
        """Test virtualenvs, caches and test files are skipped for Python."""
        _write(tmp_path, "pkg/core.py")
        _write(tmp_path, "pkg/test_core.py")
        _write(tmp_path, "pkg/core_test.py")
        _write(tmp_path, "pkg/__pycache__/core.py")
        _write(tmp_path, ".venv/lib/site.py")
        _write(tmp_path, "venv/lib/site.py")
        _write(tmp_path, "lib/site-packages/dep.py")
        _write(tmp_path, "pkg/notes.txt")

        scanner = FileScanner(tmp_path, get_language_config("python"))
        assert _names(scanner) == ["pkg/core.py"]

    def test_test_files_kept_when_disabled(self, tmp_path):
        """Test skip_test_files=False keeps test files."""
        _write(tmp_path, "test_core.py")
        settings = ScanSettings(skip_test_files=False)
        scanner = FileScanner(tmp_path, get_language_config("python"), settings)
        assert _names(scanner) == ["test_core.py"]

    def test_dart_generated_files(self, tmp_path):
        """Test generated Dart files and tool dirs are skipped."""
        for rel in (
            "lib/main.dart",
            "lib/model.g.dart",
            "lib/model.freezed.dart",
            "lib/assets.gen.dart",
            "lib/firebase_options.dart",
            ".dart_tool/cache.dart",
            "build/out.dart",
        ):
            _write(tmp_path, rel, "void main() {}\n")
        scanner = FileScanner(tmp_path, get_language_config("dart"))
        assert _names(scanner) == ["lib/main.dart"]

    def test_typescript_declarations_and_vendor_dirs(self, tmp_path):
        """Test .d.ts files and vendor dirs are skipped."""
        _write(tmp_path, "src/app.ts")
        _write(tmp_path, "src/view.tsx")
        _write(tmp_path, "src/types.d.ts")
        _write(tmp_path, "node_modules/lib/index.ts")
        _write(tmp_path, "dist/app.ts")
        scanner = FileScanner(tmp_path, get_language_config("typescript"))
        assert _names(scanner) == ["src/app.ts", "src/view.tsx"]

    def test_elixir_and_rust_build_dirs(self, tmp_path):
        _write(tmp_path, "lib/app.ex")
        _write(tmp_path, "test/app_test.exs")
        _write(tmp_path, "deps/dep/lib/dep.ex")
        _write(tmp_path, "_build/dev/x.ex")
        assert _names(FileScanner(tmp_path, get_language_config("elixir"))) == [
            "lib/app.ex",
            "test/app_test.exs",
        ]

        _write(tmp_path, "src/main.rs")
        _write(tmp_path, "target/debug/build.rs")
        assert _names(FileScanner(tmp_path, get_language_config("rust"))) == ["src/main.rs"]

    def test_skip_dir_names_match_whole_components(self, tmp_path):
        """Test skip dirs match whole path components, not substrings."""
        _write(tmp_path, "environment/setup.py")
        _write(tmp_path, "rebuild/tool.py")
        scanner = FileScanner(tmp_path, get_language_config("python"))
        assert _names(scanner) == ["environment/setup.py", "rebuild/tool.py"]

    def test_global_exclude_patterns(self, tmp_path):
        """Test exclude patterns match relative paths and file names."""
        _write(tmp_path, "api.generated.py")
        _write(tmp_path, "migrations/0001_init.py")
        _write(tmp_path, "app.py")
        settings = ScanSettings(exclude_patterns=["*.generated.*", "migrations/*"])
        scanner = FileScanner(tmp_path, get_language_config("python"), settings)
        assert _names(scanner) == ["app.py"]

    def test_hidden_directories(self, tmp_path):
        _write(tmp_path, ".hidden/tool.py")
        _write(tmp_path, "app.py")
        config = get_language_config("python")
        assert _names(FileScanner(tmp_path, config)) == ["app.py"]
        allowed = FileScanner(tmp_path, config, ScanSettings(allow_hidden_files=True))
        assert _names(allowed) == [".hidden/tool.py", "app.py"]

    def test_max_file_size(self, tmp_path):
        """Test files over the size limit are skipped."""
        _write(tmp_path, "small.py")
        _write(tmp_path, "big.py", "x = 1\n" * 400_000)
        settings = ScanSettings(max_file_size_mb=1)
        scanner = FileScanner(tmp_path, get_language_config("python"), settings)
        assert _names(scanner) == ["small.py"]

    def test_max_files(self, tmp_path):
        """Test enumeration stops at max_files."""
        for i in range(5):
            _write(tmp_path, f"m{i}.py")
        scanner = FileScanner(tmp_path, get_language_config("python"), ScanSettings(max_files=3))
        assert len(_names(scanner)) == 3


class TestScanFile:
    """Test reading and scanning single files."""

    def test_line_count_and_functions(self, tmp_path):
        """Test a scan result carries the display path, line count and functions."""
        path = _write(tmp_path, "src/mod.py", "import os\n\ndef f():\n    return os.sep\n")
        scanner = FileScanner(tmp_path / "src", get_language_config("python"), relative_to=tmp_path)
        result = scanner.scan_file(path)
        assert result is not None
        assert result.path == "src/mod.py"
        assert result.language == "python"
        assert result.line_count == 4
        assert [(f.name, f.start_line, f.end_line) for f in result.functions] == [("f", 3, 4)]

    def test_invalid_utf8_is_replaced(self, tmp_path):
        """Test undecodable bytes do not abort the scan."""
        path = tmp_path / "bad.py"
        path.write_bytes(b"def f():\n    s = '\xff\xfe'\n")
        result = FileScanner(tmp_path, get_language_config("python")).scan_file(path)
        assert result is not None
        assert result.line_count == 2

    def test_form_feed_does_not_split_lines(self, tmp_path):
        """Test only newlines end a line; a form feed stays in its line."""
        path = _write(tmp_path, "ff.py", "x = 1\n\x0c\ny = 2\n")
        source = read_source(path, "python", "ff.py")
        assert source.line_count == 3
        assert source.lines == ("x = 1", "\x0c", "y = 2")

    def test_other_separators_do_not_split_lines(self, tmp_path):
        """Test vertical tabs, lone CRs and Unicode separators are not line breaks."""
        path = tmp_path / "sep.py"
        path.write_bytes("a = 1\x0b\x1c\x85  b\rc\n".encode("utf-8"))
        source = read_source(path, "python", "sep.py")
        assert source.line_count == 1

    def test_crlf_line_endings(self, tmp_path):
        """Test CRLF files count one line per CRLF with the CR stripped."""
        path = tmp_path / "win.py"
        path.write_bytes(b"def f():\r\n    return 1\r\n")
        source = read_source(path, "python", "win.py")
        assert source.lines == ("def f():", "    return 1")

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("", []),
            ("a", ["a"]),
            ("a\n", ["a"]),
            ("a\n\n", ["a", ""]),
            ("a\r\nb", ["a", "b"]),
        ],
    )
    def test_split_lines(self, content, expected):
        """Test a trailing newline does not add an empty last line."""
        assert split_lines(content) == expected

    def test_unreadable_file_returns_none(self, tmp_path, caplog):
        """Test an unreadable file is logged and skipped."""
        caplog.set_level(logging.WARNING, logger="code_smells")
        scanner = FileScanner(tmp_path, get_language_config("python"))
        assert scanner.scan_file(tmp_path / "missing.py") is None
        assert "missing.py" in caplog.text

    def test_scan_collects_all_files(self, tmp_path):
        _write(tmp_path, "a.py")
        _write(tmp_path, "b/c.py", "def g():\n    pass\n")
        results = FileScanner(tmp_path, get_language_config("python")).scan()
        assert sorted(r.path for r in results) == ["a.py", "b/c.py"]


@pytest.mark.parametrize("rel", ["deps/x.ex", "_build/x.ex"])
def test_elixir_skip_rule_applies_at_any_depth(tmp_path, rel):
    """Test deps and _build are skipped below the root too."""
    _write(tmp_path, "nested/" + rel)
    assert _names(FileScanner(tmp_path, get_language_config("elixir"))) == []
