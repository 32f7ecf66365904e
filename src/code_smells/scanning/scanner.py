"""Enumerate a language's files and run its tracker on each.

Language-specific behavior (extensions, skip rules, tracking strategy) is
driven entirely by a LanguageConfig instance from languages.py.
"""

from collections.abc import Iterator
from fnmatch import fnmatch
from pathlib import Path
from typing import Optional

from ..config import ScanSettings, default_settings
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .languages import LanguageConfig
from .models import FileScanResult, SourceFile
from .trackers import track_functions

logger = get_logger(__name__)


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds, lone carriage returns and Unicode separators stay inside
    their line. A final newline does not start another line.
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_source(filepath: Path, language: str, display_path: str) -> SourceFile:
    """Read a file as UTF-8 lines; undecodable bytes are replaced.

    Raises:
        FileAccessError: If the file cannot be read
    """
    try:
        with open(filepath, encoding="utf-8", errors="replace", newline="") as f:
            content = f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"Cannot read file: {e}")
    return SourceFile(path=display_path, language=language, lines=tuple(split_lines(content)))


class FileScanner:
    """Scans every file of one language under a root directory."""

    def __init__(
        self,
        root_dir: Path,
        config: LanguageConfig,
        settings: Optional[ScanSettings] = None,
        relative_to: Optional[Path] = None,
    ):
        """
        Initialize scanner.

        Args:
            root_dir: Directory to scan
            config: Language to scan for
            settings: Scan settings (filters and limits)
            relative_to: Base for the paths reported in results
                (default: root_dir)
        """
        self.root_dir = Path(root_dir)
        self.config = config
        self.settings = settings or default_settings
        self.relative_to = Path(relative_to) if relative_to is not None else self.root_dir
        logger.debug(f"Initialized {config.name} scanner for {self.root_dir}")

    # ── Enumeration ────────────────────────────────────────────

    def iter_files(self) -> Iterator[Path]:
        """Yield candidate files in a stable order, applying every skip rule."""
        ext_set = set(self.config.extensions)
        files_yielded = 0
        files_skipped = 0

        try:
            candidates = sorted(self.root_dir.rglob("*"))
        except OSError as e:
            logger.warning(f"Cannot walk {self.root_dir}: {e}")
            return

        for filepath in candidates:
            if filepath.suffix not in ext_set:
                continue
            try:
                if not filepath.is_file():
                    continue
            except OSError:
                continue

            if files_yielded >= self.settings.max_files:
                logger.warning(f"Reached max files limit ({self.settings.max_files})")
                break

            if self.should_skip(filepath):
                files_skipped += 1
                logger.debug(f"Skipped: {filepath}")
                continue

            try:
                size = filepath.stat().st_size
            except OSError as e:
                logger.warning(f"Cannot stat {filepath}: {e}")
                continue
            if size > self.settings.max_file_size_bytes:
                files_skipped += 1
                logger.debug(f"Skipped (size): {filepath} ({size} bytes)")
                continue

            files_yielded += 1
            yield filepath

        logger.debug(f"{self.config.name}: {files_yielded} files to scan, {files_skipped} skipped")

    def should_skip(self, filepath: Path) -> bool:
        """Apply directory, generated-file, test-file and exclude-pattern rules."""
        cfg = self.config
        try:
            rel = filepath.relative_to(self.root_dir)
        except ValueError:
            rel = filepath
        name = filepath.name
        dirs = rel.parts[:-1]

        if any(d in cfg.skip_dirs for d in dirs):
            return True
        if not self.settings.allow_hidden_files and any(d.startswith(".") for d in dirs):
            return True
        if cfg.skip_file_suffixes and name.endswith(cfg.skip_file_suffixes):
            return True
        if name in cfg.skip_file_names:
            return True
        if self.settings.skip_test_files and any(fnmatch(name, p) for p in cfg.test_file_patterns):
            return True
        rel_str = rel.as_posix()
        return any(
            fnmatch(rel_str, pattern) or fnmatch(name, pattern)
            for pattern in self.settings.exclude_patterns
        )

    # ── Scanning ───────────────────────────────────────────────

    def display_path(self, filepath: Path) -> str:
        try:
            return filepath.relative_to(self.relative_to).as_posix()
        except ValueError:
            return filepath.as_posix()

    def scan_file(self, filepath: Path) -> Optional[FileScanResult]:
        """Scan one file. Unreadable files are logged and yield None."""
        try:
            source = read_source(filepath, self.config.name, self.display_path(filepath))
        except FileAccessError as e:
            logger.warning(f"Access error for {filepath}: {e.reason}")
            return None
        return self.scan_source(source)

    def scan_source(self, source: SourceFile) -> FileScanResult:
        """Measure an already-read file."""
        return FileScanResult(
            path=source.path,
            language=source.language,
            line_count=source.line_count,
            functions=track_functions(source.lines, self.config),
        )

    def scan(self) -> list[FileScanResult]:
        """Scan all candidate files."""
        results = []
        for filepath in self.iter_files():
            result = self.scan_file(filepath)
            if result is not None:
                results.append(result)
        logger.info(f"{self.config.name}: scanned {len(results)} files under {self.root_dir}")
        return results
