"""Data models for the scanning layer."""

from dataclasses import dataclass, field

ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class SourceFile:
    """One file's lines, 1-indexed through ``line()``."""

    path: str
    language: str
    lines: tuple[str, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str:
        return self.lines[number - 1]


@dataclass(frozen=True)
class FunctionRecord:
    """A function found by a structural tracker.

    ``closed`` is False when the file ended while the function was still open.
    """

    name: str
    start_line: int
    end_line: int
    max_depth: int
    closed: bool = True

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass
class DepthState:
    """Running depth counters for one file scan."""

    depth: int = 0
    baseline: int = 0
    max_relative: int = 0

    def begin(self) -> None:
        """Capture the current depth as the baseline of a new function."""
        self.baseline = self.depth
        self.max_relative = 0

    def observe(self, level: int) -> None:
        """Record a nesting level measured relative to the function body."""
        if level > self.max_relative:
            self.max_relative = level


@dataclass
class FileScanResult:
    """Everything the checks need to know about one scanned file."""

    path: str
    language: str
    line_count: int
    functions: list[FunctionRecord] = field(default_factory=list)
