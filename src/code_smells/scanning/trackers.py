"""Structural trackers: turn a file's lines into function records.

Three strategies share one interface:

    start(line_no, line)      -> bool                 begin a function here?
    consume(line_no, line)    -> FunctionRecord|None  feed the next line
    close_at_eof(last_line)   -> FunctionRecord|None  finalise at end of file

A tracker holds the state of a single file scan and is discarded after it.
Nesting depth is reported relative to the function's own body: a body
without nested blocks has depth 0.

None of the trackers ever raise on malformed input. Unbalanced or
unterminated structure is resolved by closing the function at end of file.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional, Union

from ..logging_config import get_logger
from .boundaries import BoundaryMatcher, indentation
from .delimiters import BraceCounter, BracketCounter, KeywordCounter
from .languages import LanguageConfig
from .models import ANONYMOUS, DepthState, FunctionRecord

logger = get_logger(__name__)


class BaseTracker(ABC):
    """Bookkeeping shared by all strategies: the open function and its depth."""

    def __init__(self, matcher: BoundaryMatcher):
        self.matcher = matcher
        self.state = DepthState()
        self._name: Optional[str] = None
        self._start = 0

    @property
    def in_function(self) -> bool:
        return self._name is not None

    @abstractmethod
    def start(self, line_no: int, line: str) -> bool:
        """Begin a function at ``line`` if it is a boundary."""

    @abstractmethod
    def consume(self, line_no: int, line: str) -> Optional[FunctionRecord]:
        """Feed the next line. Returns a record when a function finishes."""

    @abstractmethod
    def close_at_eof(self, last_line: int) -> Optional[FunctionRecord]:
        """Finalise a function left open at end of file."""

    def _begin(self, name: str, line_no: int) -> None:
        self._name = name
        self._start = line_no
        self.state.begin()

    def _finish(self, end_line: int, closed: bool = True) -> FunctionRecord:
        record = FunctionRecord(
            name=self._name or ANONYMOUS,
            start_line=self._start,
            end_line=max(end_line, self._start),
            max_depth=self.state.max_relative,
            closed=closed,
        )
        self._name = None
        return record

    def _discard(self) -> None:
        logger.debug(f"Dropped bodiless function {self._name} at line {self._start}")
        self._name = None


class BalanceTracker(BaseTracker):
    """Depth from a running balance of opening and closing delimiters.

    The function starts at a boundary with the depth before that line as
    its baseline. It is "opened" once a delimiter opens on its lines and
    closes at the first later line where depth is back at or below the
    baseline. Functions that never open have no body and are dropped.
    """

    # Recognise a boundary while a function is open, finishing the old one.
    restart_on_boundary = False

    def __init__(self, matcher: BoundaryMatcher, counter: Union[BraceCounter, KeywordCounter]):
        super().__init__(matcher)
        self.counter = counter
        self._opened = False

    def start(self, line_no: int, line: str) -> bool:
        boundary = self.matcher(line)
        if boundary is None:
            return False
        self._begin(boundary.name, line_no)
        self._opened = False
        return True

    def consume(self, line_no: int, line: str) -> Optional[FunctionRecord]:
        state = self.state
        record = None

        if self.in_function:
            if self._opened and state.depth <= state.baseline:
                # Body opened and closed on the signature line
                record = self._finish(self._start)
            elif self.restart_on_boundary and self.matcher(line) is not None:
                record = self._supersede(line_no)

        starting = not self.in_function and self.start(line_no, line)

        opens, closes = self.counter.count(line)
        state.depth += opens - closes

        if not self.in_function:
            return record

        if opens or state.depth > state.baseline:
            self._opened = True
        state.observe(state.depth - state.baseline - 1)

        if starting or state.depth > state.baseline:
            return record

        if self._opened:
            return self._finish(line_no)
        if state.depth < state.baseline or self._ends_declaration(line):
            self._discard()
        return record

    def close_at_eof(self, last_line: int) -> Optional[FunctionRecord]:
        if not self.in_function:
            return None
        if not self._opened:
            self._discard()
            return None
        if self.state.depth <= self.state.baseline:
            return self._finish(self._start)
        return self._finish(last_line, closed=False)

    def _supersede(self, line_no: int) -> Optional[FunctionRecord]:
        if not self._opened:
            self._discard()
            return None
        return self._finish(line_no - 1)

    def _ends_declaration(self, line: str) -> bool:
        """Whether ``line`` terminates a signature that has no body."""
        return False


class BraceTracker(BalanceTracker):
    """Brace-balance strategy for C-family languages.

    Boundaries are only recognised outside functions, so nested functions
    and closures count toward the enclosing function.
    """

    def __init__(self, matcher: BoundaryMatcher, counter: BraceCounter):
        super().__init__(matcher, counter)

    def _ends_declaration(self, line: str) -> bool:
        return line.rstrip().endswith(";")


class KeywordTracker(BalanceTracker):
    """do/end keyword-balance strategy.

    Definitions cannot nest, so a boundary inside an open function finishes
    it on the previous line and starts the next one.
    """

    restart_on_boundary = True

    def __init__(self, matcher: BoundaryMatcher, counter: KeywordCounter):
        super().__init__(matcher, counter)


class IndentTracker(BaseTracker):
    """Indentation strategy.

    A function owns every following line indented deeper than its signature.
    Blank lines, comments, signature continuation lines and the insides of
    multi-line strings never close a function. Depth is the indentation
    delta in units of ``indent_width``, which is fixed rather than detected,
    so mixed indentation gives approximate values.
    """

    def __init__(self, matcher: BoundaryMatcher, indent_width: int = 4):
        super().__init__(matcher)
        self.indent_width = indent_width
        self.brackets = BracketCounter()
        self._base_indent = 0
        self._open_brackets = 0
        self._last_line = 0

    def start(self, line_no: int, line: str) -> bool:
        boundary = self.matcher(line)
        if boundary is None:
            return False
        self._begin(boundary.name, line_no)
        self._base_indent = boundary.indent
        self._last_line = line_no
        return True

    def consume(self, line_no: int, line: str) -> Optional[FunctionRecord]:
        in_string = self.brackets.in_multiline_string
        delta = self.brackets.count(line)

        if in_string or self._open_brackets > 0:
            if self.in_function:
                self._last_line = line_no
                self._open_brackets = max(self._open_brackets + delta, 0)
            return None

        stripped = line.strip()
        if not stripped:
            return None

        indent = indentation(line)
        if stripped.startswith("#"):
            if self.in_function and indent > self._base_indent:
                self._last_line = line_no
            return None

        record = None
        if self.in_function:
            if indent > self._base_indent:
                self._last_line = line_no
                self._open_brackets = max(delta, 0)
                self.state.observe((indent - self._base_indent) // self.indent_width - 1)
                return None
            record = self._finish(self._last_line)

        if self.start(line_no, line):
            self._open_brackets = max(delta, 0)
        return record

    def close_at_eof(self, last_line: int) -> Optional[FunctionRecord]:
        if not self.in_function:
            return None
        self._open_brackets = 0
        return self._finish(self._last_line, closed=False)


StructuralTracker = Union[BraceTracker, KeywordTracker, IndentTracker]


def create_tracker(language: LanguageConfig) -> StructuralTracker:
    """Build a fresh tracker for one file of ``language``."""
    if language.strategy == "brace":
        return BraceTracker(language.matcher, BraceCounter(language.brace_syntax))
    if language.strategy == "keyword":
        return KeywordTracker(language.matcher, KeywordCounter())
    return IndentTracker(language.matcher, language.indent_width)


def track_functions(lines: Iterable[str], language: LanguageConfig) -> list[FunctionRecord]:
    """Run the language's tracker over ``lines`` and collect every function."""
    tracker = create_tracker(language)
    records: list[FunctionRecord] = []
    line_no = 0

    for line_no, line in enumerate(lines, start=1):
        record = tracker.consume(line_no, line)
        if record is not None:
            records.append(record)

    record = tracker.close_at_eof(line_no)
    if record is not None:
        records.append(record)
    return records
