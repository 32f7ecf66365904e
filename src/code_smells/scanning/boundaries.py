"""Function boundary matchers.

A matcher looks at a single line and decides whether it opens a function
or method definition. Recognition is pattern-based and conservative: lines
that look like a signature but have no block body (declarations, one-line
arrow or keyword forms, getters) are rejected.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .models import ANONYMOUS


@dataclass(frozen=True)
class Boundary:
    """A matched function start."""

    name: str
    indent: int


BoundaryMatcher = Callable[[str], Optional[Boundary]]


def extract_name(rest: str, extra_chars: str = "") -> str:
    """Truncate ``rest`` at the first character that cannot be in an identifier.

    ``rest`` is the text after the introducing keyword and its modifiers.
    Returns ``ANONYMOUS`` when nothing identifier-like remains.
    """
    rest = rest.lstrip()
    end = 0
    while end < len(rest) and (rest[end].isalnum() or rest[end] == "_" or rest[end] in extra_chars):
        end += 1
    name = rest[:end]
    if not name or name[0].isdigit():
        return ANONYMOUS
    return name


def indentation(line: str) -> int:
    """Leading whitespace width. Tabs count as one column."""
    return len(line) - len(line.lstrip())


def _code(line: str, comment: str) -> str:
    """Line without its trailing comment, right-stripped."""
    idx = line.find(comment)
    if idx != -1:
        line = line[:idx]
    return line.rstrip()


def _is_bodiless(code: str) -> bool:
    return code.endswith(";") and "{" not in code


# ── Rust ───────────────────────────────────────────────────────────

_RUST_FN = re.compile(
    r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:default\s+)?(?:const\s+)?(?:async\s+)?"
    r"(?:unsafe\s+)?(?:extern\s+(?:\"[^\"]*\"\s+)?)?fn\s+"
)


def match_rust(line: str) -> Optional[Boundary]:
    match = _RUST_FN.match(line)
    if match is None:
        return None
    if _is_bodiless(_code(line, "//")):
        return None
    return Boundary(extract_name(line[match.end():]), indentation(line))


# ── TypeScript ─────────────────────────────────────────────────────

_TS_DECLARATION = re.compile(r"^\s*(?:export\s+)?(?:declare|type|interface)\s")
_TS_FUNCTION = re.compile(r"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\b\s*\*?")
_TS_FUNCTION_EXPRESSION = re.compile(
    r"^\s*(?:export\s+)?(?:const|let|var)\s+"
    r"(?=[A-Za-z_$][\w$]*\s*(?::[^=]*)?=\s*(?:async\s+)?function\b)"
)
_TS_ARROW = re.compile(r"^\s*(?:export\s+)?(?:const|let|var)\s+(?=[A-Za-z_$][\w$]*\s*[=:].*=>)")


def match_typescript(line: str) -> Optional[Boundary]:
    if _TS_DECLARATION.match(line):
        return None
    code = _code(line, "//")
    if _is_bodiless(code):
        return None
    if "=>" in code and "{" not in code:
        return None

    for pattern in (_TS_FUNCTION, _TS_FUNCTION_EXPRESSION, _TS_ARROW):
        match = pattern.match(line)
        if match is not None:
            return Boundary(extract_name(line[match.end():], "$"), indentation(line))
    return None


# ── Dart ───────────────────────────────────────────────────────────

_DART_METHOD = re.compile(
    r"^\s*(?:@\w+\s+)?(?:(?:static|external)\s+)*"
    r"(?:void|bool|int|double|num|String|Future|Stream|Iterable|Widget|State|List|Map|Set"
    r"|Object|dynamic|[A-Z][\w<>,?\s]*?)"
    r"(?:<[^()]*>)?\??\s+(?=[a-z_][\w$]*\s*(?:<[^()]*>)?\s*\()"
)
_DART_ACCESSOR = re.compile(r"\s(?:get|set)\s")
_DART_CONTROL = frozenset({"if", "for", "while", "switch", "catch", "return", "assert"})


def match_dart(line: str) -> Optional[Boundary]:
    match = _DART_METHOD.match(line)
    if match is None:
        return None
    code = _code(line, "//")
    if "=>" in code and "{" not in code:
        return None
    if code.endswith(";"):
        return None
    if _DART_ACCESSOR.search(line):
        return None
    name = extract_name(line[match.end():], "$")
    if name in _DART_CONTROL:
        return None
    return Boundary(name, indentation(line))


# ── Elixir ─────────────────────────────────────────────────────────

_ELIXIR_DEF = re.compile(r"^\s*(?:def|defp|defmacro|defmacrop)\s+")
_ELIXIR_INLINE_BODY = re.compile(r",\s*do:")


def match_elixir(line: str) -> Optional[Boundary]:
    match = _ELIXIR_DEF.match(line)
    if match is None:
        return None
    if _ELIXIR_INLINE_BODY.search(line):
        return None
    return Boundary(extract_name(line[match.end():], "?!"), indentation(line))


# ── Python ─────────────────────────────────────────────────────────

_PYTHON_DEF = re.compile(r"^\s*(?:async\s+)?def\s+(?=[A-Za-z_]\w*\s*\()")


def match_python(line: str) -> Optional[Boundary]:
    match = _PYTHON_DEF.match(line)
    if match is None:
        return None
    return Boundary(extract_name(line[match.end():]), indentation(line))
