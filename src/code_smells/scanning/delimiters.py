"""Line-level delimiter counting.

Each counter is fed a file's lines in order and keeps just enough lexical
state (open block comment, open multi-line string, open heredoc) to ignore
delimiters that are not structural. None of them parse anything; they
approximate.
"""

import re
from dataclasses import dataclass
from typing import Optional

# 'a', '\n', '\x7f', '\u{1F600}'. A quote not followed by one of these is a lifetime.
_CHAR_LITERAL = re.compile(r"'(?:\\(?:u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|.)|[^\\'])'")

# do/fn open, end closes. do: (keyword form), :do (atom), .end and end? are not keywords.
_BLOCK_KEYWORD = re.compile(r"(?<![\w:.@?!])(do|fn|end)(?![\w?!:])")

_TRIPLE_QUOTES = ('"""', "'''")


@dataclass(frozen=True)
class BraceSyntax:
    """Lexical conventions that affect brace counting.

    Attributes:
        quotes: Characters that open and close a string
        multiline_quotes: Subset of ``quotes`` whose strings may span lines
        char_literals: ``'`` starts a char literal or a lifetime, never a string
    """

    quotes: str = "\"'"
    multiline_quotes: str = ""
    char_literals: bool = False


class BraceCounter:
    """Counts ``{`` and ``}`` outside strings, char literals and comments."""

    def __init__(self, syntax: BraceSyntax):
        self.syntax = syntax
        self._quote: Optional[str] = None
        self._in_block_comment = False

    def count(self, line: str) -> tuple[int, int]:
        """Return ``(opens, closes)`` for one line."""
        opens = 0
        closes = 0
        i = 0
        n = len(line)

        while i < n:
            c = line[i]

            if self._in_block_comment:
                end = line.find("*/", i)
                if end == -1:
                    break
                self._in_block_comment = False
                i = end + 2
                continue

            if self._quote is not None:
                if c == "\\":
                    i += 2
                    continue
                if c == self._quote:
                    self._quote = None
                i += 1
                continue

            if line.startswith("//", i):
                break
            if line.startswith("/*", i):
                self._in_block_comment = True
                i += 2
                continue

            if c == "'" and self.syntax.char_literals:
                match = _CHAR_LITERAL.match(line, i)
                i = match.end() if match else i + 1
                continue

            if c in self.syntax.quotes:
                self._quote = c
            elif c == "{":
                opens += 1
            elif c == "}":
                closes += 1
            i += 1

        if self._quote is not None and self._quote not in self.syntax.multiline_quotes:
            self._quote = None

        return opens, closes


class KeywordCounter:
    """Counts ``do``/``fn`` openers and ``end`` closers in Elixir-like code.

    Strings, charlists, heredocs and ``#`` comments are skipped. Strings and
    heredocs may span lines.
    """

    def __init__(self) -> None:
        self._heredoc: Optional[str] = None
        self._quote: Optional[str] = None

    def count(self, line: str) -> tuple[int, int]:
        """Return ``(opens, closes)`` for one line."""
        opens = 0
        closes = 0
        for match in _BLOCK_KEYWORD.finditer(self._code(line)):
            if match.group(1) == "end":
                closes += 1
            else:
                opens += 1
        return opens, closes

    def _code(self, line: str) -> str:
        """The parts of ``line`` that are code, with skipped spans blanked."""
        out: list[str] = []
        i = 0
        n = len(line)

        while i < n:
            if self._heredoc is not None:
                end = line.find(self._heredoc, i)
                if end == -1:
                    break
                self._heredoc = None
                out.append(" ")
                i = end + 3
                continue

            c = line[i]

            if self._quote is not None:
                if c == "\\":
                    i += 2
                    continue
                if c == self._quote:
                    self._quote = None
                    out.append(" ")
                i += 1
                continue

            triple = line[i : i + 3]
            if triple in _TRIPLE_QUOTES:
                self._heredoc = triple
                out.append(" ")
                i += 3
                continue
            if c == "#":
                break
            if c == "?" and i + 1 < n:
                # ?" and ?# are codepoint literals
                out.append(" ")
                i += 2
                continue
            if c in "\"'":
                self._quote = c
                out.append(" ")
            else:
                out.append(c)
            i += 1

        return "".join(out)


class BracketCounter:
    """Net bracket balance for indentation languages.

    Skips ``#`` comments and string literals; triple-quoted strings may span
    lines and ``in_multiline_string`` reports whether one is open.
    """

    def __init__(self) -> None:
        self._triple: Optional[str] = None

    @property
    def in_multiline_string(self) -> bool:
        return self._triple is not None

    def count(self, line: str) -> int:
        """Return the net ``([{`` minus ``)]}`` delta for one line."""
        delta = 0
        quote: Optional[str] = None
        i = 0
        n = len(line)

        while i < n:
            if self._triple is not None:
                end = line.find(self._triple, i)
                if end == -1:
                    break
                self._triple = None
                i = end + 3
                continue

            c = line[i]

            if quote is not None:
                if c == "\\":
                    i += 2
                    continue
                if c == quote:
                    quote = None
                i += 1
                continue

            triple = line[i : i + 3]
            if triple in _TRIPLE_QUOTES:
                self._triple = triple
                i += 3
                continue
            if c == "#":
                break
            if c in "\"'":
                quote = c
            elif c in "([{":
                delta += 1
            elif c in ")]}":
                delta -= 1
            i += 1

        return delta
