"""Language configurations: the single source of truth for per-language behavior.

Adding a new language:
  1. Write a boundary matcher in boundaries.py.
  2. Add a LanguageConfig entry to LANGUAGES below and default thresholds
     to config.DEFAULT_THRESHOLDS.
"""

from dataclasses import dataclass, field
from typing import Literal

from ..exceptions import UnsupportedLanguageError
from .boundaries import (
    BoundaryMatcher,
    match_dart,
    match_elixir,
    match_python,
    match_rust,
    match_typescript,
)
from .delimiters import BraceSyntax

Strategy = Literal["brace", "keyword", "indent"]


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the scanner needs to know about a language."""

    name: str
    display_name: str
    extensions: tuple[str, ...]

    # "brace" (count {}), "keyword" (count do/end), or "indent" (indentation)
    strategy: Strategy
    matcher: BoundaryMatcher

    # Brace strategy only: how strings, chars and comments look.
    brace_syntax: BraceSyntax = field(default_factory=BraceSyntax)

    # Indent strategy only: columns per nesting level.
    indent_width: int = 4

    # Skip rules. Directory names match whole path components.
    skip_dirs: tuple[str, ...] = (".git",)
    skip_file_suffixes: tuple[str, ...] = ()
    skip_file_names: tuple[str, ...] = ()
    # Glob patterns for test files, honoured when skip_test_files is on.
    test_file_patterns: tuple[str, ...] = ()


LANGUAGES: dict[str, LanguageConfig] = {
    "elixir": LanguageConfig(
        name="elixir",
        display_name="Elixir",
        extensions=(".ex", ".exs"),
        strategy="keyword",
        matcher=match_elixir,
        skip_dirs=("deps", "_build", ".git"),
    ),
    "dart": LanguageConfig(
        name="dart",
        display_name="Dart",
        extensions=(".dart",),
        strategy="brace",
        matcher=match_dart,
        brace_syntax=BraceSyntax(quotes="\"'"),
        skip_dirs=(".dart_tool", "build", ".git"),
        skip_file_suffixes=(".g.dart", ".freezed.dart", ".gen.dart"),
        skip_file_names=("firebase_options.dart",),
    ),
    "typescript": LanguageConfig(
        name="typescript",
        display_name="TypeScript",
        extensions=(".ts", ".tsx"),
        strategy="brace",
        matcher=match_typescript,
        brace_syntax=BraceSyntax(quotes="\"'`", multiline_quotes="`"),
        skip_dirs=("node_modules", "dist", "build", ".git"),
        skip_file_suffixes=(".d.ts",),
    ),
    "python": LanguageConfig(
        name="python",
        display_name="Python",
        extensions=(".py",),
        strategy="indent",
        matcher=match_python,
        indent_width=4,
        skip_dirs=("__pycache__", ".venv", "venv", "env", ".git", "site-packages"),
        test_file_patterns=("test_*.py", "*_test.py"),
    ),
    "rust": LanguageConfig(
        name="rust",
        display_name="Rust",
        extensions=(".rs",),
        strategy="brace",
        matcher=match_rust,
        brace_syntax=BraceSyntax(quotes='"', multiline_quotes='"', char_literals=True),
        skip_dirs=("target", ".git"),
    ),
}


def get_language_config(name: str) -> LanguageConfig:
    """Look up a language by name (case-insensitive).

    Raises:
        UnsupportedLanguageError: If the language is not supported
    """
    config = LANGUAGES.get(name.strip().lower())
    if config is None:
        raise UnsupportedLanguageError(name, list(LANGUAGES))
    return config
