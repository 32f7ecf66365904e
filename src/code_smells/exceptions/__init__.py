"""Exception hierarchy for code-smells."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    UnsupportedLanguageError,
)
from .base import CodeSmellsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "CodeSmellsError",
    "AnalysisError",
    "FileAccessError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
