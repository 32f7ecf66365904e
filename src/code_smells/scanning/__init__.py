"""Language-aware file scanning."""

from .boundaries import Boundary, BoundaryMatcher, extract_name
from .languages import LANGUAGES, LanguageConfig, get_language_config
from .models import ANONYMOUS, DepthState, FileScanResult, FunctionRecord, SourceFile
from .scanner import FileScanner, read_source
from .trackers import (
    BraceTracker,
    IndentTracker,
    KeywordTracker,
    StructuralTracker,
    create_tracker,
    track_functions,
)

__all__ = [
    "ANONYMOUS",
    "Boundary",
    "BoundaryMatcher",
    "BraceTracker",
    "DepthState",
    "FileScanResult",
    "FileScanner",
    "FunctionRecord",
    "IndentTracker",
    "KeywordTracker",
    "LANGUAGES",
    "LanguageConfig",
    "SourceFile",
    "StructuralTracker",
    "create_tracker",
    "extract_name",
    "get_language_config",
    "read_source",
    "track_functions",
]
