"""Project language detection from marker files."""

from dataclasses import dataclass
from pathlib import Path

from .exceptions import UnsupportedLanguageError
from .logging_config import get_logger
from .scanning import LANGUAGES

logger = get_logger(__name__)

# Source directory scanned when a language is named explicitly.
DEFAULT_SOURCE_DIRS = {
    "elixir": "lib",
    "dart": "lib",
    "typescript": "src",
    "python": ".",
    "rust": "src",
}

_TYPESCRIPT_PROBE_DIRS = ("src", "lib", ".")


@dataclass(frozen=True)
class DetectedLanguage:
    """A language to check and the directory (relative to the project) to scan."""

    language: str
    source_dir: str


def _src_or_root(project_dir: Path) -> str:
    return "src" if (project_dir / "src").is_dir() else "."


def _has_typescript_files(project_dir: Path) -> bool:
    """A package.json project counts as TypeScript if a .ts/.tsx file sits in a common spot."""
    if not (project_dir / "package.json").exists():
        return False
    for name in _TYPESCRIPT_PROBE_DIRS:
        directory = project_dir / name
        if not directory.is_dir():
            continue
        try:
            if any(p.suffix in (".ts", ".tsx") for p in directory.iterdir()):
                return True
        except OSError as e:
            logger.debug(f"Cannot list {directory}: {e}")
    return False


def detect_languages(project_dir: Path) -> list[DetectedLanguage]:
    """Detect languages from marker files in ``project_dir``.

    Results follow the fixed order elixir, dart, typescript, python, rust.
    """
    project_dir = Path(project_dir)
    detected: list[DetectedLanguage] = []

    if (project_dir / "mix.exs").exists():
        detected.append(DetectedLanguage("elixir", "lib"))

    if (project_dir / "pubspec.yaml").exists():
        detected.append(DetectedLanguage("dart", "lib"))

    if (project_dir / "tsconfig.json").exists() or _has_typescript_files(project_dir):
        detected.append(DetectedLanguage("typescript", _src_or_root(project_dir)))

    if any((project_dir / marker).exists() for marker in ("setup.py", "pyproject.toml", "requirements.txt")):
        detected.append(DetectedLanguage("python", _src_or_root(project_dir)))

    if (project_dir / "Cargo.toml").exists():
        detected.append(DetectedLanguage("rust", "src"))

    logger.debug(f"Detected languages: {[d.language for d in detected]}")
    return detected


def parse_language_list(value: str) -> list[DetectedLanguage]:
    """Parse a comma-separated list such as ``"python,rust"``.

    Names are case-insensitive; blanks and repeats are ignored.

    Raises:
        UnsupportedLanguageError: If a name is not a supported language
    """
    detected: list[DetectedLanguage] = []
    seen: set[str] = set()
    for raw in value.split(","):
        name = raw.strip().lower()
        if not name or name in seen:
            continue
        if name not in LANGUAGES:
            raise UnsupportedLanguageError(raw.strip(), list(LANGUAGES))
        seen.add(name)
        detected.append(DetectedLanguage(name, DEFAULT_SOURCE_DIRS[name]))
    return detected
