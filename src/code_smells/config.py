"""Configuration loading and management for code-smells.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in ScanSettings and DEFAULT_THRESHOLDS)
    2. Global config (~/.code-smells.toml)
    3. Project config (<project>/code-smells.toml)
    4. Explicit config file (--config)
    5. Environment variables (CODE_SMELLS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_settings(verbose=True, workers=4)
    >>> settings.verbosity
    'verbose'
    >>> settings.thresholds_for("python").function_error
    50
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .models import MetricKind, ThresholdPair

Verbosity = Literal["quiet", "normal", "verbose"]

# Order matters: it is the order languages are reported in.
LANGUAGE_NAMES = ("elixir", "dart", "typescript", "python", "rust")

CONFIG_FILE_NAME = "code-smells.toml"
GLOBAL_CONFIG_FILE_NAME = ".code-smells.toml"
ENV_PREFIX = "CODE_SMELLS_"


@dataclass(frozen=True)
class Thresholds:
    """Warning/error limits for one language.

    A metric breaches a limit when it is strictly greater than it.
    """

    file_warn: int
    file_error: int
    function_warn: int
    function_error: int
    nesting_warn: int
    nesting_error: int

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

    def pair(self, kind: MetricKind) -> ThresholdPair:
        """Select the (warn, error) pair for a metric kind."""
        if kind is MetricKind.FILE_LENGTH:
            return ThresholdPair(self.file_warn, self.file_error)
        if kind is MetricKind.FUNCTION_LENGTH:
            return ThresholdPair(self.function_warn, self.function_error)
        return ThresholdPair(self.nesting_warn, self.nesting_error)

    def with_overrides(self, **overrides: Optional[int]) -> "Thresholds":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


DEFAULT_THRESHOLDS: dict[str, Thresholds] = {
    "elixir": Thresholds(300, 500, 30, 50, 4, 6),
    "dart": Thresholds(400, 600, 40, 70, 4, 6),
    "typescript": Thresholds(250, 400, 50, 80, 4, 6),
    "python": Thresholds(300, 500, 30, 50, 4, 6),
    "rust": Thresholds(400, 600, 40, 60, 4, 6),
}


@dataclass(frozen=True)
class ScanSettings:
    """Settings for one run. Immutable for the duration of the run.

    Attributes:
        File filtering:
            exclude_patterns: Glob patterns (matched against the relative
                path and the file name) that are never scanned
            skip_test_files: Skip files named like tests where the language
                has a test naming convention
            allow_hidden_files: Descend into dot-directories
            max_file_size_mb: Larger files are skipped
            max_files: Stop enumerating after this many files per language

        Performance:
            workers: Scan files on a thread pool of this size (None or 1 =
                sequential)

        Output:
            verbosity: Logging verbosity level

        Thresholds:
            thresholds: Per-language limits, keyed by language name
    """

    exclude_patterns: list[str] = field(default_factory=lambda: ["*.generated.*"])
    skip_test_files: bool = True
    allow_hidden_files: bool = False
    max_file_size_mb: float = 10.0
    max_files: int = 10000

    workers: Optional[int] = None

    verbosity: Verbosity = "normal"

    thresholds: dict[str, Thresholds] = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_files < 1:
            raise ValueError("max_files must be at least 1")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")
        unknown = set(self.thresholds) - set(LANGUAGE_NAMES)
        if unknown:
            raise ValueError(f"thresholds given for unknown languages: {', '.join(sorted(unknown))}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    def thresholds_for(self, language: str) -> Thresholds:
        """Thresholds for a language, falling back to the built-in defaults."""
        if language in self.thresholds:
            return self.thresholds[language]
        return DEFAULT_THRESHOLDS[language]


default_settings = ScanSettings()


def load_settings(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    **overrides: Any,
) -> ScanSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_dir: Directory searched for ``code-smells.toml``
            (default: current directory)
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ScanSettings instance

    Raises:
        ConfigurationError: If a config file is missing or cannot be parsed
        InvalidConfigError: If a value is out of range or unknown
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_FILE_NAME
    if global_config.is_file():
        _merge(merged, _load_toml_file(global_config))

    project_config = (project_dir or Path.cwd()) / CONFIG_FILE_NAME
    if project_config.is_file():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(config_file))

    _merge(merged, _load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    tables = merged.pop("thresholds", None)
    if tables is not None:
        merged["thresholds"] = _build_thresholds(tables)

    unknown = set(merged) - set(ScanSettings.__dataclass_fields__)
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, merged[key], "unknown setting")

    try:
        return ScanSettings(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge ``source`` into ``target``; ``thresholds`` tables merge per field."""
    for key, value in source.items():
        if key == "thresholds" and isinstance(value, dict):
            tables = target.setdefault("thresholds", {})
            for language, table in value.items():
                if isinstance(table, Thresholds):
                    table = asdict(table)
                if not isinstance(table, dict):
                    raise InvalidConfigError(f"thresholds.{language}", table, "expected a table")
                tables.setdefault(language, {}).update(table)
        else:
            target[key] = value


def _build_thresholds(tables: dict[str, dict[str, Any]]) -> dict[str, Thresholds]:
    """Apply ``[thresholds.<language>]`` tables on top of the defaults."""
    result = dict(DEFAULT_THRESHOLDS)
    for language, table in tables.items():
        if language not in DEFAULT_THRESHOLDS:
            raise InvalidConfigError(
                f"thresholds.{language}", language, f"expected one of {', '.join(LANGUAGE_NAMES)}"
            )
        try:
            result[language] = replace(DEFAULT_THRESHOLDS[language], **table)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError(f"thresholds.{language}", table, str(e))
    return result


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODE_SMELLS_* environment variables.

    Supported environment variables:
        CODE_SMELLS_SKIP_TEST_FILES: bool (true/false/1/0)
        CODE_SMELLS_ALLOW_HIDDEN_FILES: bool
        CODE_SMELLS_MAX_FILE_SIZE_MB: float
        CODE_SMELLS_MAX_FILES: int
        CODE_SMELLS_WORKERS: int
        CODE_SMELLS_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any CODE_SMELLS_* vars found.
    """
    type_hints = get_type_hints(ScanSettings)

    result: dict[str, Any] = {}

    for field_name in ScanSettings.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from the dataclass

    Returns:
        Parsed value or None if the type is not settable from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Lists and per-language tables are too complex for env vars
    if origin in (list, dict) or type_hint in (list, dict):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
