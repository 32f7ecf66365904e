"""Threshold classification of a single measured value.

The same rule applies to every metric kind; only the (warn, error) pair
differs. Limits are exclusive: a value equal to a limit does not breach it.
"""

from typing import Optional

from ..logging_config import get_logger
from ..models import MetricKind, Severity, ThresholdPair

logger = get_logger(__name__)


def classify(value: int, limits: ThresholdPair) -> Optional[Severity]:
    """Return the severity ``value`` earns against ``limits``, if any."""
    if value > limits.error:
        return Severity.ERROR
    if value > limits.warn:
        return Severity.WARNING
    return None


def evaluate(kind: MetricKind, value: int, warn: int, error: int) -> Optional[Severity]:
    """Classify an observed ``value`` of metric ``kind``."""
    severity = classify(value, ThresholdPair(warn, error))
    if severity is not None:
        logger.debug(f"{kind.value} {value} breaches {severity.value} limit (warn={warn}, error={error})")
    return severity


def breached_limit(severity: Severity, limits: ThresholdPair) -> int:
    """The limit an issue of ``severity`` reports: error limit for errors."""
    return limits.error if severity is Severity.ERROR else limits.warn
