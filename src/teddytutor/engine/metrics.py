"""Performance metrics snapshot, its validation boundary, and a session tally.

The analyzer trusts its input. Everything that might be out of range is
either rejected (``validate_metrics``) or pulled into range
(``clamp_metrics``) here, before scoring.
"""

from __future__ import annotations

import logging
import math
from dataclasses import MISSING, dataclass, fields, replace
from typing import Optional

logger = logging.getLogger(__name__)

PERCENT_FIELDS = (
    "response_accuracy",
    "completion_rate",
    "engagement_level",
    "session_progress",
    "vocabulary_retention",
)
COUNT_FIELDS = ("consecutive_correct", "consecutive_incorrect")
TIME_FIELD = "average_response_time_seconds"

# snake_case attribute -> camelCase wire key
_WIRE_KEYS = {
    "response_accuracy": "responseAccuracy",
    "average_response_time_seconds": "averageResponseTimeSeconds",
    "completion_rate": "completionRate",
    "engagement_level": "engagementLevel",
    "consecutive_correct": "consecutiveCorrect",
    "consecutive_incorrect": "consecutiveIncorrect",
    "session_progress": "sessionProgress",
    "vocabulary_retention": "vocabularyRetention",
}
_LEGACY_WIRE_KEYS = {"averageResponseTime": "average_response_time_seconds"}


class InvalidMetricError(ValueError):
    """A metric lies outside its documented domain."""

    def __init__(self, field: str, value: object, domain: str):
        self.field = field
        self.value = value
        self.domain = domain
        super().__init__(f"Invalid metric {field}={value!r}: expected {domain}")


@dataclass(frozen=True)
class PerformanceMetrics:
    """One learner's rolling performance over the evaluated window.

    ``consecutive_correct``, ``consecutive_incorrect`` and ``session_progress``
    are carried for signature stability; the scoring formula does not read them.
    """
    response_accuracy: float  # 0-100
    average_response_time_seconds: float  # >= 0
    completion_rate: float  # 0-100
    engagement_level: float  # 0-100
    vocabulary_retention: float  # 0-100
    consecutive_correct: int = 0
    consecutive_incorrect: int = 0
    session_progress: float = 0.0  # 0-100

    @classmethod
    def from_dict(cls, data: dict) -> PerformanceMetrics:
        """Build from a camelCase mapping, as sent by the host UI."""
        values = {}
        for key, raw in data.items():
            attr = _LEGACY_WIRE_KEYS.get(key)
            if attr is None:
                attr = next((a for a, k in _WIRE_KEYS.items() if k == key), None)
            if attr is not None:
                values[attr] = raw

        for f in fields(cls):
            if f.name not in values and f.default is MISSING:
                raise InvalidMetricError(_WIRE_KEYS[f.name], None, "a value (field is required)")
        for name, raw in values.items():
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise InvalidMetricError(_WIRE_KEYS[name], raw, "a number")
        return cls(**values)

    def to_dict(self) -> dict:
        return {_WIRE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


def _check_finite(metrics: PerformanceMetrics) -> None:
    for f in fields(metrics):
        value = getattr(metrics, f.name)
        if not math.isfinite(value):
            raise InvalidMetricError(f.name, value, "a finite number")


def validate_metrics(metrics: PerformanceMetrics) -> PerformanceMetrics:
    """Fail fast on the first field outside its domain."""
    _check_finite(metrics)
    for name in PERCENT_FIELDS:
        value = getattr(metrics, name)
        if not 0 <= value <= 100:
            raise InvalidMetricError(name, value, "a percentage in [0, 100]")
    if metrics.average_response_time_seconds < 0:
        raise InvalidMetricError(TIME_FIELD, metrics.average_response_time_seconds, "a non-negative time")
    for name in COUNT_FIELDS:
        value = getattr(metrics, name)
        if value < 0 or int(value) != value:
            raise InvalidMetricError(name, value, "a non-negative integer")
    return metrics


def clamp_metrics(metrics: PerformanceMetrics) -> PerformanceMetrics:
    """Pull every field into its domain. Non-finite values are still rejected."""
    _check_finite(metrics)
    changes = {}
    for name in PERCENT_FIELDS:
        value = getattr(metrics, name)
        clamped = max(0.0, min(100.0, value))
        if clamped != value:
            changes[name] = clamped
    if metrics.average_response_time_seconds < 0:
        changes[TIME_FIELD] = 0.0
    for name in COUNT_FIELDS:
        value = getattr(metrics, name)
        if value < 0 or int(value) != value:
            changes[name] = max(0, int(value))

    for name, value in changes.items():
        logger.warning("Clamped %s from %r to %r", name, getattr(metrics, name), value)
    return replace(metrics, **changes) if changes else metrics


class SessionTally:
    """Counts one session's responses and turns them into a metrics snapshot."""

    def __init__(self, planned_items: int = 0):
        self.planned_items = planned_items
        self.answered = 0
        self.correct = 0
        self.skipped = 0
        self.total_response_time = 0.0
        self.consecutive_correct = 0
        self.consecutive_incorrect = 0
        self.recall_checks = 0
        self.recalled = 0

    @property
    def accuracy(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.correct / self.answered * 100

    @property
    def average_response_time(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.total_response_time / self.answered

    def record_response(self, correct: bool, response_time_seconds: float) -> None:
        if response_time_seconds < 0:
            raise InvalidMetricError(TIME_FIELD, response_time_seconds, "a non-negative time")
        self.answered += 1
        self.total_response_time += response_time_seconds
        if correct:
            self.correct += 1
            self.consecutive_correct += 1
            self.consecutive_incorrect = 0
        else:
            self.consecutive_incorrect += 1
            self.consecutive_correct = 0

    def record_skip(self) -> None:
        self.skipped += 1
        self.consecutive_correct = 0

    def record_recall(self, recalled: bool) -> None:
        self.recall_checks += 1
        if recalled:
            self.recalled += 1

    def to_metrics(
        self,
        engagement_level: float,
        vocabulary_retention: Optional[float] = None,
    ) -> PerformanceMetrics:
        """Snapshot the tally.

        Retention comes from the recorded recall checks unless the caller
        supplies its own figure (e.g. from a spaced-review history).
        """
        seen = self.answered + self.skipped
        completion = self.answered / seen * 100 if seen else 0.0
        if self.planned_items:
            progress = min(100.0, seen / self.planned_items * 100)
        else:
            progress = 100.0 if seen else 0.0
        if vocabulary_retention is None:
            vocabulary_retention = self.recalled / self.recall_checks * 100 if self.recall_checks else 0.0

        return PerformanceMetrics(
            response_accuracy=self.accuracy,
            average_response_time_seconds=self.average_response_time,
            completion_rate=completion,
            engagement_level=engagement_level,
            vocabulary_retention=vocabulary_retention,
            consecutive_correct=self.consecutive_correct,
            consecutive_incorrect=self.consecutive_incorrect,
            session_progress=progress,
        )
