"""Adaptive difficulty engine.

Maps a learner's performance snapshot and current level to a suggested
level change. Every function here is pure: no I/O, no shared state, so it
can be called from anywhere without coordination.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from enum import Enum

from teddytutor.engine.levels import LEVEL_COUNT, DifficultyLevel
from teddytutor.engine.metrics import PerformanceMetrics, clamp_metrics, validate_metrics

logger = logging.getLogger(__name__)

OPTIMAL_RESPONSE_TIME = 4.0  # seconds
SPEED_PENALTY_PER_SECOND = 20

ACCURACY_WEIGHT = 0.35
RETENTION_WEIGHT = 0.35
ENGAGEMENT_WEIGHT = 0.20
SPEED_WEIGHT = 0.10

REASON_BIG_INCREASE = "Outstanding mastery! Jumping to higher difficulty."
REASON_INCREASE = "Excellent performance! Ready for more challenge."
REASON_BIG_DECREASE = "Taking a step back to ensure solid foundation."
REASON_DECREASE = "Let's make this easier to build confidence."
REASON_MAINTAIN = "Current difficulty level is perfect!"


class AdjustmentType(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class FactorScores:
    accuracy: float
    speed: float
    engagement: float
    retention: float


@dataclass(frozen=True)
class DifficultyAdjustment:
    current_level: DifficultyLevel
    suggested_level: DifficultyLevel
    reason: str
    confidence: int  # 0-100
    adjustment_type: AdjustmentType
    factors: FactorScores
    raw_confidence: float  # unrounded; the presentation gate compares this

    def to_dict(self) -> dict:
        return {
            "currentLevel": self.current_level.value,
            "suggestedLevel": self.suggested_level.value,
            "reason": self.reason,
            "confidence": self.confidence,
            "adjustmentType": self.adjustment_type.value,
            "factors": asdict(self.factors),
        }


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_factors(metrics: PerformanceMetrics) -> FactorScores:
    """Normalize the raw metrics into four 0-100 factor scores."""
    # Pace has a sweet spot: very fast suggests guessing, very slow suggests struggle.
    time_diff = abs(metrics.average_response_time_seconds - OPTIMAL_RESPONSE_TIME)
    speed = max(0.0, 100 - time_diff * SPEED_PENALTY_PER_SECOND)

    return FactorScores(
        accuracy=metrics.response_accuracy,
        speed=speed,
        engagement=metrics.engagement_level,
        retention=(metrics.completion_rate + metrics.vocabulary_retention) / 2,
    )


def overall_score(factors: FactorScores) -> float:
    return (
        factors.accuracy * ACCURACY_WEIGHT
        + factors.retention * RETENTION_WEIGHT
        + factors.engagement * ENGAGEMENT_WEIGHT
        + factors.speed * SPEED_WEIGHT
    )


def decide_adjustment(
    overall: float,
    factors: FactorScores,
    current_level: DifficultyLevel,
) -> tuple[DifficultyLevel, str, float, AdjustmentType]:
    """Apply the ordered rules; the first one whose guard holds wins.

    Big moves are checked before single steps. A rule whose rank guard
    fails falls through, so a learner at either end of the scale
    saturates into "maintain".
    """
    rank = current_level.rank

    if (
        overall >= 95
        and factors.accuracy >= 95
        and factors.engagement >= 90
        and rank <= LEVEL_COUNT - 3
    ):
        return current_level.shift(2), REASON_BIG_INCREASE, 98, AdjustmentType.INCREASE

    if overall >= 85 and factors.accuracy >= 90 and rank <= LEVEL_COUNT - 2:
        return current_level.shift(1), REASON_INCREASE, min(95, overall), AdjustmentType.INCREASE

    if (overall <= 40 or factors.accuracy <= 30) and rank >= 2:
        return current_level.shift(-2), REASON_BIG_DECREASE, 95, AdjustmentType.DECREASE

    if (overall <= 60 or factors.accuracy <= 50) and rank >= 1:
        return current_level.shift(-1), REASON_DECREASE, max(70, 100 - overall), AdjustmentType.DECREASE

    return current_level, REASON_MAINTAIN, 75, AdjustmentType.MAINTAIN


def analyze(
    metrics: PerformanceMetrics,
    current_level: DifficultyLevel,
    *,
    strict: bool = False,
) -> DifficultyAdjustment:
    """Suggest a difficulty adjustment for the next session.

    With ``strict`` set, out-of-range metrics raise ``InvalidMetricError``;
    otherwise they are clamped into range first.
    """
    current_level = DifficultyLevel.parse(current_level)
    metrics = validate_metrics(metrics) if strict else clamp_metrics(metrics)

    factors = score_factors(metrics)
    overall = overall_score(factors)
    level, reason, confidence, kind = decide_adjustment(overall, factors, current_level)

    logger.debug(
        "analyze level=%s factors=%s overall=%.2f -> %s %s",
        current_level.value, factors, overall, kind.value, level.value,
    )
    return DifficultyAdjustment(
        current_level=current_level,
        suggested_level=level,
        reason=reason,
        confidence=round_half_up(confidence),
        adjustment_type=kind,
        factors=factors,
        raw_confidence=float(confidence),
    )
