"""When and how an adjustment is surfaced to the learner.

The analyzer always produces a recommendation; this module decides whether
it is worth interrupting the session for, and what the prompt looks like.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from teddytutor.engine.adaptive import AdjustmentType, DifficultyAdjustment

DEFAULT_CONFIDENCE_THRESHOLD = 80
DECLINE_LABEL = "Keep Current"


class AdjustmentIcon(str, Enum):
    """Icon identifiers; the UI layer resolves them to artwork."""
    TRENDING_UP = "trending_up"
    TRENDING_DOWN = "trending_down"
    TARGET = "target"


class Tone(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    PRIMARY = "primary"


class FactorRating(str, Enum):
    STRONG = "strong"
    FAIR = "fair"
    WEAK = "weak"


@dataclass(frozen=True)
class SuggestionView:
    title: str
    reason: str
    confidence_percent: int
    accept_label: str
    decline_label: str
    icon: AdjustmentIcon
    tone: Tone
    suggested_level_label: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "reason": self.reason,
            "confidencePercent": self.confidence_percent,
            "acceptLabel": self.accept_label,
            "declineLabel": self.decline_label,
            "icon": self.icon.value,
            "tone": self.tone.value,
            "suggestedLevelLabel": self.suggested_level_label,
        }


_VIEW_PARTS = {
    AdjustmentType.INCREASE: ("Ready for More Challenge!", "Make Harder", AdjustmentIcon.TRENDING_UP, Tone.SUCCESS),
    AdjustmentType.DECREASE: ("Let's Make This Easier", "Make Easier", AdjustmentIcon.TRENDING_DOWN, Tone.WARNING),
    AdjustmentType.MAINTAIN: ("Perfect Difficulty Level", "Continue", AdjustmentIcon.TARGET, Tone.PRIMARY),
}


def should_present(
    adjustment: DifficultyAdjustment,
    threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
) -> bool:
    """Only confident, non-trivial recommendations interrupt the learner."""
    return (
        adjustment.adjustment_type is not AdjustmentType.MAINTAIN
        and adjustment.raw_confidence >= threshold
    )


def build_suggestion(adjustment: DifficultyAdjustment) -> SuggestionView:
    title, accept, icon, tone = _VIEW_PARTS[adjustment.adjustment_type]
    return SuggestionView(
        title=title,
        reason=adjustment.reason,
        confidence_percent=adjustment.confidence,
        accept_label=accept,
        decline_label=DECLINE_LABEL,
        icon=icon,
        tone=tone,
        suggested_level_label=adjustment.suggested_level.label,
    )


def rate_factor(score: float) -> FactorRating:
    if score >= 80:
        return FactorRating.STRONG
    if score >= 60:
        return FactorRating.FAIR
    return FactorRating.WEAK
