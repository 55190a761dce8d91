"""Per-level session configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from teddytutor.engine.levels import DifficultyLevel


class EncouragementFrequency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class DifficultySettings:
    response_time_limit_seconds: int
    repetition_count: int
    hints_available: bool
    vocabulary_per_session: int
    confidence_threshold: int
    encouragement_frequency: EncouragementFrequency

    def to_dict(self) -> dict:
        return {
            "responseTimeLimitSeconds": self.response_time_limit_seconds,
            "repetitionCount": self.repetition_count,
            "hintsAvailable": self.hints_available,
            "vocabularyPerSession": self.vocabulary_per_session,
            "confidenceThreshold": self.confidence_threshold,
            "encouragementFrequency": self.encouragement_frequency.value,
        }


DIFFICULTY_SETTINGS: dict[DifficultyLevel, DifficultySettings] = {
    DifficultyLevel.VERY_EASY: DifficultySettings(10, 3, True, 3, 30, EncouragementFrequency.HIGH),
    DifficultyLevel.EASY: DifficultySettings(8, 2, True, 5, 40, EncouragementFrequency.MEDIUM),
    DifficultyLevel.MEDIUM: DifficultySettings(6, 1, True, 7, 50, EncouragementFrequency.MEDIUM),
    DifficultyLevel.HARD: DifficultySettings(5, 1, False, 10, 60, EncouragementFrequency.LOW),
    DifficultyLevel.VERY_HARD: DifficultySettings(4, 0, False, 12, 70, EncouragementFrequency.LOW),
}

assert set(DIFFICULTY_SETTINGS) == set(DifficultyLevel), "every level needs a settings row"


def get_difficulty_settings(level: DifficultyLevel | str) -> DifficultySettings:
    return DIFFICULTY_SETTINGS[DifficultyLevel.parse(level)]
