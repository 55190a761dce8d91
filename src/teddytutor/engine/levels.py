"""The five-rung difficulty scale and its rank arithmetic."""

from __future__ import annotations

from enum import Enum


class UnknownLevelError(ValueError):
    """Raised when a value does not name one of the five difficulty levels."""

    def __init__(self, value: object):
        self.value = value
        valid = ", ".join(level.value for level in DifficultyLevel)
        super().__init__(f"Unknown difficulty level: {value!r} (expected one of: {valid})")


class DifficultyLevel(str, Enum):
    VERY_EASY = "veryEasy"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "veryHard"

    @classmethod
    def parse(cls, value: str) -> "DifficultyLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownLevelError(value) from None

    @classmethod
    def from_rank(cls, rank: int) -> "DifficultyLevel":
        """Level at ``rank``, clamped into the scale."""
        ordered = list(cls)
        return ordered[max(0, min(rank, len(ordered) - 1))]

    @property
    def rank(self) -> int:
        return list(DifficultyLevel).index(self)

    def shift(self, steps: int) -> "DifficultyLevel":
        return DifficultyLevel.from_rank(self.rank + steps)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


LEVEL_COUNT = len(DifficultyLevel)

_LABELS = {
    DifficultyLevel.VERY_EASY: "VERY EASY",
    DifficultyLevel.EASY: "EASY",
    DifficultyLevel.MEDIUM: "MEDIUM",
    DifficultyLevel.HARD: "HARD",
    DifficultyLevel.VERY_HARD: "VERY HARD",
}

_DESCRIPTIONS = {
    DifficultyLevel.VERY_EASY: "Perfect for beginners! Extra time to respond and lots of repetition.",
    DifficultyLevel.EASY: "Great for building confidence with clear explanations.",
    DifficultyLevel.MEDIUM: "Standard pace with moderate challenge.",
    DifficultyLevel.HARD: "More challenging with faster responses needed.",
    DifficultyLevel.VERY_HARD: "Advanced level with minimal repetition.",
}
