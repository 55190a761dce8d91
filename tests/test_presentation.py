"""Tests for the presentation gate and suggestion view."""

from dataclasses import replace

import pytest

from conftest import make_metrics
from teddytutor.engine.adaptive import AdjustmentType, analyze
from teddytutor.engine.levels import DifficultyLevel
from teddytutor.engine.presentation import (
    AdjustmentIcon,
    FactorRating,
    Tone,
    build_suggestion,
    rate_factor,
    should_present,
)


class TestShouldPresent:
    def test_confident_increase_is_presented(self, outstanding_metrics):
        adj = analyze(outstanding_metrics, DifficultyLevel.MEDIUM)
        assert should_present(adj)

    def test_maintain_never_presented(self, balanced_metrics):
        adj = analyze(balanced_metrics, DifficultyLevel.MEDIUM)
        assert adj.confidence == 75
        assert not should_present(adj)
        assert not should_present(adj, threshold=0)

    def test_below_threshold_not_presented(self, struggling_metrics):
        # easy -> veryEasy with confidence 70
        adj = analyze(struggling_metrics, DifficultyLevel.EASY)
        assert adj.adjustment_type is AdjustmentType.DECREASE
        assert not should_present(adj)

    def test_threshold_is_inclusive(self, struggling_metrics):
        adj = replace(analyze(struggling_metrics, DifficultyLevel.EASY), raw_confidence=80.0)
        assert should_present(adj)
        assert not should_present(adj, threshold=81)

    def test_confidence_just_below_threshold_not_presented(self):
        # overall 20.2 at easy: rule 4 fires with 100 - 20.2 = 79.8, displayed as 80
        metrics = make_metrics(
            response_accuracy=10,
            completion_rate=10,
            engagement_level=16,
            vocabulary_retention=10,
        )
        adj = analyze(metrics, DifficultyLevel.EASY)
        assert adj.adjustment_type is AdjustmentType.DECREASE
        assert adj.raw_confidence == pytest.approx(79.8)
        assert adj.confidence == 80
        assert not should_present(adj)


class TestBuildSuggestion:
    def test_increase_view(self, outstanding_metrics):
        view = build_suggestion(analyze(outstanding_metrics, DifficultyLevel.MEDIUM))
        assert view.title == "Ready for More Challenge!"
        assert view.accept_label == "Make Harder"
        assert view.decline_label == "Keep Current"
        assert view.icon is AdjustmentIcon.TRENDING_UP
        assert view.tone is Tone.SUCCESS
        assert view.confidence_percent == 98
        assert view.suggested_level_label == "VERY HARD"

    def test_decrease_view(self, struggling_metrics):
        view = build_suggestion(analyze(struggling_metrics, DifficultyLevel.HARD))
        assert view.title == "Let's Make This Easier"
        assert view.accept_label == "Make Easier"
        assert view.icon is AdjustmentIcon.TRENDING_DOWN
        assert view.tone is Tone.WARNING

    def test_maintain_view(self, balanced_metrics):
        view = build_suggestion(analyze(balanced_metrics, DifficultyLevel.MEDIUM))
        assert view.title == "Perfect Difficulty Level"
        assert view.accept_label == "Continue"
        assert view.icon is AdjustmentIcon.TARGET
        assert view.tone is Tone.PRIMARY

    def test_to_dict(self, outstanding_metrics):
        d = build_suggestion(analyze(outstanding_metrics, DifficultyLevel.MEDIUM)).to_dict()
        assert d["icon"] == "trending_up"
        assert d["tone"] == "success"
        assert d["confidencePercent"] == 98


@pytest.mark.parametrize(
    "score, rating",
    [(100, FactorRating.STRONG), (80, FactorRating.STRONG), (79.9, FactorRating.FAIR),
     (60, FactorRating.FAIR), (59, FactorRating.WEAK), (0, FactorRating.WEAK)],
)
def test_rate_factor(score, rating):
    assert rate_factor(score) is rating
