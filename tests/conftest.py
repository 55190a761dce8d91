"""Shared fixtures for TeddyTutor tests."""

from __future__ import annotations

import pytest

from teddytutor.config.settings import Settings
from teddytutor.engine.metrics import PerformanceMetrics


def make_metrics(**overrides) -> PerformanceMetrics:
    """Balanced mid-range metrics with a perfectly paced response time."""
    values = {
        "response_accuracy": 70,
        "average_response_time_seconds": 4.0,
        "completion_rate": 70,
        "engagement_level": 70,
        "vocabulary_retention": 70,
    }
    values.update(overrides)
    return PerformanceMetrics(**values)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep Settings.load() away from the developer's real config."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("TEDDYTUTOR_METRICS_POLICY", raising=False)
    monkeypatch.delenv("TEDDYTUTOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TEDDYTUTOR_DATA_DIR", raising=False)
    return tmp_path / "home"


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def balanced_metrics():
    return make_metrics()


@pytest.fixture
def outstanding_metrics():
    return make_metrics(
        response_accuracy=96,
        completion_rate=100,
        engagement_level=92,
        vocabulary_retention=98,
    )


@pytest.fixture
def struggling_metrics():
    return make_metrics(
        response_accuracy=25,
        completion_rate=20,
        engagement_level=30,
        vocabulary_retention=20,
    )
