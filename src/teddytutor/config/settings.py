"""Configuration model for TeddyTutor."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from teddytutor.engine.presentation import DEFAULT_CONFIDENCE_THRESHOLD


def default_data_dir() -> Path:
    return Path(os.environ.get("TEDDYTUTOR_DATA_DIR") or Path.home() / ".teddytutor")


class MetricsPolicy(str, Enum):
    CLAMP = "clamp"
    STRICT = "strict"


class PresentationConfig(BaseModel):
    confidence_threshold: int = Field(default=DEFAULT_CONFIDENCE_THRESHOLD, ge=0, le=100)


class Settings(BaseModel):
    metrics_policy: MetricsPolicy = MetricsPolicy.CLAMP
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)
    log_level: str = "WARNING"
    data_dir: Path = Field(default_factory=default_data_dir)

    @property
    def strict_metrics(self) -> bool:
        return self.metrics_policy is MetricsPolicy.STRICT

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or default_data_dir() / "config.yaml"
        data: dict = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

        if os.environ.get("TEDDYTUTOR_METRICS_POLICY"):
            data["metrics_policy"] = os.environ["TEDDYTUTOR_METRICS_POLICY"]
        if os.environ.get("TEDDYTUTOR_LOG_LEVEL"):
            data["log_level"] = os.environ["TEDDYTUTOR_LOG_LEVEL"]
        return cls(**data)

    def save(self) -> Path:
        """Write to data_dir/config.yaml.

        load() reads the same file when data_dir is the default location
        (TEDDYTUTOR_DATA_DIR, or ~/.teddytutor); otherwise pass the returned
        path to load().
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
        return config_path
