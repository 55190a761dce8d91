"""Server handler: dispatches JSON-lines requests to the difficulty engine."""

from __future__ import annotations

import logging
from typing import Optional

from teddytutor.config.settings import Settings
from teddytutor.engine.adaptive import analyze
from teddytutor.engine.difficulty_settings import get_difficulty_settings
from teddytutor.engine.levels import DifficultyLevel
from teddytutor.engine.metrics import PerformanceMetrics
from teddytutor.engine.presentation import build_suggestion, rate_factor, should_present

from .protocol import Request

logger = logging.getLogger(__name__)


def _require(params: dict, key: str):
    if key not in params:
        raise ValueError(f"Missing parameter: {key}")
    return params[key]


def _level_to_dict(level: DifficultyLevel) -> dict:
    return {
        "level": level.value,
        "rank": level.rank,
        "label": level.label,
        "description": level.description,
    }


class ServerHandler:
    """Routes incoming requests to engine functions and returns result dicts."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.load()

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        request = Request.from_dict(msg)

        handler_map = {
            "listLevels": self._list_levels,
            "getSettings": self._get_settings,
            "analyze": self._analyze,
        }

        handler = handler_map.get(request.method)
        if handler is None:
            raise ValueError(f"Unknown method: {request.method}")

        logger.debug("dispatch %s id=%s", request.method, request.id)
        return await handler(request.params)

    async def _list_levels(self, params: dict) -> dict:
        return {"levels": [_level_to_dict(level) for level in DifficultyLevel]}

    async def _get_settings(self, params: dict) -> dict:
        level = DifficultyLevel.parse(_require(params, "level"))
        return {
            "level": level.value,
            "settings": get_difficulty_settings(level).to_dict(),
        }

    async def _analyze(self, params: dict) -> dict:
        level = DifficultyLevel.parse(_require(params, "level"))
        raw_metrics = params.get("metrics") or {}
        if not isinstance(raw_metrics, dict):
            raise ValueError("metrics must be an object")
        metrics = PerformanceMetrics.from_dict(raw_metrics)

        adjustment = analyze(metrics, level, strict=self.settings.strict_metrics)
        threshold = self.settings.presentation.confidence_threshold

        result = adjustment.to_dict()
        result["present"] = should_present(adjustment, threshold)
        result["suggestion"] = build_suggestion(adjustment).to_dict()
        result["factorRatings"] = {
            name: rate_factor(score).value
            for name, score in result["factors"].items()
        }
        return result
