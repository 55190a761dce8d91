"""CLI entry point for TeddyTutor."""

import json
import logging
import sys

import click

from teddytutor.config.settings import Settings
from teddytutor.engine.levels import DifficultyLevel

LEVEL_CHOICE = click.Choice([level.value for level in DifficultyLevel])


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """TeddyTutor: adaptive difficulty for young language learners."""
    ctx.ensure_object(dict)
    settings = Settings.load()
    logging.basicConfig(stream=sys.stderr, level=settings.log_level.upper())
    ctx.obj["settings"] = settings


@main.command()
def levels() -> None:
    """List the difficulty scale from easiest to hardest."""
    for level in DifficultyLevel:
        click.echo(f"  {level.rank}: {level.value:<9} {level.label:<10} {level.description}")


@main.command("settings")
@click.argument("level", type=LEVEL_CHOICE, required=False)
def show_settings(level) -> None:
    """Show session settings for one level, or for all of them."""
    from teddytutor.engine.difficulty_settings import get_difficulty_settings

    selected = [DifficultyLevel(level)] if level else list(DifficultyLevel)
    for lvl in selected:
        s = get_difficulty_settings(lvl)
        click.echo(
            f"  {lvl.value}: time limit {s.response_time_limit_seconds}s, "
            f"repetitions {s.repetition_count}, "
            f"hints {'on' if s.hints_available else 'off'}, "
            f"vocabulary {s.vocabulary_per_session}, "
            f"confidence threshold {s.confidence_threshold}, "
            f"encouragement {s.encouragement_frequency.value}"
        )


@main.command()
@click.option("--level", "level", type=LEVEL_CHOICE, required=True, help="Learner's current level")
@click.option("--accuracy", type=float, required=True, help="Response accuracy, 0-100")
@click.option("--response-time", type=float, required=True, help="Average response time in seconds")
@click.option("--completion", type=float, required=True, help="Completion rate, 0-100")
@click.option("--engagement", type=float, required=True, help="Engagement level, 0-100")
@click.option("--retention", type=float, required=True, help="Vocabulary retention, 0-100")
@click.option("--consecutive-correct", type=int, default=0)
@click.option("--consecutive-incorrect", type=int, default=0)
@click.option("--session-progress", type=float, default=0.0)
@click.option("--strict", is_flag=True, help="Reject out-of-range metrics instead of clamping")
@click.option("--json", "as_json", is_flag=True, help="Emit the adjustment as JSON")
@click.pass_context
def analyze(
    ctx: click.Context,
    level: str,
    accuracy: float,
    response_time: float,
    completion: float,
    engagement: float,
    retention: float,
    consecutive_correct: int,
    consecutive_incorrect: int,
    session_progress: float,
    strict: bool,
    as_json: bool,
) -> None:
    """Suggest a difficulty adjustment from one set of session metrics."""
    from teddytutor.engine import adaptive
    from teddytutor.engine.metrics import InvalidMetricError, PerformanceMetrics
    from teddytutor.engine.presentation import build_suggestion, should_present

    settings: Settings = ctx.obj["settings"]
    metrics = PerformanceMetrics(
        response_accuracy=accuracy,
        average_response_time_seconds=response_time,
        completion_rate=completion,
        engagement_level=engagement,
        vocabulary_retention=retention,
        consecutive_correct=consecutive_correct,
        consecutive_incorrect=consecutive_incorrect,
        session_progress=session_progress,
    )
    try:
        adjustment = adaptive.analyze(
            metrics, DifficultyLevel(level), strict=strict or settings.strict_metrics
        )
    except InvalidMetricError as e:
        raise click.BadParameter(str(e), param_hint=e.field) from e

    present = should_present(adjustment, settings.presentation.confidence_threshold)
    if as_json:
        data = adjustment.to_dict()
        data["present"] = present
        click.echo(json.dumps(data, indent=2))
        return

    view = build_suggestion(adjustment)
    click.echo(f"{view.title} ({adjustment.adjustment_type.value})")
    click.echo(f"  {adjustment.reason}")
    click.echo(
        f"  {adjustment.current_level.value} -> {adjustment.suggested_level.value}"
        f"  confidence {view.confidence_percent}%"
    )
    f = adjustment.factors
    click.echo(
        f"  accuracy {f.accuracy:.0f}  speed {f.speed:.0f}  "
        f"engagement {f.engagement:.0f}  retention {f.retention:.0f}"
    )
    if not present:
        click.echo("  (not surfaced to the learner)")


@main.command()
@click.option("--write", is_flag=True, help="Write the effective config to the data directory")
@click.pass_context
def config(ctx: click.Context, write: bool) -> None:
    """Show the effective configuration."""
    settings: Settings = ctx.obj["settings"]
    click.echo(f"  metrics policy: {settings.metrics_policy.value}")
    click.echo(f"  confidence threshold: {settings.presentation.confidence_threshold}")
    click.echo(f"  log level: {settings.log_level}")
    if write:
        path = settings.save()
        click.echo(f"Wrote {path}")
