"""recallkit CLI: developer tooling around the grading engine."""

import asyncio
import json
import logging
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from recallkit.application.config import resolve_config
from recallkit.application.drill.steps import (
    auto_speech_for_step,
    build_steps,
    expected_for_step,
    is_match_for_step,
    step_key,
)
from recallkit.application.scheduling.legacy import create_state, grade_performance
from recallkit.application.stream.reader import read_event_stream
from recallkit.application.utils.text import compare as compare_text
from recallkit.application.utils.text import length_tolerance
from recallkit.domain.drill.models import Step, StepType
from recallkit.infrastructure.lesson_loader import load_lesson

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="recallkit: review-grading engine for language drills.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

drill_app = typer.Typer(help="Inspect and score corrective drill lessons.", no_args_is_help=True)
app.add_typer(drill_app, name="drill")

config_app = typer.Typer(help="Manage recallkit configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for recallkit."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose >= 2:
        logging.getLogger("recallkit").setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger("recallkit").setLevel(logging.INFO)


def _fail(message: str) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def compare(
    expected: Annotated[str, typer.Argument(help="Reference answer.")],
    actual: Annotated[str, typer.Argument(help="Learner answer.")],
    tolerance: Annotated[
        int, typer.Option("--tolerance", "-t", min=0, help="Allowed edit distance.")
    ] = 0,
    auto: Annotated[
        bool, typer.Option("--auto", help="Scale the tolerance with answer length.")
    ] = False,
):
    """[bold]Compare[/bold] two answers. Exits 1 when they do not match."""
    if auto:
        tolerance = length_tolerance(expected, actual)
    matched = compare_text(expected, actual, tolerance)
    typer.echo(f"{'match' if matched else 'no match'} (tolerance={tolerance})")
    if not matched:
        raise typer.Exit(1)


@app.command()
def schedule(
    grade: Annotated[int, typer.Argument(min=0, max=4, help="Performance grade (0-4).")],
    repetitions: Annotated[int, typer.Option(min=0)] = 0,
    interval: Annotated[int, typer.Option(min=1, help="Current interval in days.")] = 1,
    ease: Annotated[float, typer.Option(help="Current ease factor.")] = 2.5,
    lapses: Annotated[int, typer.Option(min=0)] = 0,
):
    """Apply a legacy grade to a memory state and print the result as JSON."""
    state = create_state(repetitions=repetitions, interval=interval, ease=ease, lapses=lapses)
    result = grade_performance(state, grade)
    typer.echo(
        json.dumps(
            {
                "repetitions": result.repetitions,
                "interval": result.interval,
                "ease": round(result.ease, 4),
                "lapses": result.lapses,
                "next_review_at": result.next_review_at.isoformat(),
            },
            indent=2,
        )
    )


@app.command()
def stream(
    path: Annotated[Path, typer.Argument(help="Captured event stream to replay.")],
    read_size: Annotated[
        int | None, typer.Option(min=1, help="Bytes per read. Defaults to config.")
    ] = None,
):
    """Replay a captured event stream file through the reader."""
    try:
        config = resolve_config({"stream_read_size": read_size})
    except ValidationError as e:
        _fail(f"Invalid configuration:\n{e}")

    async def chunks() -> AsyncIterator[bytes]:
        with path.open("rb") as fh:
            while block := fh.read(config.stream_read_size):
                yield block

    def on_chunk(payload: str) -> None:
        typer.echo(payload)

    def on_done() -> None:
        typer.secho("[done]", fg="green")

    try:
        asyncio.run(read_event_stream(chunks(), on_chunk, on_done))
    except OSError as e:
        _fail(f"Could not read {path}: {e}")


# ---------------------------------------------------------------------------
# Drill subgroup
# ---------------------------------------------------------------------------


def _load(lesson_path: Path):
    try:
        return load_lesson(lesson_path)
    except ValidationError as e:
        _fail(f"Invalid lesson {lesson_path}: {e.error_count()} error(s)\n{e}")
    except (OSError, ValueError) as e:
        _fail(f"Could not load lesson {lesson_path}: {e}")


@drill_app.command("steps")
def drill_steps(lesson_path: Annotated[Path, typer.Argument(help="Lesson JSON/YAML file.")]):
    """List a lesson's steps with their expected answers and auto-played speech."""
    lesson = _load(lesson_path)
    rows = []
    for step in build_steps(lesson):
        speech = auto_speech_for_step(lesson, step)
        rows.append(
            {
                "key": step_key(step),
                "type": step.type.value,
                "expected": expected_for_step(lesson, step),
                "speech": {"tl": speech.tl, "en": speech.en} if speech else None,
            }
        )
    typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))


@drill_app.command("check")
def drill_check(
    lesson_path: Annotated[Path, typer.Argument(help="Lesson JSON/YAML file.")],
    step_type: Annotated[StepType, typer.Argument(help="Step to score.")],
    transcription: Annotated[str, typer.Argument(help="Learner answer.")],
    match: Annotated[
        bool | None,
        typer.Option("--match/--no-match", help="Verdict from the transcription service."),
    ] = None,
):
    """Score one answer against a lesson step. Exits 1 when it does not pass."""
    lesson = _load(lesson_path)
    step = Step(step_type)
    if step not in build_steps(lesson):
        _fail(f"Lesson has no {step_type.value} step")

    try:
        config = resolve_config()
    except ValidationError as e:
        _fail(f"Invalid configuration:\n{e}")
    expected = expected_for_step(lesson, step)
    passed = is_match_for_step(
        step,
        expected,
        transcription,
        is_match=match,
        target_tolerance=config.target_step_tolerance,
    )
    typer.echo(f"{'pass' if passed else 'fail'}: expected {expected!r}, heard {transcription!r}")
    if not passed:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    try:
        config = resolve_config()
    except ValidationError as e:
        _fail(f"Invalid configuration:\n{e}")
    typer.echo(json.dumps(config.model_dump(), indent=2))
