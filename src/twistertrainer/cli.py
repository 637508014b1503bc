"""CLI entry point for TwisterTrainer."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import click
import yaml

from twistertrainer.config.settings import Settings
from twistertrainer.engine.drills import Mode


def _load_analyzed(settings: Settings):
    from twistertrainer.engine.analyzer import analyze_corpus
    from twistertrainer.engine.corpus import DatasetUnavailable, load_corpus
    from twistertrainer.engine.tables import load_tables

    tables = load_tables(settings.tables_path)
    try:
        items = load_corpus(settings.dataset_path)
    except DatasetUnavailable as e:
        raise click.ClickException(f"Error loading tongue twisters: {e}") from e
    return analyze_corpus(items, tables), tables


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Log engine decisions to stderr")
@click.option(
    "--dataset",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the JSON file with tongue twisters",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, dataset: Optional[Path]) -> None:
    """TwisterTrainer: diction practice with tongue twisters."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.load()
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    if dataset is not None:
        settings.dataset_path = dataset
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(train)


@main.command()
@click.option("--count", type=int, default=None, help="How many tongue twisters to train on")
@click.option("--difficulty", default=None, help="easy, medium, hard, expert or all")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode], case_sensitive=False),
    default=None,
    help="Training mode",
)
@click.option("--time", "seconds", type=int, default=None, help="Seconds per tongue twister in timed mode")
@click.option("--reps", "repetitions", type=int, default=None, help="Repetitions in repeat mode")
@click.option("--focus", default=None, help="Perfection focus: name or index 0-4")
@click.option("--level", type=int, default=None, help="Perfection level 1-5")
@click.option("--mix/--no-mix", default=None, help="Blend difficulty bands when difficulty is 'all'")
@click.option("--seed", type=int, default=None, help="Seed for reproducible selection")
@click.pass_context
def train(
    ctx: click.Context,
    count: Optional[int] = None,
    difficulty: Optional[str] = None,
    mode: Optional[str] = None,
    seconds: Optional[int] = None,
    repetitions: Optional[int] = None,
    focus: Optional[str] = None,
    level: Optional[int] = None,
    mix: Optional[bool] = None,
    seed: Optional[int] = None,
) -> None:
    """Run a training session (default command)."""
    from twistertrainer.app.console import ConsoleTrainer
    from twistertrainer.engine.analyzer import TextAnalyzer
    from twistertrainer.engine.difficulty import Band
    from twistertrainer.engine.drills import build_drill
    from twistertrainer.engine.selector import EmptyPool, select_corpus
    from twistertrainer.engine.session import PerfectionSession

    overrides = {
        "count": count,
        "difficulty": difficulty,
        "mode": mode,
        "seconds_per_item": seconds,
        "repetitions": repetitions,
        "focus": focus,
        "level": level,
        "mix": mix,
        "seed": seed,
    }
    base: Settings = ctx.obj["settings"]
    try:
        settings = Settings(**{
            **base.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    rng = random.Random(settings.seed)
    console = ConsoleTrainer()

    analyzed, tables = _load_analyzed(settings)
    console.show_overview(analyzed)

    band = Band.from_choice(settings.difficulty)
    try:
        training = select_corpus(analyzed, band, settings.count, balanced=settings.mix, rng=rng)
    except EmptyPool as e:
        raise click.ClickException(str(e)) from e
    if settings.mix and band is None:
        console.echo("Selected tongue twisters of mixed difficulty for training")

    if settings.mode == Mode.PERFECTION:
        session = PerfectionSession(
            training, settings.focus, settings.level, rng=rng, analyzer=TextAnalyzer(tables)
        )
        console.run_perfection(session)
    else:
        steps = build_drill(
            settings.mode, training, settings.repetitions, settings.seconds_per_item
        )
        console.run_drill(settings.mode, steps)


@main.command()
@click.option("--top", type=int, default=0, help="Also list the N hardest tongue twisters")
@click.pass_context
def stats(ctx: click.Context, top: int) -> None:
    """Show how the corpus splits across difficulty bands."""
    from twistertrainer.app.console import ConsoleTrainer

    analyzed, _ = _load_analyzed(ctx.obj["settings"])
    ConsoleTrainer().show_overview(analyzed)
    if analyzed:
        mean = sum(a.score for a in analyzed) / len(analyzed)
        click.echo(f"Average score: {mean:.1f}")
    for entry in reversed(analyzed[-top:] if top > 0 else []):
        click.echo(f"  [{entry.score:.1f}] #{entry.item.number}: {entry.text}")


@main.command()
@click.argument("text")
@click.pass_context
def analyze(ctx: click.Context, text: str) -> None:
    """Score a single TEXT."""
    from twistertrainer.engine.analyzer import TextAnalyzer
    from twistertrainer.engine.corpus import TextItem
    from twistertrainer.engine.tables import load_tables

    analyzer = TextAnalyzer(load_tables(ctx.obj["settings"].tables_path))
    result = analyzer.analyze(TextItem(number="", date="", text=text))
    for name, value in asdict(result.stats).items():
        if isinstance(value, float):
            value = f"{value:.2f}"
        click.echo(f"  {name}: {value}")
    click.echo(f"Score: {result.score:.2f} ({result.band.label})")


@main.command()
@click.option("--save", is_flag=True, help="Write the effective settings to the config file")
@click.pass_context
def config(ctx: click.Context, save: bool) -> None:
    """Print the effective settings."""
    settings: Settings = ctx.obj["settings"]
    click.echo(yaml.dump(settings.model_dump(mode="json"), default_flow_style=False, allow_unicode=True))
    if save:
        settings.save()
        click.echo(f"Saved to {settings.data_dir / 'config.yaml'}")
