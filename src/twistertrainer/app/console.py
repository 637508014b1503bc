"""Console presentation and input for training sessions."""

from __future__ import annotations

import queue
import threading
import time
from typing import Optional, Sequence, TextIO

import click

from twistertrainer.engine.analyzer import AnalyzedItem
from twistertrainer.engine.difficulty import Band
from twistertrainer.engine.drills import DrillStep, Mode
from twistertrainer.engine.session import (
    MAX_RATING,
    MIN_RATING,
    PerfectionSession,
    Round,
    RoundOutcome,
    SessionSummary,
)

RULE = "-" * 60

MODE_TITLES = {
    Mode.STANDARD: "standard training",
    Mode.TIMED: "timed training",
    Mode.REPEAT: "training with repetitions",
    Mode.CHALLENGE: "challenge training",
    Mode.PERFECTION: "perfect diction training",
}


class EnterListener:
    """One background reader that turns stdin lines into Enter presses.

    Timed readings and their prompts both wait on the same queue, so a
    countdown that runs out leaves no reader behind to eat the next Enter.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else click.get_text_stream("stdin")
        self._lines: queue.Queue[Optional[str]] = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def _read(self) -> None:
        for line in iter(self._stream.readline, ""):
            self._lines.put(line)
        self._lines.put(None)

    def start(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._read, daemon=True)
            self._thread.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until Enter is pressed; False when ``timeout`` passes first.

        At end of input an untimed wait aborts, a timed one just lets the
        time pass.
        """
        self.start()
        try:
            line = self._lines.get(timeout=timeout)
        except queue.Empty:
            return False
        if line is None:
            self._lines.put(None)
            if timeout is None:
                raise click.Abort()
            time.sleep(timeout)
            return False
        return True


class ConsoleTrainer:
    """Drives drills and perfection sessions on the terminal."""

    def __init__(self, listener: Optional[EnterListener] = None):
        self._listener = listener

    def echo(self, message: str = "", **kwargs) -> None:
        click.echo(message, **kwargs)

    def wait_for_enter(self, message: str) -> None:
        if self._listener is not None:
            self.echo(message, nl=False)
            self._listener.wait()
            return
        click.prompt(message, default="", show_default=False, prompt_suffix="")

    # --- Corpus ---

    def show_overview(self, items: Sequence[AnalyzedItem]) -> None:
        self.echo(f"Loaded {len(items)} tongue twisters:")
        for band in Band:
            count = sum(1 for item in items if item.band == band)
            self.echo(f"  {band.label}: {count}")
        self.echo()

    def present_item(self, item: AnalyzedItem, index: int, total: int) -> None:
        stats = item.stats
        self.echo(f"Tongue twister {index} of {total}:")
        self.echo(f"Difficulty: {item.band.label} ({item.score:.1f})")
        self.echo(
            f"Statistics: {stats.word_count} words, {stats.char_count} letters "
            f"({stats.vowel_count} vowels, {stats.consonant_count} consonants)"
        )
        self.echo()
        self.echo(click.style(item.text, bold=True))
        self.echo()

    # --- Fixed routines ---

    def run_drill(self, mode: Mode, steps: Sequence[DrillStep]) -> None:
        self.echo(f"=== Starting {MODE_TITLES[mode]} ===")
        self.echo(f"{len(steps)} tongue twisters selected for practice.\n")
        if mode == Mode.TIMED and self._listener is None:
            self._listener = EnterListener()

        for step in steps:
            self.present_item(step.item, step.index, step.total)
            if mode == Mode.TIMED:
                self._timed_reading(step.seconds)
            elif step.readings:
                self.wait_for_enter("Press Enter when you are ready to begin...")
                for reading in step.readings:
                    self.wait_for_enter(f"{reading}. Press Enter after reading...")
                if mode == Mode.CHALLENGE:
                    self.echo("You met the challenge!")
                else:
                    self.echo("You have repeated this tongue twister successfully!")
            else:
                self.wait_for_enter("Press Enter to go to the next tongue twister...")
            self.echo(RULE)

        self.echo("=== Training complete ===")

    def _timed_reading(self, seconds: int) -> None:
        self.wait_for_enter(
            f"Practice time: {seconds} seconds. Press Enter when you are ready to start..."
        )
        self.echo("Time started! Repeat the tongue twister...")

        for remaining in range(seconds, 0, -1):
            if self._listener.wait(1):
                self.echo("Finished early!")
                break
            if remaining - 1 <= 5 and remaining > 1:
                self.echo(f"\r{remaining - 1} seconds left...   ", nl=False)
        self.echo("\nTime is up!")

    # --- Perfection session ---

    def prompt_rating(self, rnd: Round) -> int:
        self.present_round(rnd)
        self.wait_for_enter("\nPress Enter when you are ready to read the tongue twister...")
        return click.prompt(
            f"Rate your pronunciation from {MIN_RATING} to {MAX_RATING}",
            type=click.IntRange(MIN_RATING, MAX_RATING, clamp=True),
        )

    def present_round(self, rnd: Round) -> None:
        self.echo(f"=== Round {rnd.number} of {rnd.total} (difficulty {rnd.target:.1f}) ===")
        self.echo(f"Tongue twister: {rnd.band.label} ({rnd.score:.1f})")
        for name, value in rnd.display_fields.items():
            self.echo(f"{name}: {value}")
        self.echo()
        self.echo(click.style(rnd.item.text, bold=True))
        self.echo()
        if rnd.advice:
            self.echo("Round focus:")
            for line in rnd.advice:
                self.echo(line)

    def present_feedback(self, outcome: RoundOutcome) -> None:
        self.echo()
        for line in outcome.feedback:
            self.echo(line)
        self.echo(RULE)

    def present_summary(self, summary: SessionSummary) -> None:
        self.echo("=== Training results ===")
        self.echo(f"Your average score: {summary.average:.1f} of 5.0")
        self.echo(f"\nRecommendation: {summary.recommendation}")
        self.echo("\nDetailed analysis:")
        if summary.weakest_category:
            self.echo(f"- Pay special attention to the '{summary.weakest_category}' group")
        if summary.practice:
            self.echo(f"- {summary.practice}")
        self.echo(f"\nYour current level: {summary.standing.capitalize()}")
        if summary.next_focus == summary.focus:
            self.echo(f"Keep practicing the {summary.focus.value} focus before moving on.")
        else:
            self.echo(f"Next step: try the {summary.next_focus.value} focus.")
        for line in summary.next_steps:
            self.echo(f"- {line}")
        if summary.extra_tip:
            self.echo(f"\nExtra tip: {summary.extra_tip}")

    def run_perfection(self, session: PerfectionSession) -> SessionSummary:
        focus = session.focus
        self.echo("=== Starting perfect diction training ===")
        self.echo(f"Focus: {focus.value} - {focus.description}")
        self.echo(f"Demand level: {session.level} of 5\n")
        if session.strategy.tips:
            self.echo("Recommendations:")
            for tip in session.strategy.tips:
                self.echo(f"- {tip}")
            self.echo()
        self.echo(f"The session has {session.rounds} rounds of adaptive difficulty.\n")

        for outcome in session.play(self.prompt_rating):
            self.present_feedback(outcome)

        summary = session.summary()
        self.present_summary(summary)
        return summary
