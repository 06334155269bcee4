"""CLI entry point for countdown.

Uses Click to expose the ``countdown`` command group.  ``run`` drives a
:class:`~countdown.core.driver.TimerDriver` in the foreground and echoes the
remaining time whenever the rendered value changes.
"""

from __future__ import annotations

import math
import re
import sys

import click

import countdown
from countdown.core.driver import DEFAULT_INTERVAL, TimerDriver, TimerSnapshot
from countdown.core.timer import TimerState, format_hms
from countdown.log import configure_logging

_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0}
_UNIT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)([hms])")

EXIT_INTERRUPTED = 130


class DurationType(click.ParamType):
    """Parse ``90``, ``2.5``, ``MM:SS``, ``HH:MM:SS`` or ``1h30m``-style durations."""

    name = "duration"

    def convert(self, value, param, ctx) -> float:
        if isinstance(value, (int, float)):
            seconds = float(value)
        else:
            text = str(value).strip().lower()
            seconds = self._parse(text)
            if seconds is None:
                self.fail(f"{value!r} is not a valid duration", param, ctx)
        if not math.isfinite(seconds) or seconds < 0:
            self.fail(f"{value!r} is not a finite, non-negative duration", param, ctx)
        return seconds

    @staticmethod
    def _parse(text: str) -> float | None:
        if ":" in text:
            parts = text.split(":")
            if len(parts) > 3 or not all(p.isdigit() for p in parts):
                return None
            seconds = 0.0
            for part in parts:
                seconds = seconds * 60 + int(part)
            return seconds
        try:
            return float(text)
        except ValueError:
            pass
        if not text or _UNIT_PATTERN.sub("", text):
            return None
        return sum(float(n) * _UNIT_SECONDS[unit] for n, unit in _UNIT_PATTERN.findall(text))


DURATION = DurationType()


@click.group(context_settings={"auto_envvar_prefix": "COUNTDOWN"})
@click.version_option(version=countdown.__version__, prog_name="countdown")
@click.option("-v", "--verbose", is_flag=True, help="Log timer transitions to stderr.")
def cli(verbose: bool) -> None:
    """countdown: a monotonic countdown timer."""
    configure_logging(verbose)


@cli.command()
@click.argument("duration", type=DURATION)
@click.option(
    "--interval",
    type=click.FloatRange(min=0.001),
    default=DEFAULT_INTERVAL,
    show_default=True,
    help="Seconds between timer updates.",
)
@click.option("-q", "--quiet", is_flag=True, help="Only report completion.")
def run(duration: float, interval: float, quiet: bool) -> None:
    """Count down DURATION and exit when it finishes."""
    driver = TimerDriver(interval=interval)

    def render(snapshot: TimerSnapshot) -> None:
        if snapshot.state == TimerState.RUNNING:
            click.echo(snapshot.display)

    if not quiet:
        driver.subscribe(render)

    driver.set_preset_time(duration)
    driver.start()
    if driver.snapshot().state == TimerState.IDLE:
        # Zero-length countdowns never start.
        click.echo("Nothing to count down", err=True)
        return

    try:
        with driver:
            driver.wait_finished()
    except KeyboardInterrupt:
        driver.pause()
        click.echo(f"Stopped at {driver.snapshot().display}", err=True)
        sys.exit(EXIT_INTERRUPTED)
    click.echo("Finished")


@cli.command("format")
@click.argument("seconds", type=DURATION)
def format_command(seconds: float) -> None:
    """Print SECONDS as HH:MM:SS."""
    click.echo(format_hms(seconds))
