"""
FlowForge Pomodoro Command

This module implements 'flowforge pomodoro', a terminal Pomodoro timer that
drives the in-memory timer once per second.
"""

import time
from typing import Callable, Optional

import click
from pydantic import ValidationError

from ..pomodoro import PomodoroMode, PomodoroSettings, PomodoroState, PomodoroTimer
from .common import get_workspace


@click.command()
@click.option('--work', 'work_minutes', type=int, help='Work segment length in minutes')
@click.option('--short-break', 'short_break_minutes', type=int, help='Short break length in minutes')
@click.option('--long-break', 'long_break_minutes', type=int, help='Long break length in minutes')
@click.option('--cycles', 'cycles_per_long_break', type=int, help='Work cycles before a long break')
@click.option('--auto', is_flag=True, help='Start the next segment without asking')
@click.option('--segments', type=int, default=0, help='Stop after this many segments (0 = run until Ctrl+C)')
def pomodoro(
    work_minutes: Optional[int],
    short_break_minutes: Optional[int],
    long_break_minutes: Optional[int],
    cycles_per_long_break: Optional[int],
    auto: bool,
    segments: int
) -> None:
    """
    Run a Pomodoro timer in the terminal.
    
    Durations default to the values in your configuration. Press Ctrl+C to stop.
    """
    config = get_workspace().config
    try:
        settings = PomodoroSettings(
            work_minutes=_pick(work_minutes, config.work_minutes),
            short_break_minutes=_pick(short_break_minutes, config.short_break_minutes),
            long_break_minutes=_pick(long_break_minutes, config.long_break_minutes),
            cycles_per_long_break=_pick(cycles_per_long_break, config.cycles_per_long_break),
        )
    except ValidationError:
        click.secho("❌ Invalid settings: durations and cycles must be positive numbers.", fg="red")
        raise SystemExit(1)
    
    timer = PomodoroTimer(settings, on_transition=announce_transition(settings))
    click.echo(
        f"🍅 Pomodoro: {settings.work_minutes} min work, {settings.short_break_minutes} min short break, "
        f"{settings.long_break_minutes} min long break every {settings.cycles_per_long_break} cycles"
    )
    run_session(timer, auto=auto, segments=segments)


def announce_transition(settings: PomodoroSettings) -> Callable[[PomodoroMode, PomodoroMode, PomodoroState], None]:
    """Build the transition callback that prints what comes next."""
    def announce(previous: PomodoroMode, new: PomodoroMode, state: PomodoroState) -> None:
        click.echo()
        if new == PomodoroMode.LONG_BREAK:
            click.secho(f"🎉 Time for a Long Break! Enjoy your {settings.long_break_minutes} minutes.", fg="green")
        elif new == PomodoroMode.SHORT_BREAK:
            click.secho(f"☕ Time for a Short Break! Take {settings.short_break_minutes} minutes.", fg="green")
        else:
            click.secho(f"💪 Back to Work! Focus for {settings.work_minutes} minutes.", fg="cyan")
        click.echo(f"Completed cycles: {state.completed_cycles}")
    return announce


def run_session(
    timer: PomodoroTimer,
    auto: bool = False,
    segments: int = 0,
    sleep: Optional[Callable[[float], None]] = None
) -> int:
    """
    Drive the timer until interrupted or ``segments`` segments have finished.
    
    Args:
        timer: Timer to drive
        auto: Start each next segment without confirmation
        segments: Number of segments to run, 0 for no limit
        sleep: Called with 1 between ticks, defaults to time.sleep
        
    Returns:
        Number of finished segments
    """
    sleep = sleep or time.sleep
    finished = 0
    timer.start()
    try:
        while True:
            click.echo(f"\r{timer.mode.display_name}: {timer.format_time()} ", nl=False)
            sleep(1)
            timer.tick()
            if timer.running:
                continue
            
            finished += 1
            if segments and finished >= segments:
                break
            if not auto and not click.confirm(f"Start {timer.mode.display_name.lower()}?", default=True):
                break
            timer.start()
    except KeyboardInterrupt:
        timer.pause()
        click.echo()
    
    click.echo(f"⏹️  Stopped in {timer.mode.display_name} at {timer.format_time()}")
    return finished


def _pick(option: Optional[int], configured: int) -> int:
    return configured if option is None else option
