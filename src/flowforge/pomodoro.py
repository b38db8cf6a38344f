"""
FlowForge Pomodoro Timer

In-memory Pomodoro state machine cycling work -> short break -> ... -> long
break -> work. Nothing here is persisted; the caller drives it by calling
``tick()`` once per second from a single thread.
"""

import logging
from enum import Enum
from typing import Callable, Optional
from pydantic import BaseModel, ConfigDict, Field

from .models.settings import DefaultSettings

# Set up module logger
logger = logging.getLogger(__name__)


class PomodoroMode(str, Enum):
    """Timer segments."""
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"
    
    @property
    def display_name(self) -> str:
        return {
            PomodoroMode.WORK: "Work",
            PomodoroMode.SHORT_BREAK: "Short Break",
            PomodoroMode.LONG_BREAK: "Long Break",
        }[self]


class PomodoroSettings(BaseModel):
    """Durations in minutes and the long-break threshold. All must be positive."""
    work_minutes: int = Field(default=DefaultSettings.WORK_MINUTES, gt=0)
    short_break_minutes: int = Field(default=DefaultSettings.SHORT_BREAK_MINUTES, gt=0)
    long_break_minutes: int = Field(default=DefaultSettings.LONG_BREAK_MINUTES, gt=0)
    cycles_per_long_break: int = Field(default=DefaultSettings.CYCLES_PER_LONG_BREAK, gt=0)
    
    model_config = ConfigDict(frozen=True)
    
    def duration_seconds(self, mode: PomodoroMode) -> int:
        """Full length of a segment in seconds."""
        minutes = {
            PomodoroMode.WORK: self.work_minutes,
            PomodoroMode.SHORT_BREAK: self.short_break_minutes,
            PomodoroMode.LONG_BREAK: self.long_break_minutes,
        }[mode]
        return minutes * 60


class PomodoroState(BaseModel):
    """Snapshot of the timer."""
    mode: PomodoroMode = PomodoroMode.WORK
    remaining_seconds: int = Field(ge=0)
    running: bool = False
    completed_cycles: int = Field(default=0, ge=0)


TransitionCallback = Callable[[PomodoroMode, PomodoroMode, PomodoroState], None]


class PomodoroTimer:
    """
    Pomodoro countdown state machine.
    
    Transitions when a segment reaches zero:
    - work: completed cycles + 1, then long break every
      ``cycles_per_long_break`` cycles, short break otherwise
    - short break: back to work
    - long break: back to work, completed cycles reset to 0
    
    The timer stops after each transition; ``start()`` or ``toggle()``
    begins the next segment.
    """
    
    def __init__(
        self,
        settings: Optional[PomodoroSettings] = None,
        on_transition: Optional[TransitionCallback] = None
    ) -> None:
        """
        Initialize the timer in work mode at full duration.
        
        Args:
            settings: Durations, defaults to PomodoroSettings()
            on_transition: Called with (previous_mode, new_mode, state) after
                every segment change
        """
        self.settings = settings or PomodoroSettings()
        self.on_transition = on_transition
        self._state = PomodoroState(remaining_seconds=self.settings.duration_seconds(PomodoroMode.WORK))
    
    @property
    def state(self) -> PomodoroState:
        """A copy of the current state."""
        return self._state.model_copy()
    
    @property
    def mode(self) -> PomodoroMode:
        return self._state.mode
    
    @property
    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds
    
    @property
    def running(self) -> bool:
        return self._state.running
    
    @property
    def completed_cycles(self) -> int:
        return self._state.completed_cycles
    
    def tick(self) -> None:
        """
        Advance the countdown by one second.
        
        Does nothing while paused. Reaching zero performs the transition in
        the same tick.
        """
        if not self._state.running:
            return
        if self._state.remaining_seconds > 0:
            self._state.remaining_seconds -= 1
        if self._state.remaining_seconds == 0:
            self.advance()
    
    def start(self) -> None:
        """
        Start or resume counting down.

        ``tick`` performs the transition the moment a segment reaches zero
        and leaves the next segment stopped at full duration, so starting
        after a finished segment begins the next one.
        """
        self._state.running = True
    
    def pause(self) -> None:
        """Stop counting down without changing mode or remaining time."""
        self._state.running = False
    
    def toggle(self) -> None:
        """Start/pause button."""
        if self._state.running:
            self.pause()
        else:
            self.start()
    
    def advance(self) -> PomodoroMode:
        """
        Perform the end-of-segment transition and stop the timer.
        
        Returns:
            The new mode
        """
        previous = self._state.mode
        self._state.running = False
        
        if previous == PomodoroMode.WORK:
            self._state.completed_cycles += 1
            if self._state.completed_cycles % self.settings.cycles_per_long_break == 0:
                next_mode = PomodoroMode.LONG_BREAK
            else:
                next_mode = PomodoroMode.SHORT_BREAK
        elif previous == PomodoroMode.SHORT_BREAK:
            next_mode = PomodoroMode.WORK
        else:
            next_mode = PomodoroMode.WORK
            self._state.completed_cycles = 0
        
        self._state.mode = next_mode
        self._state.remaining_seconds = self.settings.duration_seconds(next_mode)
        logger.info(
            f"Pomodoro {previous.value} -> {next_mode.value} "
            f"(completed cycles: {self._state.completed_cycles})"
        )
        
        if self.on_transition is not None:
            self.on_transition(previous, next_mode, self.state)
        return next_mode
    
    def reset(self, reset_settings: bool = False) -> None:
        """
        Stop and return to a full work segment.
        
        Args:
            reset_settings: Also restore default durations and zero the
                completed cycle counter
        """
        self._state.running = False
        self._state.mode = PomodoroMode.WORK
        if reset_settings:
            self.settings = PomodoroSettings()
            self._state.completed_cycles = 0
        self._state.remaining_seconds = self.settings.duration_seconds(PomodoroMode.WORK)
    
    def update_settings(self, settings: PomodoroSettings) -> None:
        """
        Replace durations.
        
        While paused the remaining time of the active segment is reset to its
        new duration; while running the change applies from the next
        transition into each mode.
        """
        self.settings = settings
        if not self._state.running:
            self._state.remaining_seconds = settings.duration_seconds(self._state.mode)
        logger.info(f"Pomodoro settings updated: {settings.model_dump()}")
    
    def format_time(self) -> str:
        """Remaining time as MM:SS."""
        minutes, seconds = divmod(self._state.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"
