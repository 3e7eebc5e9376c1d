import logging
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PomodoroState(str, Enum):
    IDLE = "IDLE"
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"


class PomodoroTimer:
    """
    Work/break cycle driven by explicit ``tick`` calls.

    The timer owns no clock. Whoever hosts it (a scheduler, a UI loop, a test)
    advances it by calling ``tick`` once per elapsed second or in larger steps.
    """

    def __init__(
        self,
        work_minutes: int = 25,
        short_break_minutes: int = 5,
        long_break_minutes: int = 15,
        pomodoros_until_long_break: int = 4,
        on_complete: Optional[Callable[[PomodoroState], None]] = None,
    ):
        if min(work_minutes, short_break_minutes, long_break_minutes) <= 0:
            raise ValueError("Durations must be positive")
        if pomodoros_until_long_break <= 0:
            raise ValueError("pomodoros_until_long_break must be positive")

        self.work_seconds = work_minutes * 60
        self.short_break_seconds = short_break_minutes * 60
        self.long_break_seconds = long_break_minutes * 60
        self.pomodoros_until_long_break = pomodoros_until_long_break
        self.on_complete = on_complete

        self._state = PomodoroState.IDLE
        self._running = False
        self._remaining = self.work_seconds
        self._completed = 0

    @property
    def state(self) -> PomodoroState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def completed_pomodoros(self) -> int:
        return self._completed

    def _duration(self, state: PomodoroState) -> int:
        if state == PomodoroState.SHORT_BREAK:
            return self.short_break_seconds
        if state == PomodoroState.LONG_BREAK:
            return self.long_break_seconds
        return self.work_seconds

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed, from 0.0 to 1.0."""
        total = self._duration(self._state)
        return (total - self._remaining) / total

    @property
    def display(self) -> str:
        minutes, seconds = divmod(self._remaining, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def start(self) -> None:
        if self._state == PomodoroState.IDLE:
            self._state = PomodoroState.WORK
            self._remaining = self.work_seconds
        self._running = True

    def pause(self) -> None:
        self._running = False

    def reset(self) -> None:
        self._state = PomodoroState.IDLE
        self._running = False
        self._remaining = self.work_seconds
        self._completed = 0

    def skip(self) -> None:
        """Ends the current phase now, as if its time had run out."""
        if self._state == PomodoroState.IDLE:
            return
        self._complete_phase()

    def tick(self, seconds: int = 1) -> None:
        if not self._running or self._state == PomodoroState.IDLE:
            return
        self._remaining = max(0, self._remaining - seconds)
        if self._remaining == 0:
            self._complete_phase()

    def _complete_phase(self) -> None:
        finished = self._state
        if finished == PomodoroState.WORK:
            self._completed += 1
            if self._completed % self.pomodoros_until_long_break == 0:
                self._state = PomodoroState.LONG_BREAK
            else:
                self._state = PomodoroState.SHORT_BREAK
        else:
            self._state = PomodoroState.WORK
        self._remaining = self._duration(self._state)
        logger.debug(f"Pomodoro phase {finished.value} finished, next is {self._state.value}")

        if self.on_complete is not None:
            self.on_complete(finished)
