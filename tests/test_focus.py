"""
Tests for the Pomodoro timer and the focus status helper.
"""

import datetime

import pytest

from echo.core.types import utcnow
from echo.focus.pomodoro import PomodoroState, PomodoroTimer
from echo.focus.status import IDLE_MESSAGE, current_focus
from echo.tasks.schemas import TaskBase
from echo.time_blocks.schemas import TimeBlockBase


class TestPomodoroTimer:

    @pytest.fixture
    def timer(self):
        return PomodoroTimer(work_minutes=1, short_break_minutes=1, long_break_minutes=2)

    def test_starts_idle(self, timer):
        assert timer.state == PomodoroState.IDLE
        assert timer.display == "01:00"
        assert timer.progress == 0.0

    def test_tick_does_nothing_until_started(self, timer):
        timer.tick(30)
        assert timer.remaining_seconds == 60

    def test_tick_counts_down(self, timer):
        timer.start()
        timer.tick(15)

        assert timer.state == PomodoroState.WORK
        assert timer.display == "00:45"
        assert timer.progress == pytest.approx(0.25)

    def test_pause_stops_countdown(self, timer):
        timer.start()
        timer.tick(10)
        timer.pause()
        timer.tick(10)

        assert timer.remaining_seconds == 50
        assert timer.is_running is False

    def test_work_then_short_break_then_work(self, timer):
        timer.start()
        timer.tick(60)

        assert timer.state == PomodoroState.SHORT_BREAK
        assert timer.completed_pomodoros == 1
        assert timer.remaining_seconds == 60

        timer.tick(60)
        assert timer.state == PomodoroState.WORK

    def test_fourth_pomodoro_starts_long_break(self, timer):
        timer.start()
        for _ in range(3):
            timer.skip()  # work
            assert timer.state == PomodoroState.SHORT_BREAK
            timer.skip()  # break

        timer.skip()

        assert timer.completed_pomodoros == 4
        assert timer.state == PomodoroState.LONG_BREAK
        assert timer.display == "02:00"

    def test_on_complete_reports_finished_phase(self):
        finished = []
        timer = PomodoroTimer(work_minutes=1, on_complete=finished.append)

        timer.start()
        timer.tick(60)
        timer.skip()

        assert finished == [PomodoroState.WORK, PomodoroState.SHORT_BREAK]

    def test_reset(self, timer):
        timer.start()
        timer.skip()
        timer.reset()

        assert timer.state == PomodoroState.IDLE
        assert timer.completed_pomodoros == 0
        assert timer.remaining_seconds == 60

    def test_skip_when_idle_is_ignored(self, timer):
        timer.skip()
        assert timer.state == PomodoroState.IDLE

    def test_rejects_non_positive_durations(self):
        with pytest.raises(ValueError):
            PomodoroTimer(work_minutes=0)


def _task(task_id, completed=False):
    now = utcnow()
    return TaskBase(
        id=task_id,
        goal_id="goal-1",
        title=task_id.title(),
        is_completed=completed,
        created_at=now,
        updated_at=now,
    )


def _block(block_id, task_id, completed=False):
    return TimeBlockBase(
        id=block_id,
        task_id=task_id,
        date=datetime.date(2025, 3, 3),
        start_time=datetime.time(9, 0),
        end_time=datetime.time(10, 0),
        is_completed=completed,
    )


class TestCurrentFocus:

    def test_no_open_tasks(self):
        status = current_focus([_task("done", completed=True)], [])

        assert status.task is None
        assert status.message == IDLE_MESSAGE

    def test_first_open_task_and_block(self):
        tasks = [_task("done", completed=True), _task("write"), _task("read")]
        blocks = [
            _block("b1", "write", completed=True),
            _block("b2", "write"),
            _block("b3", "read"),
        ]

        status = current_focus(tasks, blocks)

        assert status.task.id == "write"
        assert status.time_block.id == "b2"
        assert status.message == "Echo is focused on Write"

    def test_unscheduled_task(self):
        status = current_focus([_task("write")], [])

        assert status.task.id == "write"
        assert status.time_block is None
