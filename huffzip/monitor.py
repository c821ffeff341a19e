"""Shared progress board for concurrent tasks and a screen that shows it."""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable, Sequence
from typing import Optional, Protocol

DONE_THRESHOLD = 99.99
FINISHED_MESSAGE = "PROGRAM FINISHED. PRESS ANY KEY."
_LINE_WIDTH = 40
_POLL_SECONDS = 0.5


class Screen(Protocol):
    """The part of a curses window that the monitor draws on."""

    def addstr(self, y: int, x: int, text: str) -> object: ...

    def refresh(self) -> object: ...

    def getch(self) -> object: ...


class ProgressBoard:
    """Progress of a fixed number of tasks, from 0.0 to 100.0 percent each.

    Tasks update their entry from worker threads; a watcher waits for
    changes with :meth:`wait_for_change`. A change made between two waits
    is never lost.
    """

    def __init__(self, task_count: int) -> None:
        if task_count < 0:
            raise ValueError("task count cannot be negative")
        self._progress = [0.0] * task_count
        self._changed = threading.Condition()
        self._version = 0
        self._seen = 0

    def __len__(self) -> int:
        return len(self._progress)

    def _check(self, task: int) -> None:
        if not 0 <= task < len(self._progress):
            raise IndexError(f"no task {task} on a board of {len(self._progress)}")

    def reporter(self, task: int) -> Callable[[float], None]:
        """Return a callback that records progress for ``task``."""
        self._check(task)
        return functools.partial(self.update, task)

    def update(self, task: int, value: float) -> None:
        """Record ``value`` as the progress of ``task`` and wake the watcher."""
        self._check(task)
        with self._changed:
            self._progress[task] = float(value)
            self._version += 1
            self._changed.notify_all()

    def snapshot(self) -> list[float]:
        """Return a copy of the progress of every task."""
        with self._changed:
            return list(self._progress)

    def wait_for_change(self, timeout: Optional[float] = None) -> bool:
        """Wait until some task reports progress; False if ``timeout`` ran out."""
        with self._changed:
            changed = self._changed.wait_for(
                lambda: self._version != self._seen, timeout
            )
            self._seen = self._version
            return changed

    def all_done(self) -> bool:
        """True when every task has finished."""
        with self._changed:
            return all(value >= DONE_THRESHOLD for value in self._progress)


def format_status(task: int, value: float) -> str:
    """Describe the progress of one task in a single line."""
    if value < DONE_THRESHOLD:
        return f"[task {task}]: {value:.1f}%"
    return f"[task {task}]: Done"


def render_lines(progress: Sequence[float]) -> list[str]:
    """Describe the progress of every task, one line per task."""
    return [format_status(task, value) for task, value in enumerate(progress)]


def run_monitor(board: ProgressBoard, screen: Screen) -> None:
    """Draw the board on ``screen`` until all tasks finish, then wait for a key."""
    while True:
        progress = board.snapshot()
        for row, line in enumerate(render_lines(progress)):
            screen.addstr(row, 0, line.ljust(_LINE_WIDTH))
        if all(value >= DONE_THRESHOLD for value in progress):
            break
        screen.refresh()
        board.wait_for_change(_POLL_SECONDS)
    screen.addstr(len(progress), 0, FINISHED_MESSAGE)
    screen.refresh()
    screen.getch()