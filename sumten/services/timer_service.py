"""
Timer Service

Repeating background tasks that drive the countdown and the round clock.
"""

from typing import Callable

from ..utils.game_logger import game_logger


class TimerHandle:
    """
    A repeating task owned by the game session.

    The callback receives the handle itself and returns True to keep
    ticking or False to stop. ``cancel`` only flips a flag: a sleeping
    task notices it on wake-up and exits without calling back.
    """

    def __init__(self, name: str, interval: float, callback: Callable[["TimerHandle"], bool]):
        self.name = name
        self.interval = interval
        self.callback = callback
        self.active = True
        self.ticks = 0

    def cancel(self) -> None:
        self.active = False

    def fire(self) -> bool:
        """Run one tick. Returns whether the task should keep running."""
        if not self.active:
            return False
        self.ticks += 1
        keep_going = self.callback(self)
        if not keep_going:
            self.active = False
        return self.active

    def __repr__(self):
        return f"TimerHandle({self.name!r}, ticks={self.ticks}, active={self.active})"


class SocketIOScheduler:
    """Runs timer handles as Flask-SocketIO background tasks."""

    def __init__(self, socketio):
        self.socketio = socketio

    def every(self, name: str, interval: float, callback: Callable[[TimerHandle], bool]) -> TimerHandle:
        handle = TimerHandle(name, interval, callback)
        self.socketio.start_background_task(self._run, handle)
        return handle

    def _run(self, handle: TimerHandle) -> None:
        while handle.active:
            self.socketio.sleep(handle.interval)
            try:
                if not handle.fire():
                    break
            except Exception as e:
                handle.cancel()
                game_logger.logger.error(f"Timer '{handle.name}' stopped after error: {e}")
                raise

