# game/scheduler.py
"""
Verzögerte, abbrechbare Aufgaben (ersetzt das lose root.after(...) der UI).

Der Spielkern kennt nur Scheduler.call_later(); welche Event-Loop dahinter
steckt, entscheidet der Aufrufer.
"""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._handle = None
        self.cancelled = False
        self.done = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def run(self) -> None:
        if not self.pending:
            return
        self.done = True
        self._callback()

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()


class Scheduler:
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = self.loop or asyncio.get_running_loop()
        task = ScheduledTask(callback)
        task._handle = loop.call_later(delay, task.run)
        return task
