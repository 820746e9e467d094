"""Cancellable delayed callbacks for countdowns and answer display delays."""
import asyncio
from typing import Callable, Protocol


class ScheduledHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Runs a callback after a delay on the caller's event loop."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle:
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio loop.

    Callbacks run on the loop thread, the same thread that serves requests,
    so session state is never touched concurrently.
    """

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)
