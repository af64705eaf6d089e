"""
Delayed jobs keyed by owner.

'TaskScheduler' runs a coroutine after a delay as an 'asyncio' task and files
the task under a key, in practice the id of the conversation the job writes
to. Everything filed under a key can be cancelled at once, which is how a
session drops the pending reply and follow-up of a conversation the user has
just left.

The sleep function is injectable so tests can observe requested delays
without waiting for them.
"""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

T = TypeVar("T")

SleepFunction = Callable[[float], Awaitable[Any]]


class TaskScheduler:
    def __init__(self, sleep: SleepFunction = asyncio.sleep) -> None:
        self._sleep = sleep
        self._tasks: dict[str, set[asyncio.Task[Any]]] = defaultdict(set)

    def schedule(
        self,
        key: str,
        delay: float,
        job: Callable[[], Awaitable[T]],
        name: str | None = None,
    ) -> asyncio.Task[T]:
        """Run 'job()' after 'delay' seconds and file the task under 'key'."""

        async def _run() -> T:
            if delay > 0:
                await self._sleep(delay)
            return await job()

        task = asyncio.create_task(_run(), name=name)
        self._tasks[key].add(task)
        task.add_done_callback(lambda t: self._discard(key, t))
        return task

    def _discard(self, key: str, task: asyncio.Task[Any]) -> None:
        tasks = self._tasks.get(key)
        if tasks is None:
            return
        tasks.discard(task)
        if not tasks:
            del self._tasks[key]

    def pending(self, key: str | None = None) -> int:
        if key is not None:
            return len(self._tasks.get(key, ()))
        return sum(len(tasks) for tasks in self._tasks.values())

    def cancel(self, key: str) -> int:
        """Cancel every unfinished task filed under 'key'. Returns how many were cancelled."""
        cancelled = 0
        for task in list(self._tasks.get(key, ())):
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} scheduled task(s) for {key}")
        return cancelled

    def cancel_all(self) -> int:
        return sum(self.cancel(key) for key in list(self._tasks))

    async def join(self, key: str | None = None) -> None:
        """Wait until no task is pending under 'key' (or under any key), including tasks scheduled meanwhile."""
        while True:
            if key is not None:
                tasks = {task for task in self._tasks.get(key, ()) if not task.done()}
            else:
                tasks = {task for group in self._tasks.values() for task in group if not task.done()}
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
