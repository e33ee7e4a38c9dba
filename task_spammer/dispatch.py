"""
Task Spammer - Dispatch Module

Fixed-interval loop that creates one task per tick and never lets a
failed submission stop the next one.
"""

import asyncio
import logging
import math
from typing import Awaitable, Callable, Optional

from .config import DEFAULT_INTERVAL_SECONDS
from .names import generate_task_name
from .types import LoopState, SubmissionResult

logger = logging.getLogger(__name__)

Submitter = Callable[[str], Awaitable[SubmissionResult]]


class DispatchLoop:
    """
    Periodic task dispatcher.

    The first dispatch happens one full interval after start. Submissions
    are strictly sequential; ticks missed while a submission is in flight
    collapse into a single tick fired as soon as it completes.

    Example:
        >>> loop = DispatchLoop(client.submit, interval=6)
        >>> await loop.run(stop_event)
    """

    def __init__(
        self,
        submit: Submitter,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        name_factory: Callable[[], str] = generate_task_name
    ):
        """
        Initialize loop.

        Args:
            submit: Coroutine function submitting one task name
            interval: Seconds between ticks
            name_factory: Task name generator
        """
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError("interval must be a finite number > 0")
        self.submit = submit
        self.interval = interval
        self.name_factory = name_factory
        self.state = LoopState.IDLE
        self.ticks = 0
        self.successes = 0
        self.failures = 0
        self._stop_event = asyncio.Event()

    async def run(
        self,
        stop_event: Optional[asyncio.Event] = None,
        max_ticks: Optional[int] = None
    ) -> None:
        """
        Run until the stop event is set or max_ticks dispatches happened.

        Args:
            stop_event: Cancellation token checked while waiting for a tick
            max_ticks: Optional bound on the number of dispatches
        """
        if stop_event is not None:
            self._stop_event = stop_event
        clock = asyncio.get_running_loop()
        next_tick = clock.time() + self.interval
        logger.info("Dispatch loop started, interval %ss", self.interval)

        while not self._stop_event.is_set():
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            if await self._wait_until(next_tick, clock):
                break

            await self.dispatch_once()

            next_tick += self.interval
            now = clock.time()
            if next_tick < now:
                next_tick = now

        logger.info(
            "Dispatch loop stopped after %d ticks (%d ok, %d failed)",
            self.ticks, self.successes, self.failures
        )

    def request_stop(self) -> None:
        """Ask the loop to exit after the in-flight submission, or not start."""
        self._stop_event.set()

    async def dispatch_once(self) -> SubmissionResult:
        """
        Generate a name, submit it once and report the result.

        Returns:
            Result of the submission; errors are contained in it
        """
        self.state = LoopState.DISPATCHING
        self.ticks += 1
        task_name = self.name_factory()
        logger.info("Creating new task with name: %s", task_name)
        try:
            result = await self.submit(task_name)
        except Exception as e:
            result = SubmissionResult.failure(task_name, e)
        finally:
            self.state = LoopState.IDLE

        if not isinstance(result, SubmissionResult):
            result = SubmissionResult.failure(
                task_name,
                TypeError(f"submitter returned {type(result).__name__}, not SubmissionResult")
            )

        self._report(result)
        return result

    def _report(self, result: SubmissionResult) -> None:
        if result.ok:
            self.successes += 1
            logger.info(
                "Task %s submitted with tx: %s",
                result.task_name, result.outcome.transaction_hash
            )
        else:
            self.failures += 1
            logger.error("Failed to create task %s: %s", result.task_name, result.error)

    async def _wait_until(self, deadline: float, clock: asyncio.AbstractEventLoop) -> bool:
        """Sleep until deadline; True if stop was requested meanwhile."""
        delay = deadline - clock.time()
        if delay <= 0:
            return self._stop_event.is_set()
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True
