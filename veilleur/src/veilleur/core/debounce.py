"""
Debounce scheduler - coalesces bursts of triggers into one run.

Handles:
- Quiet window per trigger (asyncio timer)
- Supersession of a pending, not-yet-fired run
- Exclusive execution (one run in flight at a time)
- Exactly-once settle callback per trigger
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, Set, TypeVar

from shared.reporter.emojis import VeilleurEmoji
from shared.reporter.system_reporter import SystemReporter

T = TypeVar("T")

SettleCallback = Callable[[], None]


@dataclass
class PendingRun(Generic[T]):
    """
    Scheduled but not yet started run.

    Attributes:
        payload: Value handed to the run action
        finalize: Settle callback of the trigger
        timer: Quiet-window timer
    """

    payload: T
    finalize: SettleCallback
    timer: asyncio.TimerHandle


class DebounceScheduler(Generic[T]):
    """
    Runs an action once per burst of triggers.

    A trigger arriving while another one is still waiting out its quiet
    window replaces it; the replaced trigger is settled immediately
    without running. Once a timer fires the run is no longer pending and
    cannot be superseded; a run fired while another is executing waits
    for it to finish.

    Attributes:
        wait_ms: Quiet window in milliseconds
    """

    def __init__(
        self,
        wait_ms: int,
        run: Callable[[T], Awaitable[Any]],
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize scheduler.

        Args:
            wait_ms: Quiet window in milliseconds (0 = next loop iteration)
            run: Action executed with the payload of the surviving trigger
            reporter: Optional reporter for logging
        """
        if wait_ms < 0:
            raise ValueError(f"wait_ms must be >= 0, got {wait_ms}")

        self.wait_ms = wait_ms
        self._run = run
        self.reporter = reporter or SystemReporter(
            name="debounce", level=20, verbose=1
        )

        self._pending: Optional[PendingRun[T]] = None
        self._lock: Optional[asyncio.Lock] = None
        self._tasks: Set[asyncio.Task] = set()
        self._in_flight = 0

    @property
    def has_pending(self) -> bool:
        """Check if a run is waiting out its quiet window."""
        return self._pending is not None

    @property
    def in_flight(self) -> bool:
        """Check if a run has fired and not settled yet."""
        return self._in_flight > 0

    def schedule(self, payload: T, on_settled: SettleCallback) -> None:
        """
        Schedule a run, superseding any pending one.

        Must be called from within the running event loop.

        Args:
            payload: Value handed to the run action
            on_settled: Called exactly once, on supersession or when the
                run finishes
        """
        loop = asyncio.get_running_loop()

        if self._pending is not None:
            superseded = self._pending
            self._pending = None
            superseded.timer.cancel()
            self.reporter.debug(
                f"{VeilleurEmoji.SUPERSEDED} Pending run superseded",
                context="DebounceScheduler",
            )
            superseded.finalize()

        timer = loop.call_later(self.wait_ms / 1000, self._fire)
        self._pending = PendingRun(payload=payload, finalize=on_settled, timer=timer)

        self.reporter.debug(
            f"{VeilleurEmoji.SCHEDULED} Run scheduled in {self.wait_ms}ms",
            context="DebounceScheduler",
        )

    def _fire(self) -> None:
        """Timer callback: start the pending run."""
        pending = self._pending
        if pending is None:
            return

        self._pending = None
        self._in_flight += 1

        task = asyncio.ensure_future(self._execute(pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, pending: PendingRun[T]) -> None:
        """Run the action exclusively, then settle the trigger."""
        if self._lock is None:
            self._lock = asyncio.Lock()

        try:
            async with self._lock:
                await self._run(pending.payload)
        except Exception as e:
            self.reporter.error(
                f"{VeilleurEmoji.TEST_ERROR} Run failed: {type(e).__name__}: {e}",
                context="DebounceScheduler",
            )
        finally:
            self._in_flight -= 1
            try:
                pending.finalize()
            except Exception as e:
                self.reporter.error(
                    f"{VeilleurEmoji.TEST_ERROR} Settle callback failed: "
                    f"{type(e).__name__}: {e}",
                    context="DebounceScheduler",
                )

    async def wait_idle(self) -> None:
        """Wait until every fired run has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel the pending run, settling its trigger."""
        if self._pending is None:
            return

        pending = self._pending
        self._pending = None
        pending.timer.cancel()
        self.reporter.debug(
            f"{VeilleurEmoji.CANCELLED} Pending run cancelled",
            context="DebounceScheduler",
        )
        pending.finalize()
