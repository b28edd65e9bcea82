from collections.abc import Awaitable, Callable
import logging

import trio

logger = logging.getLogger("dropsignal.signaling.periodic")


class PeriodicHandle:
    """Cancellation handle returned by :func:`every`."""

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self.ticks = 0
        self._cancel_scope = trio.CancelScope()

    @property
    def cancelled(self) -> bool:
        return self._cancel_scope.cancel_called

    def cancel(self) -> None:
        """Stop the schedule; no tick fires after this returns."""
        self._cancel_scope.cancel()


def every(
    nursery: trio.Nursery,
    interval: float,
    fn: Callable[[], Awaitable[object]],
) -> PeriodicHandle:
    """
    Run ``fn`` at ``interval``, ``2 * interval``, ... from now until cancelled.

    Each call runs as its own task, so a slow or failing call never shifts the
    schedule. Exceptions raised by ``fn`` are logged and the schedule goes on.
    Cancelling the handle also cancels calls still in flight.
    """
    if interval <= 0:
        raise ValueError(f"Interval must be positive, got {interval}")

    handle = PeriodicHandle(interval)
    start = trio.current_time()

    async def run_tick(tick: int) -> None:
        try:
            await fn()
        except Exception:
            logger.exception("Periodic task %r failed on tick %d", fn, tick)

    async def loop() -> None:
        with handle._cancel_scope:
            async with trio.open_nursery() as tick_nursery:
                deadline = start
                while True:
                    deadline += interval
                    await trio.sleep_until(deadline)
                    handle.ticks += 1
                    tick_nursery.start_soon(run_tick, handle.ticks)

    nursery.start_soon(loop)
    return handle
