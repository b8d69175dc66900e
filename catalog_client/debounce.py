"""Canceling debouncer for search input.

Each new value restarts the quiet period; only the latest value
survives. A value equal to the last emitted one is dropped.
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")

_UNSET: Any = object()


class Debouncer(Generic[T]):
    """Coalesce rapid values into one callback after a quiet period.

    Must be used from within a running event loop.

    Example usage:
        debouncer = Debouncer(0.3, view.apply_search)
        debouncer.push("w")
        debouncer.push("wi")
        debouncer.push("wid")   # only "wid" reaches apply_search
    """

    def __init__(self, delay: float, callback: Callable[[T], Awaitable[None]]) -> None:
        """Initialize debouncer.

        Args:
            delay: Quiet period in seconds.
            callback: Coroutine function called with the surviving value.
        """
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0
        self._last_emitted: Any = _UNSET
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """Whether a value is waiting for its quiet period to end."""
        return self._handle is not None

    def push(self, value: T) -> None:
        """Offer a new value, replacing any pending one."""
        self._cancel_timer()
        self._generation += 1
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, self._generation, value)

    def cancel(self) -> None:
        """Drop the pending value, if any."""
        self._cancel_timer()
        self._generation += 1

    def reset(self, last: T | Any = _UNSET) -> None:
        """Drop the pending value and set what counts as already emitted.

        Args:
            last: Value to treat as the last emitted one; omitted means none.
        """
        self.cancel()
        self._last_emitted = last

    async def drain(self) -> None:
        """Wait for callbacks already started to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int, value: T) -> None:
        if generation != self._generation:
            return
        self._handle = None

        if value == self._last_emitted:
            logger.debug("Debounced value unchanged, skipping", value=value)
            return
        self._last_emitted = value

        task = asyncio.ensure_future(self._callback(value))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
