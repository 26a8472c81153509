"""Fixed-interval tick sources for the game controller.

The controller only knows the small :class:`TickScheduler` interface, which
keeps the state machine free of wall-clock concerns.  Tests and headless runs
drive it by hand with :class:`ManualScheduler`; the pygame front-end uses
:class:`AsyncioScheduler` inside its event loop.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

LOGGER = logging.getLogger(__name__)

# Milliseconds between automatic downward moves.
TICK_INTERVAL_MS = 1000

TickCallback = Callable[[], None]


class TickScheduler(ABC):
    """Base class for a pausable periodic callback.

    Subclasses decide how ticks are produced by implementing :meth:`_on_begin`
    and, when they hold a timer, :meth:`_on_end`.
    """

    def __init__(self, callback: Optional[TickCallback] = None, interval_ms: float = TICK_INTERVAL_MS) -> None:
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")
        self.callback = callback
        self.interval_ms = interval_ms
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def begin(self) -> None:
        """Start ticking.  Calling it while already running does nothing."""

        if self._running:
            return
        self._running = True
        LOGGER.debug("Ticking every %s ms", self.interval_ms)
        self._on_begin()

    def end(self) -> None:
        """Stop ticking.  Calling it while stopped does nothing."""

        if not self._running:
            return
        self._running = False
        LOGGER.debug("Ticking stopped")
        self._on_end()

    def _fire(self) -> None:
        if self.callback is not None:
            self.callback()

    @abstractmethod
    def _on_begin(self) -> None:
        ...

    def _on_end(self) -> None:
        pass


class ManualScheduler(TickScheduler):
    """Scheduler that only ticks when :meth:`tick` is called."""

    def _on_begin(self) -> None:
        pass

    def tick(self) -> bool:
        """Deliver one tick if running; return whether it was delivered."""

        if not self._running:
            return False
        self._fire()
        return True


class AsyncioScheduler(TickScheduler):
    """Tick on an :mod:`asyncio` event loop using ``call_later``."""

    def __init__(
        self,
        callback: Optional[TickCallback] = None,
        interval_ms: float = TICK_INTERVAL_MS,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        super().__init__(callback, interval_ms)
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def _on_begin(self) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._schedule()

    def _on_end(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.interval_ms / 1000.0, self._run)

    def _run(self) -> None:
        self._handle = None
        if not self._running:
            return
        # Re-arm first so a callback that calls ``end()`` cancels the next tick.
        self._schedule()
        try:
            self._fire()
        except Exception:
            self.end()
            raise
