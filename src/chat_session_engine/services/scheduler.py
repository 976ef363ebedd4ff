"""Single-slot cancellable timer for simulated reply latency."""

import asyncio
from enum import Enum
from typing import Callable, Optional, Protocol

import structlog

from ..config import EngineConfig

logger = structlog.get_logger()

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    """Primitive that runs a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callback) -> TimerHandle: ...


class LoopTimer:
    """Timer backed by the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


def reply_delay_ms(input_length: int, config: Optional[EngineConfig] = None) -> int:
    """Simulated latency for a prompt of ``input_length`` characters."""
    config = config or EngineConfig()
    return min(
        config.delay_cap_ms,
        config.delay_base_ms + config.delay_per_char_ms * max(0, input_length),
    )


class DelayScheduler:
    """Holds at most one pending callback.

    Scheduling while a callback is pending cancels the old one first. Each
    armed timer carries a generation number; a timer whose generation no
    longer matches is discarded when it fires, so a cancel issued in the same
    tick as the expiry still wins.
    """

    def __init__(self, timer: Optional[Timer] = None) -> None:
        self._timer = timer or LoopTimer()
        self._handle: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.PENDING if self._handle is not None else SchedulerState.IDLE

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def schedule(self, duration_ms: int, callback: Callback) -> None:
        """Arm the slot; ``callback`` runs once after ``duration_ms``."""
        if self._handle is not None:
            self.cancel()
        self._generation += 1
        generation = self._generation
        self._handle = self._timer.call_later(
            duration_ms / 1000.0, lambda: self._fire(generation, callback)
        )
        logger.debug("reply_scheduled", duration_ms=duration_ms, generation=generation)

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self._generation += 1
        handle.cancel()
        logger.info("reply_cancelled")

    def run_immediately(self, callback: Callback) -> None:
        """Invoke ``callback`` synchronously without entering the pending state."""
        callback()

    def _fire(self, generation: int, callback: Callback) -> None:
        if generation != self._generation or self._handle is None:
            logger.debug("stale_timer_discarded", generation=generation)
            return
        self._handle = None
        logger.debug("reply_fired", generation=generation)
        callback()
