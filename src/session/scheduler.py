"""
Refresh-synchronized scheduling of the passthrough and detection loops.
"""
import asyncio
import time
from typing import Awaitable, Callable, Optional

from tracking.config import DETECTION_INTERVAL_MS
from tracking.hand_tracker import monotonic_ms


class RefreshSignal:
    """
    Waits for the next display refresh boundary.

    Boundaries sit on a fixed grid of the monotonic clock, so every loop
    waiting on the same signal wakes on the same tick.
    """

    def __init__(self, hz: float = 60.0):
        self._period = 1.0 / hz

    async def wait(self) -> None:
        now = time.monotonic()
        delay = self._period - (now % self._period)
        await asyncio.sleep(delay)


class FrameScheduler:
    """
    Drives two independent loops off the refresh signal.

    - Passthrough: runs every tick.
    - Detection: runs on a tick only when at least `interval_ms` has passed
      since the previous detection. The detection callback is awaited, so a
      slow inference delays the next detection but never the passthrough.

    Both loops stop together on cancel(), which may be called any number
    of times.
    """

    def __init__(
        self,
        passthrough: Callable[[], None],
        detect: Callable[[int], Awaitable[None]],
        interval_ms: int = DETECTION_INTERVAL_MS,
        refresh: Optional[Callable[[], Awaitable[None]]] = None,
        clock: Callable[[], int] = monotonic_ms,
    ):
        self._passthrough = passthrough
        self._detect = detect
        self._interval_ms = interval_ms
        self._refresh = refresh or RefreshSignal().wait
        self._clock = clock

        self._last_detection_ms: Optional[int] = None
        self._cancelled = False
        self._passthrough_task: Optional[asyncio.Task] = None
        self._detection_task: Optional[asyncio.Task] = None

    def start(self) -> None:
        """Schedule both loops on the running event loop."""
        if self._cancelled:
            raise RuntimeError("FrameScheduler cannot be restarted after cancel()")
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._passthrough_task = loop.create_task(self._passthrough_loop())
        self._detection_task = loop.create_task(self._detection_loop())

    async def _passthrough_loop(self) -> None:
        while not self._cancelled:
            await self._refresh()
            if self._cancelled:
                break
            self._passthrough()

    async def _detection_loop(self) -> None:
        while not self._cancelled:
            await self._refresh()
            if self._cancelled:
                break
            now = self._clock()
            if self._last_detection_ms is None or now - self._last_detection_ms >= self._interval_ms:
                await self._detect(now)
                self._last_detection_ms = now

    def cancel(self) -> None:
        """Stop both loops. No tick fires afterwards."""
        self._cancelled = True
        for task in (self._passthrough_task, self._detection_task):
            if task is not None and not task.done():
                task.cancel()

    async def wait(self) -> None:
        """
        Wait until both loops have finished or been cancelled.

        If either loop raises, the other is cancelled and the error is
        re-raised here.
        """
        tasks = [t for t in (self._passthrough_task, self._detection_task) if t is not None]
        if not tasks:
            return
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        self.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                raise result

    @property
    def is_running(self) -> bool:
        return any(
            t is not None and not t.done()
            for t in (self._passthrough_task, self._detection_task)
        )

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def last_detection_ms(self) -> Optional[int]:
        return self._last_detection_ms
