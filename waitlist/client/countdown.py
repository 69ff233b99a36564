"""Countdown timer for the landing page."""

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

logger = logging.getLogger(__name__)

SLOT_NAMES = ("days", "hours", "minutes", "seconds")

# Drop launch: December 4, 2025, local midnight
LAUNCH_AT = datetime(2025, 12, 4)


class DisplaySlot(Protocol):
    """Anything with a writable ``text`` (label, DOM proxy, test double)."""

    text: str


def pad_zero(value: int) -> str:
    return str(value).zfill(2)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _breakdown(distance: float) -> tuple[int, int, int, int]:
    if distance <= 0:
        return 0, 0, 0, 0
    days, rest = divmod(int(distance), 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return days, hours, minutes, seconds


class CountdownTimer:
    """Render the time left until ``target`` into four display slots.

    Slots may be missing (``None`` or absent keys); rendering then skips
    them instead of failing. ``on_complete`` fires once, the first time the
    target is reached.
    """

    def __init__(
        self,
        target: datetime,
        slots: Mapping[str, DisplaySlot | None] | None = None,
        on_complete: Callable[[], Any] | None = None,
        clock: Callable[[], datetime] | None = None,
        interval: float = 1.0,
    ) -> None:
        self.clock = clock or _utcnow
        # Naive targets are read in the clock's timezone
        now = self.clock()
        if target.tzinfo is None and now.tzinfo is not None:
            target = target.replace(tzinfo=now.tzinfo)
        self.target = target
        self.slots = dict(slots or {})
        self.on_complete = on_complete
        self.interval = interval
        self.completed = False
        self._task: asyncio.Task | None = None

    def seconds_left(self) -> float:
        """Exact time left; zero or negative once the target is reached."""
        return (self.target - self.clock()).total_seconds()

    def remaining(self) -> tuple[int, int, int, int]:
        """Whole days, hours, minutes and seconds left (all zero once passed)."""
        return _breakdown(self.seconds_left())

    def display(self) -> str:
        """Current values as ``DD:HH:MM:SS``."""
        return ":".join(pad_zero(v) for v in self.remaining())

    def update(self) -> None:
        """Render one tick; completes only once the target is actually reached."""
        distance = self.seconds_left()
        for name, value in zip(SLOT_NAMES, _breakdown(distance)):
            slot = self.slots.get(name)
            if slot is not None:
                slot.text = pad_zero(value)

        if distance <= 0 and not self.completed:
            self.completed = True
            self.stop()
            if self.on_complete is not None:
                self.on_complete()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Render now, then tick every ``interval`` seconds on the running loop."""
        self.update()
        if self.completed or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the recurring tick."""
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    async def _run(self) -> None:
        try:
            while not self.completed:
                await asyncio.sleep(self.interval)
                self.update()
        except asyncio.CancelledError:
            logger.debug("Countdown stopped")
            raise
