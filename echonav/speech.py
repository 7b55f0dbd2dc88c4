"""Announcement sinks and the debouncer in front of them.

Rapid repeated navigation must not queue overlapping audio: only the newest
pending announcement survives the debounce delay.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

DEFAULT_ANNOUNCE_DELAY = 0.3


class AnnouncementSink(Protocol):
    def announce(self, text: str) -> object:
        """Speak ``text``. May return an awaitable; callers fire and forget."""
        ...


class ConsoleSink:
    """Write announcements as lines of text, e.g. for a screen reader."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def announce(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()


class AnnouncementDebouncer:
    """Deliver the latest scheduled announcement after ``delay`` seconds.

    Scheduling cancels any announcement still waiting. Must be used from a
    running event loop.
    """

    def __init__(self, sink: AnnouncementSink, delay: float = DEFAULT_ANNOUNCE_DELAY) -> None:
        if delay < 0 or delay > 10:
            raise ValueError("announce delay must be between 0 and 10 seconds")
        self.sink = sink
        self.delay = delay
        self._timer_handle: asyncio.TimerHandle | None = None
        self._pending_text: str | None = None
        self._deliveries: set[asyncio.Task] = set()

    @property
    def pending(self) -> str | None:
        return self._pending_text

    def schedule(self, text: str) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._pending_text = text
        self._timer_handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._timer_handle is not None:
            self._timer_handle.cancel()
        self._timer_handle = None
        self._pending_text = None

    def _fire(self) -> None:
        text = self._pending_text
        self._timer_handle = None
        self._pending_text = None
        if text is not None:
            self._deliver(text)

    def _deliver(self, text: str) -> asyncio.Task | None:
        """Hand ``text`` to the sink; async sinks run as tracked tasks."""
        try:
            result = self.sink.announce(text)
        except Exception as exc:
            logger.error("Announcement failed: %s", exc, exc_info=True)
            return None
        if not asyncio.iscoroutine(result):
            return None

        task = asyncio.get_running_loop().create_task(result)
        self._deliveries.add(task)
        task.add_done_callback(self._delivery_done)
        return task

    def _delivery_done(self, task: asyncio.Task) -> None:
        self._deliveries.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Announcement failed: %s", exc)

    async def flush(self) -> None:
        """Deliver any pending announcement now and wait for async sinks."""
        text = self._pending_text
        self.cancel()
        if text is not None:
            self._deliver(text)
        if self._deliveries:
            await asyncio.gather(*self._deliveries, return_exceptions=True)
