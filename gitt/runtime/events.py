"""Event channel between the input producer thread and the main loop.

The producer only enqueues; the main loop is the only code that touches the
navigation engine. One FIFO queue carries every event, so events are applied
in exactly the order they were produced.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Union

from .input import KeyReader

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 0.2


@dataclass(frozen=True)
class InputEvent:
    key: str


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class FailureEvent:
    reason: str


Event = Union[InputEvent, TickEvent, FailureEvent]

_DISCONNECTED = object()


class EventChannel:
    """Single ordered queue with an explicit disconnect marker."""

    def __init__(self) -> None:
        self._queue: Queue[object] = Queue()
        self._closed = False

    def send(self, event: Event) -> bool:
        """Enqueue ``event``; returns ``False`` once the channel is closed."""
        if self._closed:
            return False
        self._queue.put(event)
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put(_DISCONNECTED)

    def recv(self, timeout: float | None = None) -> Event | None:
        """Return the next event, or ``None`` once the producer disconnected.

        With a ``timeout``, ``None`` is also returned when nothing arrived.
        """
        try:
            item = self._queue.get(timeout=timeout)
        except Empty:
            return None
        if item is _DISCONNECTED:
            # Keep the marker visible to any later receive.
            self._queue.put(_DISCONNECTED)
            return None
        return item  # type: ignore[return-value]

    @property
    def closed(self) -> bool:
        return self._closed


class InputProducer:
    """Background thread polling keys and emitting periodic ticks."""

    def __init__(
        self,
        reader: KeyReader,
        channel: EventChannel,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.reader = reader
        self.channel = channel
        self.tick_seconds = max(0.01, tick_seconds)
        self.clock = clock
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.run, name="gitt-input", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def poll_once(self, last_tick: float) -> float:
        """Wait for one key (bounded by the tick deadline) and emit due events.

        Returns the time of the most recent tick.
        """
        remaining = self.tick_seconds - (self.clock() - last_tick)
        key = self.reader.read_key(timeout_ms=max(0, int(remaining * 1000)))
        if key:
            self.channel.send(InputEvent(key))
        if self.clock() - last_tick >= self.tick_seconds:
            if self.channel.send(TickEvent()):
                last_tick = self.clock()
        return last_tick

    def run(self) -> None:
        last_tick = self.clock()
        while not self._stop.is_set() and not self.channel.closed:
            try:
                last_tick = self.poll_once(last_tick)
            except (OSError, EOFError) as exc:
                logger.error("input polling failed: %s", exc)
                self.channel.send(FailureEvent(str(exc) or type(exc).__name__))
                self.channel.close()
                return


__all__ = [
    "DEFAULT_TICK_SECONDS",
    "Event",
    "EventChannel",
    "FailureEvent",
    "InputEvent",
    "InputProducer",
    "TickEvent",
]
