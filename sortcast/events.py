"""Instrumentation events and the emitter that dispatches them.

Algorithms never talk to a renderer or an audio device. They report
through an :class:`Emitter`, which hands each :class:`Event` to every
subscribed observer in emission order and tallies it into the run's
metrics.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sortcast.metrics import Metrics


class EventKind(Enum):
    COMPARE = "compare"
    SWAP = "swap"
    OVERWRITE = "overwrite"
    TONE = "tone"
    HIGHLIGHT_ON = "highlight_on"
    HIGHLIGHT_OFF = "highlight_off"
    DONE = "done"
    CANCELLED = "cancelled"


class Mark(Enum):
    """Role of a highlighted index."""

    ACTIVE = "active"
    MINIMUM = "minimum"
    PIVOT = "pivot"
    SORTED = "sorted"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    indices: tuple[int, ...] = ()
    values: tuple[int, ...] = ()
    mark: Mark | None = None

    @property
    def terminal(self) -> bool:
        return self.kind in (EventKind.DONE, EventKind.CANCELLED)


Observer = Callable[[Event], None]


class Emitter:
    """Synchronous fan-out of events to observers."""

    def __init__(self, metrics: Metrics | None = None) -> None:
        self.metrics = metrics
        self._observers: list[Observer] = []
        self._lock = threading.Lock()

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; return a callable that removes it again."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def emit(self, event: Event) -> None:
        if self.metrics is not None:
            self.metrics.observe(event)
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer(event)

    # --- shorthands used by algorithms and the controller ---

    def highlight(self, *indices: int, mark: Mark = Mark.ACTIVE, values: tuple[int, ...] = ()) -> None:
        self.emit(Event(EventKind.HIGHLIGHT_ON, tuple(dict.fromkeys(indices)), values, mark))

    def clear(self, *indices: int) -> None:
        self.emit(Event(EventKind.HIGHLIGHT_OFF, tuple(dict.fromkeys(indices))))

    def done(self) -> None:
        self.emit(Event(EventKind.DONE))

    def cancelled(self) -> None:
        self.emit(Event(EventKind.CANCELLED))


class CancellationToken:
    """Cooperative cancellation flag shared by the controller and one run.

    Setting it never interrupts anything; algorithms look at it at their
    iteration boundaries and the controller looks at it after each pacing
    delay.
    """

    def __init__(self) -> None:
        self._flag = threading.Event()

    def cancel(self) -> None:
        self._flag.set()

    def reset(self) -> None:
        self._flag.clear()

    @property
    def cancelled(self) -> bool:
        return self._flag.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
