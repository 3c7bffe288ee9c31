"""Comparison / access counters and wall-clock timing for one run."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from sortcast.events import Event, EventKind


@dataclass(frozen=True)
class MetricsSnapshot:
    comparisons: int
    accesses: int
    swaps: int
    writes: int
    elapsed: float

    def format_elapsed(self) -> str:
        return f"{self.elapsed:.2f}s"

    def describe(self) -> str:
        return (
            f"comparisons={self.comparisons} accesses={self.accesses} "
            f"swaps={self.swaps} writes={self.writes} elapsed={self.format_elapsed()}"
        )


class Metrics:
    """Aggregates the counters of the active or most recent run.

    ``comparisons`` and ``accesses`` are bumped by the instrumented
    sequence; ``swaps`` and ``writes`` are tallied from the event stream.
    All four only ever grow between two calls to :meth:`reset`.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self.comparisons = 0
        self.accesses = 0
        self.swaps = 0
        self.writes = 0
        self.started_at: float | None = None
        self.finished_at: float | None = None

    def reset(self) -> None:
        self.comparisons = 0
        self.accesses = 0
        self.swaps = 0
        self.writes = 0
        self.started_at = None
        self.finished_at = None

    def begin(self) -> None:
        self.reset()
        self.started_at = self.clock()

    def finish(self) -> None:
        """Stamp the end time; later calls keep the first stamp."""
        if self.started_at is not None and self.finished_at is None:
            self.finished_at = self.clock()

    @property
    def finished(self) -> bool:
        return self.finished_at is not None

    def observe(self, event: Event) -> None:
        if event.kind is EventKind.SWAP:
            self.swaps += 1
        elif event.kind is EventKind.OVERWRITE:
            self.writes += 1

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else self.clock()
        return max(0.0, end - self.started_at)

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            comparisons=self.comparisons,
            accesses=self.accesses,
            swaps=self.swaps,
            writes=self.writes,
            elapsed=self.elapsed(),
        )
