"""Shared fixtures for the sortcast test suite.

Nothing here opens a window or an audio device; controllers are built
with a sleep that returns immediately so runs finish in microseconds.
"""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from sortcast.controller import RunController
from sortcast.events import CancellationToken, Emitter, Event, EventKind
from sortcast.metrics import Metrics
from sortcast.sequence import InstrumentedSequence


class Recorder:
    """Observer that keeps every event it is handed."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of(self, *kinds: EventKind) -> list[Event]:
        return [e for e in self.events if e.kind in kinds]

    @property
    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.events]


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


class Harness:
    """A sequence, emitter and token wired together with a recorder."""

    def __init__(self, values) -> None:
        self.metrics = Metrics()
        self.emitter = Emitter(self.metrics)
        self.seq = InstrumentedSequence(values, self.emitter, self.metrics)
        self.token = CancellationToken()
        self.recorder = Recorder()
        self.emitter.subscribe(self.recorder)

    def drive(self, algorithm) -> "Harness":
        for _ in algorithm(self.seq, self.emitter, self.token):
            pass
        return self


def no_sleep(_seconds: float) -> None:
    pass


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_controller():
    """Factory for controllers that never really sleep."""

    def factory(dataset=(3, 1, 2), **kwargs) -> RunController:
        kwargs.setdefault("sleep", no_sleep)
        return RunController(list(dataset), **kwargs)

    return factory
