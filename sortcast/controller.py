"""Run lifecycle: start / cancel, pacing, and the finishing sweep.

One :class:`RunController` owns the dataset, the emitter and the metrics.
At most one run is active at a time; that is enforced by a single
``_active`` flag checked under a lock before anything is mutated, so
extra start requests are simply dropped.

The driving loop advances the algorithm generator one suspension point
at a time, sleeping ``max(1, 100 / speed)`` milliseconds between steps.
Speed is re-read at every step.
"""

from __future__ import annotations

import logging
import numbers
import random
import threading
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from sortcast import settings
from sortcast.catalog import AlgorithmInfo, get_algorithm
from sortcast.errors import InvalidDatasetError, InvalidSpeedError
from sortcast.events import CancellationToken, Emitter, Mark, Observer
from sortcast.metrics import Metrics, MetricsSnapshot
from sortcast.sequence import InstrumentedSequence

logger = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    CANCELLING = "cancelling"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Run:
    algorithm: str
    speed: float
    state: RunState = RunState.RUNNING
    started_at: float | None = None
    finished_at: float | None = None


def validate_dataset(values: Iterable[int]) -> list[int]:
    """Return *values* as a list, or raise :class:`InvalidDatasetError`."""
    data = list(values)
    if not data:
        raise InvalidDatasetError("dataset is empty")
    for v in data:
        if isinstance(v, bool) or not isinstance(v, numbers.Integral):
            raise InvalidDatasetError(f"dataset values must be integers, got {v!r}")
        if v < settings.MIN_VALUE:
            raise InvalidDatasetError(f"dataset values must be positive, got {v}")
    if len(set(data)) != len(data):
        raise InvalidDatasetError("dataset values must be unique")
    return [int(v) for v in data]


def shuffled_range(size: int, rng: random.Random | None = None) -> list[int]:
    if size < 1:
        raise InvalidDatasetError(f"dataset size must be at least 1, got {size}")
    values = list(range(settings.MIN_VALUE, settings.MIN_VALUE + size))
    (rng or random).shuffle(values)
    return values


class RunController:
    def __init__(
        self,
        dataset: Iterable[int] | None = None,
        speed: float = settings.DEFAULT_SPEED,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.metrics = Metrics(clock)
        self.emitter = Emitter(self.metrics)
        self._sleep = sleep
        self._token = CancellationToken()
        self._guard = threading.Lock()
        self._active = False
        self._thread: threading.Thread | None = None
        self.current: Run | None = None
        self._speed = settings.DEFAULT_SPEED
        self.set_speed(speed)
        if dataset is None:
            dataset = shuffled_range(settings.DATASET_SIZE)
        self._sequence = InstrumentedSequence(validate_dataset(dataset), self.emitter, self.metrics)

    # ---------------- observation ----------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self.emitter.subscribe(observer)

    @property
    def state(self) -> RunState:
        return self.current.state if self.current is not None else RunState.IDLE

    @property
    def is_running(self) -> bool:
        return self._active

    @property
    def dataset(self) -> list[int]:
        return self._sequence.values()

    def snapshot(self) -> MetricsSnapshot:
        return self.metrics.snapshot()

    # ---------------- settings ----------------

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not value > 0:
            raise InvalidSpeedError(f"speed must be a positive number, got {value!r}")
        self._speed = float(value)

    def delay(self) -> float:
        """Seconds to pause at the next suspension point."""
        return max(settings.MIN_DELAY_MS, settings.PACE_MS / self._speed) / 1000.0

    def set_dataset(self, values: Iterable[int]) -> bool:
        data = validate_dataset(values)
        with self._guard:
            if self._active:
                logger.debug("Ignoring dataset change while a run is active")
                return False
            self._sequence = InstrumentedSequence(data, self.emitter, self.metrics)
        return True

    def randomize_dataset(self, size: int = settings.DATASET_SIZE, rng: random.Random | None = None) -> bool:
        if self._active:
            logger.debug("Ignoring randomize request while a run is active")
            return False
        return self.set_dataset(shuffled_range(size, rng))

    # ---------------- lifecycle ----------------

    def _claim(self, info: AlgorithmInfo) -> bool:
        with self._guard:
            if self._active:
                logger.debug("Ignoring start of %s: %s is still active", info.key, self.current.algorithm)
                return False
            self._active = True
            self._token.reset()
            self.metrics.begin()
            self.current = Run(info.key, self._speed, started_at=self.metrics.started_at)
        logger.info("Starting %s on %d values at speed %g", info.name, len(self._sequence), self._speed)
        return True

    def start(self, algorithm: str) -> bool:
        """Drive *algorithm* on a worker thread; ``False`` if a run is already active."""
        info = get_algorithm(algorithm)
        if not self._claim(info):
            return False
        self._thread = threading.Thread(target=self._drive, args=(info,), name=f"sortcast-{info.key}", daemon=True)
        self._thread.start()
        return True

    def run(self, algorithm: str) -> RunState | None:
        """Drive *algorithm* on the calling thread; ``None`` if a run is already active."""
        info = get_algorithm(algorithm)
        if not self._claim(info):
            return None
        self._drive(info)
        return self.current.state

    def cancel(self) -> bool:
        with self._guard:
            if not self._active or self.current.state is not RunState.RUNNING:
                logger.debug("Ignoring cancel: no run in progress")
                return False
            self._token.cancel()
            self.metrics.finish()
            self.current.state = RunState.CANCELLING
            self.current.finished_at = self.metrics.finished_at
        logger.info("Cancelling %s", self.current.algorithm)
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Join the worker thread; ``True`` once no run is being driven."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            return not thread.is_alive()
        return True

    # ---------------- driving ----------------

    def _pump(self, steps: Iterator[None]) -> bool:
        for _ in steps:
            if not self._token.cancelled:
                self._sleep(self.delay())
            if self._token.cancelled:
                steps.close()
                return False
        return not self._token.cancelled

    def _sweep(self) -> bool:
        seq = self._sequence
        for i in range(len(seq)):
            if self._token.cancelled:
                return False
            self.emitter.highlight(i, mark=Mark.SORTED, values=(seq.peek(i),))
            self._sleep(self.delay())
            self.emitter.clear(i)
        return not self._token.cancelled

    def _drive(self, info: AlgorithmInfo) -> None:
        run = self.current
        steps = info.sort(self._sequence, self.emitter, self._token)
        try:
            finished = self._pump(steps)
            if finished:
                self.metrics.finish()
                run.finished_at = self.metrics.finished_at
                logger.info("%s finished: %s", info.name, self.metrics.snapshot().describe())
                finished = self._sweep()
            self.metrics.finish()
            run.finished_at = self.metrics.finished_at
            # a cancel accepted after the sweep still wins
            with self._guard:
                finished = finished and not self._token.cancelled
                run.state = RunState.COMPLETED if finished else RunState.CANCELLED
            if finished:
                self.emitter.done()
            else:
                logger.info("%s cancelled: %s", info.name, self.metrics.snapshot().describe())
                self.emitter.cancelled()
        except Exception:
            # hand held values back before the error leaves the run
            steps.close()
            with self._guard:
                run.state = RunState.CANCELLED
            self.metrics.finish()
            run.finished_at = self.metrics.finished_at
            logger.exception("%s aborted", info.name)
            raise
        finally:
            with self._guard:
                self._active = False
