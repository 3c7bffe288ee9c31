"""sortcast: classic sorting algorithms with a paced, observable event stream."""

from sortcast.catalog import ALGORITHMS, AlgorithmInfo, describe, get_algorithm
from sortcast.controller import Run, RunController, RunState
from sortcast.errors import (
    IndexOutOfRange,
    InvalidDatasetError,
    InvalidSpeedError,
    SortcastError,
    UnknownAlgorithmError,
)
from sortcast.events import CancellationToken, Emitter, Event, EventKind, Mark
from sortcast.metrics import Metrics, MetricsSnapshot
from sortcast.sequence import InstrumentedSequence

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "AlgorithmInfo",
    "CancellationToken",
    "Emitter",
    "Event",
    "EventKind",
    "IndexOutOfRange",
    "InstrumentedSequence",
    "InvalidDatasetError",
    "InvalidSpeedError",
    "Mark",
    "Metrics",
    "MetricsSnapshot",
    "Run",
    "RunController",
    "RunState",
    "SortcastError",
    "UnknownAlgorithmError",
    "describe",
    "get_algorithm",
]
