"""The integer container every algorithm sorts through.

Counting rules (they decide the numbers users see):

    read(i)             1 access
    write(i, v)         1 access
    compare(i, j)       1 comparison, 2 accesses
    swap(i, j)          4 accesses (two reads, two writes)

Values held outside the sequence (an insertion key, merge buffers) are
compared with ``compare_value`` / ``compare_held`` under the same
comparison rule.
"""

from __future__ import annotations

from collections.abc import Iterable

from sortcast.errors import IndexOutOfRange
from sortcast.events import Emitter, Event, EventKind
from sortcast.metrics import Metrics


def _sign(a: int, b: int) -> int:
    return (a > b) - (a < b)


class InstrumentedSequence:
    def __init__(self, values: Iterable[int], emitter: Emitter | None = None, metrics: Metrics | None = None) -> None:
        self._data = list(values)
        if metrics is None:
            metrics = emitter.metrics if emitter is not None and emitter.metrics is not None else Metrics()
        if emitter is None:
            emitter = Emitter(metrics)
        self.emitter = emitter
        self.metrics = metrics

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"InstrumentedSequence({self._data!r})"

    def _check(self, i: int) -> None:
        if not 0 <= i < len(self._data):
            raise IndexOutOfRange(f"index {i} outside [0, {len(self._data)})")

    # ---------------- uncounted inspection ----------------

    def peek(self, i: int) -> int:
        self._check(i)
        return self._data[i]

    def values(self) -> list[int]:
        return list(self._data)

    def max_value(self) -> int:
        return max(self._data)

    # ---------------- counted operations ----------------

    def read(self, i: int) -> int:
        self._check(i)
        value = self._data[i]
        self.metrics.accesses += 1
        self.emitter.emit(Event(EventKind.TONE, (i,), (value,)))
        return value

    def write(self, i: int, value: int) -> None:
        self._check(i)
        self._data[i] = value
        self.metrics.accesses += 1
        self.emitter.emit(Event(EventKind.OVERWRITE, (i,), (value,)))

    def compare(self, i: int, j: int) -> int:
        """Return -1, 0 or 1 as ``seq[i]`` is less than, equal to or greater than ``seq[j]``."""
        self._check(i)
        self._check(j)
        a, b = self._data[i], self._data[j]
        self.metrics.comparisons += 1
        self.metrics.accesses += 2
        self.emitter.emit(Event(EventKind.COMPARE, (i, j), (a, b)))
        return _sign(a, b)

    def compare_value(self, i: int, value: int) -> int:
        """Compare ``seq[i]`` against a value currently held outside the sequence."""
        self._check(i)
        a = self._data[i]
        self.metrics.comparisons += 1
        self.metrics.accesses += 2
        self.emitter.emit(Event(EventKind.COMPARE, (i,), (a, value)))
        return _sign(a, value)

    def compare_held(self, a: int, b: int) -> int:
        """Compare two values that both live in auxiliary buffers."""
        self.metrics.comparisons += 1
        self.metrics.accesses += 2
        self.emitter.emit(Event(EventKind.COMPARE, (), (a, b)))
        return _sign(a, b)

    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        self._data[i], self._data[j] = self._data[j], self._data[i]
        self.metrics.accesses += 4
        self.emitter.emit(Event(EventKind.SWAP, (i, j), (self._data[i], self._data[j])))

    def record_buffer_access(self, count: int = 1) -> None:
        self.metrics.accesses += count
