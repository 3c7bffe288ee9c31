"""The ten sorting algorithms as suspendable step generators.

Every algorithm has the signature ``algo(seq, emitter, token)`` and is a
generator: each bare ``yield`` is a suspension point where the driver
paces and may cancel. Around every comparison or move the algorithm
emits ``HIGHLIGHT_ON`` before suspending and ``HIGHLIGHT_OFF`` right
after the operation.

Algorithms holding values outside the sequence (insertion key, merge
buffers, radix output) write them back in a ``finally`` block, so closing
the generator at any suspension point leaves a permutation behind. Only
that unwind write happens unlit; every regular write is highlighted.
"""

from __future__ import annotations

from collections.abc import Iterator

from sortcast.events import CancellationToken, Emitter, Mark
from sortcast.sequence import InstrumentedSequence

Steps = Iterator[None]


def _touch(emitter: Emitter, *indices: int, mark: Mark = Mark.ACTIVE) -> Steps:
    """Announce the indices about to be touched, then suspend."""
    emitter.highlight(*indices, mark=mark)
    yield


# ============================================================
# ================== ADJACENT-SWAP FAMILY ====================
# ============================================================

def bubble_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    n = len(seq)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if token.cancelled:
                return
            yield from _touch(emitter, j, j + 1)
            if seq.compare(j, j + 1) > 0:
                seq.swap(j, j + 1)
            emitter.clear(j, j + 1)


def cocktail_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    start, end = 0, len(seq) - 1
    swapped = True
    while swapped:
        swapped = False
        for i in range(start, end):
            if token.cancelled:
                return
            yield from _touch(emitter, i, i + 1)
            if seq.compare(i, i + 1) > 0:
                seq.swap(i, i + 1)
                swapped = True
            emitter.clear(i, i + 1)
        # a clean forward sweep means sorted; skip the backward half
        if not swapped:
            return
        swapped = False
        end -= 1
        for i in range(end - 1, start - 1, -1):
            if token.cancelled:
                return
            yield from _touch(emitter, i, i + 1)
            if seq.compare(i, i + 1) > 0:
                seq.swap(i, i + 1)
                swapped = True
            emitter.clear(i, i + 1)
        start += 1


def gnome_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    n = len(seq)
    i = 1
    while i < n:
        if token.cancelled:
            return
        yield from _touch(emitter, i - 1, i)
        if seq.compare(i, i - 1) >= 0:
            emitter.clear(i - 1, i)
            i += 1
        else:
            seq.swap(i, i - 1)
            emitter.clear(i - 1, i)
            # index 0 is in order with itself: bounce straight back to 1
            i = max(i - 1, 1)


# ============================================================
# ================== SELECTION / INSERTION ===================
# ============================================================

def selection_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    n = len(seq)
    for i in range(n - 1):
        if token.cancelled:
            return
        mi = i
        emitter.highlight(mi, mark=Mark.MINIMUM)
        for j in range(i + 1, n):
            if token.cancelled:
                return
            yield from _touch(emitter, j)
            if seq.compare(j, mi) < 0:
                emitter.clear(mi)
                mi = j
                emitter.highlight(mi, mark=Mark.MINIMUM)
            else:
                emitter.clear(j)
        if mi != i:
            yield from _touch(emitter, i, mi)
            seq.swap(i, mi)
        emitter.clear(i, mi)


def insertion_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    for i in range(1, len(seq)):
        if token.cancelled:
            return
        key = seq.read(i)
        j = i - 1
        placed = False
        try:
            while j >= 0:
                if token.cancelled:
                    return
                yield from _touch(emitter, j, j + 1)
                if seq.compare_value(j, key) <= 0:
                    emitter.clear(j, j + 1)
                    break
                seq.write(j + 1, seq.read(j))
                emitter.clear(j, j + 1)
                j -= 1
            yield from _touch(emitter, j + 1)
            seq.write(j + 1, key)
            placed = True
            emitter.clear(j + 1)
        finally:
            # unwinding mid-shift: the key still owns slot j + 1
            if not placed:
                seq.write(j + 1, key)


def shell_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    n = len(seq)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            if token.cancelled:
                return
            temp = seq.read(i)
            j = i
            placed = False
            try:
                while j >= gap:
                    if token.cancelled:
                        return
                    yield from _touch(emitter, j - gap, j)
                    if seq.compare_value(j - gap, temp) <= 0:
                        emitter.clear(j - gap, j)
                        break
                    seq.write(j, seq.read(j - gap))
                    emitter.clear(j - gap, j)
                    j -= gap
                yield from _touch(emitter, j)
                seq.write(j, temp)
                placed = True
                emitter.clear(j)
            finally:
                if not placed:
                    seq.write(j, temp)
        gap //= 2


# ============================================================
# ======================= QUICK SORT =========================
# ============================================================

def _partition(seq, emitter, token, low, high):
    """Lomuto partition of ``[low, high]`` around ``seq[high]``.

    Returns the pivot's final index, or ``None`` when cancelled.
    """
    pivot = seq.read(high)
    emitter.highlight(high, mark=Mark.PIVOT)
    i = low - 1
    for j in range(low, high):
        if token.cancelled:
            return None
        yield from _touch(emitter, j)
        if seq.compare_value(j, pivot) < 0:
            i += 1
            yield from _touch(emitter, i, j)
            seq.swap(i, j)
            emitter.clear(i, j)
        else:
            emitter.clear(j)
    if token.cancelled:
        return None
    yield from _touch(emitter, i + 1)
    seq.swap(i + 1, high)
    emitter.clear(i + 1, high)
    return i + 1


def quick_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    # explicit frame stack; popping the left range first keeps the
    # recursive visiting order
    frames = [(0, len(seq) - 1)]
    while frames:
        if token.cancelled:
            return
        low, high = frames.pop()
        if low >= high:
            continue
        pi = yield from _partition(seq, emitter, token, low, high)
        if pi is None:
            return
        frames.append((pi + 1, high))
        frames.append((low, pi - 1))


# ============================================================
# ======================= MERGE SORT =========================
# ============================================================

def _merge(seq, emitter, token, left, mid, right):
    if token.cancelled:
        return
    L = [seq.read(left + x) for x in range(mid - left + 1)]
    R = [seq.read(mid + 1 + x) for x in range(right - mid)]
    i = j = 0
    k = left
    try:
        while i < len(L) and j < len(R):
            if token.cancelled:
                return
            yield from _touch(emitter, k)
            # ties take from the left buffer: stable
            if seq.compare_held(L[i], R[j]) <= 0:
                seq.write(k, L[i]); i += 1
            else:
                seq.write(k, R[j]); j += 1
            emitter.clear(k)
            k += 1
        while i < len(L):
            if token.cancelled:
                return
            yield from _touch(emitter, k)
            seq.write(k, L[i]); i += 1
            emitter.clear(k)
            k += 1
        while j < len(R):
            if token.cancelled:
                return
            yield from _touch(emitter, k)
            seq.write(k, R[j]); j += 1
            emitter.clear(k)
            k += 1
    finally:
        # slots [k, right] still need whatever is left in the buffers
        for value in L[i:] + R[j:]:
            seq.write(k, value)
            k += 1


def _merge_sort(seq, emitter, token, left, right):
    if token.cancelled or left >= right:
        return
    mid = (left + right) // 2
    yield from _merge_sort(seq, emitter, token, left, mid)
    yield from _merge_sort(seq, emitter, token, mid + 1, right)
    yield from _merge(seq, emitter, token, left, mid, right)


def merge_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    yield from _merge_sort(seq, emitter, token, 0, len(seq) - 1)


# ============================================================
# ======================== HEAP SORT =========================
# ============================================================

def _heapify(seq, emitter, token, n, i):
    """Sift ``seq[i]`` down within the first ``n`` slots."""
    while not token.cancelled:
        largest, left, right = i, 2 * i + 1, 2 * i + 2
        if left < n:
            yield from _touch(emitter, left, largest)
            if seq.compare(left, largest) > 0:
                largest = left
            emitter.clear(left, i)
        if right < n:
            before = largest
            yield from _touch(emitter, right, before)
            if seq.compare(right, before) > 0:
                largest = right
            emitter.clear(right, before)
        if largest == i:
            return
        yield from _touch(emitter, i, largest)
        seq.swap(i, largest)
        emitter.clear(i, largest)
        i = largest


def heap_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    n = len(seq)
    for i in range(n // 2 - 1, -1, -1):
        if token.cancelled:
            return
        yield from _heapify(seq, emitter, token, n, i)
    for end in range(n - 1, 0, -1):
        if token.cancelled:
            return
        yield from _touch(emitter, 0, end)
        seq.swap(0, end)
        emitter.clear(0, end)
        yield from _heapify(seq, emitter, token, end, 0)


# ============================================================
# ==================== LSD RADIX (BASE 10) ===================
# ============================================================

RADIX = 10


def radix_pass(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken, exp: int) -> Steps:
    """One stable counting-sort pass keyed on digit ``value // exp % 10``.

    Counting and placement are bulk work and never suspend; only the
    write-back into the sequence is paced.
    """
    n = len(seq)
    output = [0] * n
    count = [0] * RADIX
    for i in range(n):
        count[seq.read(i) // exp % RADIX] += 1
    for d in range(1, RADIX):
        count[d] += count[d - 1]
    # right-to-left keeps equal digits in input order
    for i in range(n - 1, -1, -1):
        value = seq.read(i)
        digit = value // exp % RADIX
        output[count[digit] - 1] = value
        seq.record_buffer_access()
        count[digit] -= 1

    i = 0
    try:
        while i < n:
            if token.cancelled:
                return
            yield from _touch(emitter, i)
            seq.record_buffer_access()
            seq.write(i, output[i])
            emitter.clear(i)
            i += 1
    finally:
        # finish the write-back so no value is lost or duplicated
        while i < n:
            seq.record_buffer_access()
            seq.write(i, output[i])
            i += 1


def radix_sort(seq: InstrumentedSequence, emitter: Emitter, token: CancellationToken) -> Steps:
    if not len(seq):
        return
    top = seq.max_value()
    exp = 1
    while top // exp > 0:
        if token.cancelled:
            return
        yield from radix_pass(seq, emitter, token, exp)
        exp *= RADIX
