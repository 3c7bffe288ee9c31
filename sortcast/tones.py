"""Value-to-pitch mapping and tone synthesis for the event stream.

HOW A TONE IS BUILT
===================

    freq     = FREQ_LOW + (value - lo) / (hi - lo) * (FREQ_HIGH - FREQ_LOW)
    wave[t]  = sin(2pi * freq * t / SAMPLE_RATE)
    env[t]   = 0.5 * (1 - cos(pi * t / A))          t in [0, A)        attack
             = 1                                     t in [A, N - R)    sustain
             = 0.5 * (1 + cos(pi * (t - N + R) / R)) t in [N - R, N)    release

The raised-cosine (Hann) ramps keep onsets and tails free of clicks. The
observer only picks a frequency and hands it to a sink; playing it is the
sink's business (see ``sortcast.app.MixerSink``).
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable

import numpy as np

from sortcast import settings
from sortcast.events import Event, EventKind

TWO_PI = 2.0 * math.pi

_VOICED = (EventKind.TONE, EventKind.COMPARE, EventKind.SWAP, EventKind.OVERWRITE, EventKind.HIGHLIGHT_ON)


def value_to_frequency(value: float, lo: float, hi: float,
                       freq_low: float = settings.FREQ_LOW,
                       freq_high: float = settings.FREQ_HIGH) -> float:
    span = (hi - lo) or 1
    ratio = min(1.0, max(0.0, (value - lo) / span))
    return freq_low + ratio * (freq_high - freq_low)


def envelope(n: int, attack: int, release: int) -> np.ndarray:
    env = np.ones(n, dtype=np.float64)
    t = np.arange(n, dtype=np.float64)
    attack = max(1, min(attack, n))
    release = max(1, min(release, n))

    a_mask = t < attack
    env[a_mask] = 0.5 * (1.0 - np.cos(math.pi * t[a_mask] / attack))

    rel_start = n - release
    r_mask = t >= rel_start
    env[r_mask] = np.minimum(env[r_mask], 0.5 * (1.0 + np.cos(math.pi * (t[r_mask] - rel_start) / release)))
    return np.maximum(env, 0.0)


def synthesize(freq: float, duration: float = settings.TONE_DURATION,
               sample_rate: int = settings.SAMPLE_RATE, gain: float = settings.TONE_GAIN) -> np.ndarray:
    """Return one mono tone as float64 samples in ``[-gain, gain]``."""
    n = max(1, int(duration * sample_rate))
    t = np.arange(n, dtype=np.float64)
    wave = np.sin(TWO_PI * freq * t / sample_rate)
    env = envelope(n, int(settings.TONE_ATTACK * sample_rate), int(settings.TONE_RELEASE * sample_rate))
    return wave * env * gain


def to_pcm16_stereo(mono: np.ndarray) -> np.ndarray:
    """Convert float samples to an int16 ``(n, 2)`` array, L/R identical."""
    pcm = (np.clip(mono, -1.0, 1.0) * 32767).astype(np.int16)
    return np.ascontiguousarray(np.column_stack((pcm, pcm)))


class ToneObserver:
    """Event observer that turns value-carrying events into tone triggers.

    At most one trigger per ``min_interval`` seconds reaches the sink, so
    very high speeds do not flood the audio device.
    """

    def __init__(self, sink: Callable[[float], None], lo: float = settings.MIN_VALUE,
                 hi: float = settings.DATASET_SIZE, min_interval: float = settings.TRIGGER_MIN_INTERVAL,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.sink = sink
        self.lo, self.hi = lo, hi
        self.min_interval = min_interval
        self.clock = clock
        self.enabled = True
        self._last: float | None = None

    def set_range(self, lo: float, hi: float) -> None:
        self.lo, self.hi = lo, hi

    def __call__(self, event: Event) -> None:
        if not self.enabled or event.kind not in _VOICED or not event.values:
            return
        now = self.clock()
        if self._last is not None and now - self._last < self.min_interval:
            return
        self._last = now
        self.sink(value_to_frequency(event.values[0], self.lo, self.hi))
