"""Tests for pitch mapping, synthesis and the tone observer."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import FakeClock
from sortcast import settings
from sortcast.events import Event, EventKind, Mark
from sortcast.tones import ToneObserver, envelope, synthesize, to_pcm16_stereo, value_to_frequency


class TestFrequency:
    @pytest.mark.parametrize(("value", "freq"), [(1, 100.0), (100, 1100.0), (0, 100.0), (500, 1100.0)])
    def test_endpoints_and_clamping(self, value: int, freq: float) -> None:
        assert value_to_frequency(value, 1, 100) == pytest.approx(freq)

    def test_linear(self) -> None:
        assert value_to_frequency(6, 1, 11) == pytest.approx(600.0)

    def test_degenerate_range(self) -> None:
        assert value_to_frequency(5, 5, 5) == settings.FREQ_LOW

    def test_monotonic(self) -> None:
        freqs = [value_to_frequency(v, 1, 50) for v in range(1, 51)]
        assert freqs == sorted(freqs)


class TestSynthesis:
    def test_length_and_bounds(self) -> None:
        mono = synthesize(440.0, duration=0.05, sample_rate=8000, gain=0.1)
        assert mono.dtype == np.float64
        assert len(mono) == 400
        assert np.max(np.abs(mono)) <= 0.1 + 1e-12

    def test_ramps_start_and_end_quiet(self) -> None:
        mono = synthesize(440.0)
        assert abs(mono[0]) < 1e-9
        assert abs(mono[-1]) < 1e-3

    def test_envelope_shape(self) -> None:
        env = envelope(100, 10, 20)
        assert env[0] == 0.0
        assert np.all(env[10:80] == 1.0)
        assert np.all(np.diff(env[:10]) > 0)
        assert np.all(np.diff(env[80:]) < 0)
        assert np.all((env >= 0.0) & (env <= 1.0))

    def test_pcm_is_stereo_int16(self) -> None:
        pcm = to_pcm16_stereo(np.array([0.0, 0.5, -1.0, 2.0]))
        assert pcm.dtype == np.int16
        assert pcm.shape == (4, 2)
        assert np.array_equal(pcm[:, 0], pcm[:, 1])
        assert pcm[3, 0] == 32767
        assert pcm[2, 0] == -32767


class TestToneObserver:
    def make(self, clock: FakeClock, **kwargs) -> tuple[ToneObserver, list[float]]:
        played: list[float] = []
        return ToneObserver(played.append, lo=1, hi=11, clock=clock, **kwargs), played

    def test_plays_first_value(self, clock: FakeClock) -> None:
        tones, played = self.make(clock)
        tones(Event(EventKind.SWAP, (0, 1), (11, 1)))
        assert played == [pytest.approx(1100.0)]

    @pytest.mark.parametrize(
        "event",
        [
            Event(EventKind.DONE),
            Event(EventKind.HIGHLIGHT_OFF, (3,)),
            Event(EventKind.HIGHLIGHT_ON, (3,), (), Mark.ACTIVE),
            Event(EventKind.CANCELLED),
        ],
    )
    def test_silent_events(self, clock: FakeClock, event: Event) -> None:
        tones, played = self.make(clock)
        tones(event)
        assert played == []

    def test_sweep_highlight_is_voiced(self, clock: FakeClock) -> None:
        tones, played = self.make(clock)
        tones(Event(EventKind.HIGHLIGHT_ON, (0,), (1,), Mark.SORTED))
        assert played == [pytest.approx(100.0)]

    def test_throttled(self, clock: FakeClock) -> None:
        tones, played = self.make(clock, min_interval=0.05)
        tones(Event(EventKind.TONE, (0,), (1,)))
        clock.advance(0.01)
        tones(Event(EventKind.TONE, (0,), (6,)))
        clock.advance(0.05)
        tones(Event(EventKind.TONE, (0,), (11,)))
        assert played == [pytest.approx(100.0), pytest.approx(1100.0)]

    def test_mute_and_range(self, clock: FakeClock) -> None:
        tones, played = self.make(clock)
        tones.enabled = False
        tones(Event(EventKind.TONE, (0,), (6,)))
        assert played == []
        tones.enabled = True
        tones.set_range(1, 6)
        tones(Event(EventKind.TONE, (0,), (6,)))
        assert played == [pytest.approx(1100.0)]
