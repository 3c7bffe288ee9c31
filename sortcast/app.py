"""pygame front end: bars, highlights, HUD and keyboard control.

The controller drives on its worker thread; events reach the window
through a queue drained once per frame, so drawing stays on the main
thread. Tones are played straight from the observer through the mixer.
"""

from __future__ import annotations

import logging
import queue
import random

import pygame

from sortcast import settings
from sortcast.catalog import ALGORITHMS, describe, get_algorithm
from sortcast.controller import RunController, shuffled_range
from sortcast.events import Event, EventKind, Mark
from sortcast.tones import ToneObserver, synthesize, to_pcm16_stereo

logger = logging.getLogger(__name__)

MARK_COLORS = {
    Mark.ACTIVE:  settings.ACTIVE_COLOR,
    Mark.MINIMUM: settings.MINIMUM_COLOR,
    Mark.PIVOT:   settings.PIVOT_COLOR,
    Mark.SORTED:  settings.SORTED_COLOR,
}

SPEED_STEPS = [settings.MIN_SPEED, 0.25, 0.5, 1, 2, 5, 10, 20, 35, 50, 75, settings.MAX_SPEED]

NUMBER_KEYS = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
               pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9, pygame.K_0]

# ============================================================
# ====================== COLOR / DRAW ========================
# ============================================================

def value_to_color(value, max_value):
    r = value / max_value
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


class HighlightTracker:
    """Folds HIGHLIGHT_ON / HIGHLIGHT_OFF events into ``index -> Mark``."""

    def __init__(self) -> None:
        self.marks: dict[int, Mark] = {}
        self.last_terminal: EventKind | None = None

    def apply(self, event: Event) -> None:
        if event.kind is EventKind.HIGHLIGHT_ON:
            for i in event.indices:
                self.marks[i] = event.mark or Mark.ACTIVE
        elif event.kind is EventKind.HIGHLIGHT_OFF:
            for i in event.indices:
                self.marks.pop(i, None)
        elif event.terminal:
            self.marks.clear()
            self.last_terminal = event.kind


def next_speed(current: float, direction: int) -> float:
    """Step to the neighbouring entry of SPEED_STEPS."""
    if direction > 0:
        bigger = [s for s in SPEED_STEPS if s > current]
        return float(bigger[0]) if bigger else float(SPEED_STEPS[-1])
    smaller = [s for s in SPEED_STEPS if s < current]
    return float(smaller[-1]) if smaller else float(SPEED_STEPS[0])


def draw_bars(screen, array, marks):
    top = settings.HUD_HEIGHT
    n = len(array)
    hi = max(array)
    bw = settings.WINDOW_WIDTH / n
    for i, v in enumerate(array):
        h = (v / hi) * (settings.WINDOW_HEIGHT - top - 10)
        mark = marks.get(i)
        c = MARK_COLORS[mark] if mark else value_to_color(v, hi)
        pygame.draw.rect(screen, c, (i * bw, settings.WINDOW_HEIGHT - h, max(1, bw - settings.BAR_SPACING), h))


def build_fonts():
    mono = "consolas,couriernew,lucidaconsole"
    sans = "segoeui,tahoma,arial"
    return dict(big=pygame.font.SysFont(sans, 22), small=pygame.font.SysFont(sans, 14),
                mono_sm=pygame.font.SysFont(mono, 13))


# ============================================================
# ========================= SOUND ============================
# ============================================================

class MixerSink:
    """Plays tones through pygame.mixer; one cached Sound per whole Hz."""

    def __init__(self) -> None:
        self._cache: dict[int, pygame.mixer.Sound] = {}

    def __call__(self, freq: float) -> None:
        key = int(round(freq))
        snd = self._cache.get(key)
        if snd is None:
            snd = pygame.mixer.Sound(buffer=to_pcm16_stereo(synthesize(key)).tobytes())
            self._cache[key] = snd
        snd.play()


def init_sound():
    pygame.mixer.pre_init(settings.SAMPLE_RATE, -16, 2, settings.CHUNK_SIZE)
    pygame.mixer.init()


# ============================================================
# ========================== APP =============================
# ============================================================

class App:
    def __init__(self, screen, fonts, controller: RunController, algorithm: str, size: int,
                 tones: ToneObserver | None = None) -> None:
        self.screen = screen
        self.fonts = fonts
        self.controller = controller
        self.algorithm = get_algorithm(algorithm)
        self.size = size
        self.tones = tones
        self.tracker = HighlightTracker()
        self.show_info = True
        self._events: queue.SimpleQueue[Event] = queue.SimpleQueue()
        controller.subscribe(self._events.put)
        if tones is not None:
            controller.subscribe(tones)
            self._sync_tone_range()

    def _sync_tone_range(self):
        data = self.controller.dataset
        self.tones.set_range(min(data), max(data))

    def handle_key(self, key) -> bool:
        """React to one key press; ``False`` means quit."""
        c = self.controller
        if key == pygame.K_q:
            c.cancel()
            return False
        if key in NUMBER_KEYS and not c.is_running:
            _, k = ALGORITHMS[NUMBER_KEYS.index(key)]
            self.algorithm = get_algorithm(k)
        elif key == pygame.K_SPACE:
            c.start(self.algorithm.key)
        elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            c.cancel()
        elif key == pygame.K_r:
            if c.randomize_dataset(self.size):
                self.tracker.marks.clear()
                if self.tones is not None:
                    self._sync_tone_range()
        elif key == pygame.K_UP:
            c.set_speed(next_speed(c.speed, +1))
        elif key == pygame.K_DOWN:
            c.set_speed(next_speed(c.speed, -1))
        elif key == pygame.K_i:
            self.show_info = not self.show_info
        elif key == pygame.K_m and self.tones is not None:
            self.tones.enabled = not self.tones.enabled
        return True

    def drain(self):
        while True:
            try:
                self.tracker.apply(self._events.get_nowait())
            except queue.Empty:
                return

    def draw_hud(self):
        s, f, c = self.screen, self.fonts, self.controller
        snap = c.snapshot()
        info = self.algorithm
        state = c.state.value.upper()
        s.blit(f['big'].render(info.name, True, settings.UI_ACCENT), (12, 10))
        s.blit(f['small'].render(
            f"{state}   speed {c.speed:g}   delay {c.delay() * 1000:.1f} ms", True, settings.UI_TEXT), (12, 40))
        s.blit(f['mono_sm'].render(
            f"comparisons {snap.comparisons}   accesses {snap.accesses}   "
            f"swaps {snap.swaps}   writes {snap.writes}   elapsed {snap.format_elapsed()}",
            True, settings.UI_TEXT), (12, 62))
        sound = "" if self.tones is None else ("   M mute" if self.tones.enabled else "   M unmute")
        s.blit(f['small'].render(
            "1-0 algorithm   SPACE start   ESC stop   R shuffle   UP/DOWN speed   I info   Q quit" + sound,
            True, settings.UI_SUBTEXT), (12, settings.HUD_HEIGHT - 22))
        if self.show_info:
            self.draw_info()

    def draw_info(self):
        """Complexity and pseudocode panel in the top-right corner."""
        y = 10
        for line in describe(self.algorithm.key).splitlines():
            if line:
                self.screen.blit(self.fonts['mono_sm'].render(line, True, settings.UI_SUBTEXT),
                                 (settings.WINDOW_WIDTH - settings.INFO_PANEL_WIDTH, y))
            y += settings.INFO_LINE_HEIGHT

    def draw(self):
        self.screen.fill(settings.BACKGROUND_COLOR)
        draw_bars(self.screen, self.controller.dataset, self.tracker.marks)
        self.draw_hud()
        pygame.display.flip()

    def loop(self):
        clock = pygame.time.Clock()
        while True:
            clock.tick(settings.FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    self.controller.cancel()
                    return
                if ev.type == pygame.KEYDOWN and not self.handle_key(ev.key):
                    return
            self.drain()
            self.draw()


def run_app(algorithm: str, size: int, speed: float, seed=None, sound: bool = settings.ENABLE_SOUND) -> int:
    controller = RunController(shuffled_range(size, random.Random(seed)), speed=speed)
    pygame.init()
    tones = None
    if sound:
        try:
            init_sound()
            tones = ToneObserver(MixerSink())
        except pygame.error as e:
            logger.warning("Sound disabled: %s", e)
    screen = pygame.display.set_mode((settings.WINDOW_WIDTH, settings.WINDOW_HEIGHT))
    pygame.display.set_caption("sortcast")
    app = App(screen, build_fonts(), controller, algorithm, size, tones)
    try:
        app.loop()
    finally:
        controller.wait(1.0)
        pygame.quit()
    return 0
