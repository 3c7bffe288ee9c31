# ============================================================
# ===================== DATASET SETTINGS =====================
# ============================================================

DATASET_SIZE = 100
MIN_VALUE    = 1

# ============================================================
# ====================== PACING SETTINGS =====================
# ============================================================
#
# Each suspension point sleeps for  max(MIN_DELAY_MS, PACE_MS / speed)
# milliseconds. speed=50 gives 2 ms per step, speed=0.1 gives a full second.

DEFAULT_SPEED = 50.0
MIN_SPEED     = 0.1
MAX_SPEED     = 100.0
PACE_MS       = 100.0
MIN_DELAY_MS  = 1.0

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================
#
# Values are mapped linearly onto [FREQ_LOW, FREQ_HIGH] over the current
# dataset range. Each tone is a short sine burst with a raised-cosine
# (Hann) attack and release to avoid clicks.

ENABLE_SOUND  = True
FREQ_LOW      = 100.0
FREQ_HIGH     = 1100.0
TONE_DURATION = 0.05
TONE_ATTACK   = 0.01
TONE_RELEASE  = 0.02
TONE_GAIN     = 0.1
SAMPLE_RATE   = 44100
CHUNK_SIZE    = 512
TRIGGER_MIN_INTERVAL = 0.035

# ============================================================
# ========================= WINDOW ===========================
# ============================================================

WINDOW_WIDTH  = 1100
WINDOW_HEIGHT = 680
FPS           = 60
HUD_HEIGHT    = 110
INFO_PANEL_WIDTH = 340
INFO_LINE_HEIGHT = 15
BAR_SPACING   = 1

BACKGROUND_COLOR = (5, 5, 10)
ACTIVE_COLOR     = (255, 60, 60)
MINIMUM_COLOR    = (60, 220, 90)
PIVOT_COLOR      = (70, 110, 255)
SORTED_COLOR     = (60, 255, 60)
UI_TEXT          = (215, 215, 228)
UI_SUBTEXT       = (105, 105, 130)
UI_ACCENT        = (255, 55, 55)
