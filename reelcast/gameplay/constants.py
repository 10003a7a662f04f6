"""
Game constants - fixed geometry and physics in one place.
NO UI DEPENDENCIES.

Tunables that designers change (timings, divisors, payouts) live in
reelcast.config instead.
"""

# =============================================================================
# LOGICAL SCREEN
# =============================================================================
GAME_WIDTH = 360    # px, logical canvas
GAME_HEIGHT = 640   # px

HORIZON_Y = 180     # where the sky meets the water
NEAR_Y = 400        # bobber y when it is right at the shore

# =============================================================================
# PERCENTAGES
# =============================================================================
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# =============================================================================
# SPLASH PARTICLES (per-frame units)
# =============================================================================
SPLASH_PARTICLE_COUNT = 8
SPLASH_ORIGIN_X = GAME_WIDTH / 2
SPLASH_ORIGIN_Y = HORIZON_Y + 50
SPLASH_SPREAD_X = 30          # px, spawn jitter around the origin
SPLASH_SPEED_X = 6            # px/frame, full horizontal velocity range
SPLASH_LIFT_MIN = 2           # px/frame upward
SPLASH_LIFT_RANDOM = 4        # px/frame extra upward
PARTICLE_GRAVITY = 0.2        # px/frame^2
PARTICLE_DECAY = 0.03         # life lost per frame

# =============================================================================
# RESULT ANIMATION
# =============================================================================
CAUGHT_FISH_START_Y = GAME_HEIGHT + 100
CAUGHT_FISH_REST_Y = GAME_HEIGHT * 0.4
CAUGHT_FISH_RISE_DIVISOR = 2  # ms per px

# =============================================================================
# REELING WOBBLE
# =============================================================================
WOBBLE_FIGHT_PERIOD = 50      # ms divisor for the sinusoid
WOBBLE_FIGHT_BASE = 15        # px
WOBBLE_FIGHT_SCALE = 10       # px per unit of fight intensity
WOBBLE_HOLD_PERIOD = 200
WOBBLE_HOLD_AMPLITUDE = 3
WOBBLE_DRIFT_PERIOD = 1000
WOBBLE_DRIFT_AMPLITUDE = 5

# =============================================================================
# ROD
# =============================================================================
ROD_LENGTH = 360
ROD_PIVOT_X = 180
ROD_PIVOT_Y = 670             # below the canvas, only the tip section shows
