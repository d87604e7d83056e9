"""Constants for the gap-flyer mode (tap to flap through pipe gaps).

All speeds are per frame and accelerations per frame squared at the nominal
frame rate. The y axis points down: 0 is the top of the play field.
"""

# =============================================================================
# PLAYER
# =============================================================================
FLYER_PLAYER_X = 50.0
FLYER_START_Y = 250.0
FLYER_WIDTH = 34.0
FLYER_HEIGHT = 24.0

GRAVITY = 0.6
FLAP_FORCE = -8.0  # Negative because y grows downward

# Visual tilt is 0.1 rad per unit of vertical velocity, capped at 45 degrees
TILT_PER_VELOCITY = 0.1

# Lowest valid y for the player's top edge; below this the round ends
FLOOR_Y = 480.0

# =============================================================================
# PIPES
# =============================================================================
PIPE_SPEED = 3.5
PIPE_SPAWN_INTERVAL = 90.0  # 1500 ms at 60 fps
PIPE_WIDTH = 52.0
PIPE_GAP = 160.0
PIPE_SPAWN_X = 400.0
MIN_PIPE_HEIGHT = 50
MAX_PIPE_HEIGHT = 300

# Pipes are drawn past the screen edges; collision boxes extend the same way
PIPE_OVERHANG = 600.0

MAX_LIVE_PIPES = 8

# =============================================================================
# PROGRESSION
# =============================================================================
# Speed steps up every N points, up to a ceiling
SPEED_STEP = 0.25
SPEED_STEP_EVERY = 10
MAX_PIPE_SPEED = 6.0

# Day/night flips every N points
ERA_THRESHOLD = 25
