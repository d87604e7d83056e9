"""Constants for the run-and-jump mode (jump over cacti, duck under birds).

All speeds are per frame and accelerations per frame squared at the nominal
frame rate. The y axis points down.
"""

# =============================================================================
# PLAYER
# =============================================================================
RUNNER_PLAYER_X = 50.0
RUNNER_WIDTH = 44.0
RUNNER_HEIGHT = 47.0
RUNNER_CROUCH_HEIGHT = 26.0

# Ground line is where the player's feet rest; GROUND_Y is the resting top edge
GROUND_LINE = 250.0
GROUND_Y = GROUND_LINE - RUNNER_HEIGHT

GRAVITY = 0.6
CROUCH_GRAVITY = 1.2
JUMP_VELOCITY = -12.0

# =============================================================================
# OBSTACLES
# =============================================================================
BASE_SPEED = 6.0
MAX_SPEED = 13.0
SPEED_INCREMENT = 0.001  # per frame

SPAWN_INTERVAL = 70.0  # frames between spawns at BASE_SPEED
SPAWN_JITTER = 0.3  # +/- fraction applied to each interval
SPAWN_X = 620.0

GROUND_MIN_WIDTH = 25.0
GROUND_MAX_WIDTH = 50.0
GROUND_MIN_HEIGHT = 35.0
GROUND_MAX_HEIGHT = 50.0

AERIAL_WIDTH = 46.0
AERIAL_HEIGHT = 32.0
AERIAL_CHANCE = 0.25
# Aerial obstacles only appear after this much distance has been covered
AERIAL_MIN_DISTANCE = 2000.0
# Top edges for the two aerial placements: low must be ducked, high is clear
AERIAL_LOW_Y = 195.0
AERIAL_HIGH_Y = 150.0
AERIAL_LOW_CHANCE = 0.5

MAX_LIVE_OBSTACLES = 6

# =============================================================================
# COLLISION & PROGRESSION
# =============================================================================
HITBOX_PADDING = 10.0

# Score is distance / DISTANCE_PER_POINT
DISTANCE_PER_POINT = 10.0

# Day/night flips every N points
ERA_THRESHOLD = 700
