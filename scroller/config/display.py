"""Display and timing configuration constants."""

# Nominal display rate. One unit of simulation ``dt`` is one frame at this rate.
FRAME_RATE = 60
FRAME_MS = 1000.0 / FRAME_RATE

# Largest dt a single tick may consume (in frames). Longer host stalls are
# clamped so a paused tab does not teleport the world on resume.
MAX_FRAME_DELTA = 3.0

# Window sizes for the pygame host, per mode
FLYER_SCREEN_WIDTH = 400
FLYER_SCREEN_HEIGHT = 560
RUNNER_SCREEN_WIDTH = 600
RUNNER_SCREEN_HEIGHT = 300

# Colors used by the pygame host
SKY_COLOR = (113, 197, 207)
NIGHT_SKY_COLOR = (28, 32, 58)
GROUND_COLOR = (222, 216, 149)
PLAYER_COLOR = (250, 204, 21)
OBSTACLE_COLOR = (84, 160, 52)
AERIAL_OBSTACLE_COLOR = (120, 84, 60)
TEXT_COLOR = (255, 255, 255)
