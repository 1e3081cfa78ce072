# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They cover the rendering side of the application (window defaults, glow
appearance, frame rate) rather than the experimental configuration, which
lives in config.json.
"""

# Window defaults, used when config.json does not override them.
DEFAULT_WINDOW_WIDTH = 800   # Pixels
DEFAULT_WINDOW_HEIGHT = 600  # Pixels
DEFAULT_TITLE = "Bouncing Balls"
FPS = 60
BACKGROUND_COLOR = (0, 0, 0) # Black

# --- Glow Effect ---
# Ratio of the glow size to the ball radius. 1.5 turns a 20px ball into a 30px glow.
GLOW_RADIUS_RATIO = 1.5
# Opacity of the glow layer (0-1). The ball itself is drawn fully opaque.
GLOW_ALPHA = 0.2

CONFIG_PATH = 'config.json'
