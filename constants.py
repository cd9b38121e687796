from nbody import config

# --- Constants ---
WIDTH, HEIGHT = config.WIDTH, config.HEIGHT
FPS = 60
DT = config.DT

# --- Colors ---
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREY = (125, 125, 125)
TEXT_COLOR = (20, 20, 20)

FROZEN_CORE_FACTOR = 0.5
