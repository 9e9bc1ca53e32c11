from dataclasses import dataclass
from typing import Optional

# ----- Window & grid -----
WIDTH, HEIGHT = 900, 600
CELL_SIZE = 15
GRID_W, GRID_H = WIDTH // CELL_SIZE, HEIGHT // CELL_SIZE

# ----- Colors -----
BG    = (0, 0, 0)
GREEN = (0, 255, 0)
RED   = (255, 0, 0)
TEXT  = (255, 255, 255)
TEXT_ALPHA = 204  # 0.8 opacity

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
STILL = (0, 0)

# ----- Game rules -----
MAX_STEPS = 300          # ticks allowed since the last food
MAX_REPEATS = 5          # same pick this many times before a forced re-pick
MAX_FOOD_ATTEMPTS = 1000 # rejection samples before scanning for free cells

# ----- Tunables (tick cadence) -----
@dataclass
class Config:
    seed: Optional[int] = None
    base_tick_ms: int = 50
    speedup_per_food_ms: int = 2
    max_speedup_ms: int = 30
    min_tick_ms: int = 20
    restart_delay_ms: int = 500
    fps: int = 60

CFG = Config()
