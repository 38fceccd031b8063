"""
config.py — Shared constants for the entire application.
No logic beyond validation, no imports from internal modules.

The simulation reads its tunables through ``GameSettings`` so a test can
shrink the board or silence spawning without patching module globals.
The module-level constants are the defaults.
"""

from dataclasses import dataclass

# ── Window & Grid ─────────────────────────────────────────────────
GRID_W, GRID_H  = 40, 30
CELL            = 20
PANEL_H         = 48
GAME_W, GAME_H  = GRID_W * CELL, GRID_H * CELL
OFFSET_X        = 10
OFFSET_Y        = PANEL_H + 10
WIDTH           = GAME_W + 2 * OFFSET_X
HEIGHT          = GAME_H + OFFSET_Y + 10
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG            = (10,  10,  15)
GRID_COL      = (15,  20,  32)
PLAYER_COL    = (0,   255, 136)
PLAYER_DIM    = (0,   140, 80)
ENEMY_COL     = (255, 51,  102)
ENEMY_DIM     = (140, 30,  60)
FOOD_COL      = (255, 228, 77)
SPEED_UP_COL  = (77,  200, 255)
SLOW_DOWN_COL = (190, 110, 255)
FLASH_COL     = (255, 255, 180)
ENEMY_FLASH   = (255, 180, 180)
UI_COL        = (120, 120, 170)
BLACK         = (0,   0,   0)
PANEL_BG      = (12,  12,  20)
BORDER_COL    = (26,  26,  62)

# ── Movement ──────────────────────────────────────────────────────
INITIAL_SPEED     = 8.0     # grid cells per second
SPEED_INCREMENT   = 0.5     # added to the base speed per player meal
MAX_SPEED         = 20.0
INITIAL_SNAKE_LEN = 3

# ── Food ──────────────────────────────────────────────────────────
INITIAL_FOOD_ITEMS    = 3
MAX_TOTAL_FOOD_ITEMS  = 50
FOOD_SPAWN_INTERVAL   = 5.0     # seconds
SPEED_UP_CHANCE       = 0.15
SLOW_DOWN_CHANCE      = 0.15
STANDARD_POINTS       = 10
SPEED_UP_POINTS       = 15
SLOW_DOWN_POINTS      = 5
SPEED_UP_FACTOR       = 1.5
SLOW_DOWN_FACTOR      = 0.6
SPEED_EFFECT_DURATION = 7.0     # seconds

# ── Enemies ───────────────────────────────────────────────────────
NUM_ENEMY_SNAKES     = 2
MAX_ENEMY_SNAKES     = 3
ENEMY_SPAWN_INTERVAL = 15.0     # seconds

# ── Presentation ──────────────────────────────────────────────────
EAT_FLASH_DURATION = 0.15       # seconds an eaten marker stays visible


@dataclass(frozen=True)
class GameSettings:
    """Startup configuration for one GameSession. Never changed at runtime."""

    grid_width: int = GRID_W
    grid_height: int = GRID_H
    initial_speed: float = INITIAL_SPEED
    speed_increment: float = SPEED_INCREMENT
    max_speed: float = MAX_SPEED
    initial_snake_len: int = INITIAL_SNAKE_LEN
    initial_food_items: int = INITIAL_FOOD_ITEMS
    max_total_food_items: int = MAX_TOTAL_FOOD_ITEMS
    food_spawn_interval: float = FOOD_SPAWN_INTERVAL
    speed_up_chance: float = SPEED_UP_CHANCE
    slow_down_chance: float = SLOW_DOWN_CHANCE
    standard_points: int = STANDARD_POINTS
    speed_up_points: int = SPEED_UP_POINTS
    slow_down_points: int = SLOW_DOWN_POINTS
    speed_up_factor: float = SPEED_UP_FACTOR
    slow_down_factor: float = SLOW_DOWN_FACTOR
    speed_effect_duration: float = SPEED_EFFECT_DURATION
    num_enemy_snakes: int = NUM_ENEMY_SNAKES
    max_enemy_snakes: int = MAX_ENEMY_SNAKES
    enemy_spawn_interval: float = ENEMY_SPAWN_INTERVAL
    eat_flash_duration: float = EAT_FLASH_DURATION

    def __post_init__(self):
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError("grid dimensions must be at least 1x1")
        if self.initial_snake_len < 1:
            raise ValueError("initial_snake_len must be at least 1")
        if self.initial_speed <= 0 or self.max_speed < self.initial_speed:
            raise ValueError("speeds must satisfy 0 < initial_speed <= max_speed")
        if self.speed_increment < 0:
            raise ValueError("speed_increment must not be negative")
        for name in ("food_spawn_interval", "enemy_spawn_interval",
                     "speed_effect_duration", "eat_flash_duration"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in ("speed_up_chance", "slow_down_chance"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")
        if self.speed_up_chance + self.slow_down_chance > 1.0:
            raise ValueError("food type chances must not add up to more than 1")
        if not 0 <= self.initial_food_items <= self.max_total_food_items:
            raise ValueError("initial_food_items must be within [0, max_total_food_items]")
        if not 0 <= self.num_enemy_snakes <= self.max_enemy_snakes:
            raise ValueError("num_enemy_snakes must be within [0, max_enemy_snakes]")

    @property
    def cell_count(self) -> int:
        return self.grid_width * self.grid_height
