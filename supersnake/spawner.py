"""
spawner.py — Food and enemy population.

Both spawners place things by random sampling against the set of
occupied cells. Running out of attempts is not an error: the spawn is
skipped, logged, and the game carries on with fewer items.

Timed spawns are deadlines stored on the GameState and compared with
`now` once per frame; nothing here sleeps or runs in the background.
"""

import logging
import random
from typing import AbstractSet, Optional

from .config import GameSettings
from .grid import Direction, Grid, Position
from .model import Food, FoodType, GameState, Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    def __init__(self, settings: GameSettings, grid: Grid, rng: random.Random):
        self.settings = settings
        self.grid = grid
        self.rng = rng

    def pick_type(self, roll: float) -> FoodType:
        """Map a uniform roll in [0, 1) onto the food type probability bands."""
        if roll < self.settings.speed_up_chance:
            return FoodType.SPEED_UP
        if roll < self.settings.speed_up_chance + self.settings.slow_down_chance:
            return FoodType.SLOW_DOWN
        return FoodType.STANDARD

    def try_spawn_one(self, state: GameState) -> Optional[Food]:
        """Add one food item on a free cell. Returns it, or None if none was placed."""
        if len(state.food) >= self.settings.max_total_food_items:
            return None

        occupied = state.occupied_cells()
        food_type = self.pick_type(self.rng.random())

        pos = self._free_cell(occupied)
        if pos is None:
            logger.debug("No free cell for food (%d occupied)", len(occupied))
            return None

        item = Food.of(food_type, pos, self.settings)
        state.food.append(item)
        return item

    def schedule_next(self, state: GameState, now: float) -> None:
        state.next_food_spawn_at = now + self.settings.food_spawn_interval

    def spawn_due(self, state: GameState, now: float) -> Optional[Food]:
        """Timed spawn: one attempt once the deadline passes, then reschedule."""
        if now < state.next_food_spawn_at:
            return None
        item = self.try_spawn_one(state)
        self.schedule_next(state, now)
        return item

    def _free_cell(self, occupied: AbstractSet[Position]) -> Optional[Position]:
        free = self.grid.size - len(occupied)
        if free <= 0:
            return None
        # Sparse boards need more draws than there are free cells.
        for _ in range(free * 2):
            pos = self.grid.random_cell(self.rng)
            if pos not in occupied:
                return pos
        return None


class EnemySpawner:
    """Places enemy snakes on the right quarter of the board, heading left."""

    def __init__(self, settings: GameSettings, grid: Grid, rng: random.Random):
        self.settings = settings
        self.grid = grid
        self.rng = rng

    def create_enemy(self, occupied: AbstractSet[Position]) -> Optional[Snake]:
        """A new enemy clear of `occupied`, or None after the attempt budget runs out."""
        length = self.settings.initial_snake_len
        band = max(1, self.grid.width // 4)
        max_attempts = max(1, self.grid.size // 2)

        last_col = self.grid.width - length   # rightmost head that keeps the tail on the board
        if last_col < 0:
            logger.warning("Board too narrow for a %d-cell enemy", length)
            return None
        first_col = max(0, last_col - band + 1)

        for _ in range(max_attempts):
            head = Position(first_col + self.rng.randrange(last_col - first_col + 1),
                            self.rng.randrange(self.grid.height))
            body = [Position(head.x + i, head.y) for i in range(length)]
            if all(self.grid.contains(p) and p not in occupied for p in body):
                return Snake(body, Direction.LEFT)

        logger.warning("Could not place enemy snake after %d attempts", max_attempts)
        return None

    def try_spawn_enemy(self, state: GameState) -> Optional[Snake]:
        if len(state.enemies) >= self.settings.max_enemy_snakes:
            return None
        logger.debug("Attempting to spawn enemy snake (current: %d)", len(state.enemies))
        enemy = self.create_enemy(state.occupied_cells())
        if enemy is not None:
            state.enemies.append(enemy)
            logger.info("Enemy snake spawned (total: %d)", len(state.enemies))
        return enemy

    def schedule_next(self, state: GameState, now: float) -> None:
        state.next_enemy_spawn_at = now + self.settings.enemy_spawn_interval

    def spawn_due(self, state: GameState, now: float) -> Optional[Snake]:
        if now < state.next_enemy_spawn_at:
            return None
        enemy = self.try_spawn_enemy(state)
        self.schedule_next(state, now)
        return enemy
