"""
ai_brain.py — Enemy steering.

Completely isolated from rendering and input. Reads the GameState and
only ever writes the enemy's buffered direction and cached path; the
movement engine moves enemies exactly like it moves the player.

Strategy, per enemy and per frame:
  - FOLLOWING: trust the cached path while it still leads somewhere
    sensible from the current head.
  - RECALCULATING: A* to the nearest food, avoiding every snake.
  - Fallback: no food or no route -> a random move that is not
    immediately fatal, or the current heading if there is none.
"""

import logging
import random
from enum import Enum
from typing import AbstractSet, Optional

from .grid import MOVES, Direction, Grid, Position, manhattan
from .model import Food, GameState, Snake
from .pathfinding import find_path

logger = logging.getLogger(__name__)


class Mode(Enum):
    FOLLOWING     = "following"
    RECALCULATING = "recalculating"


def steer(enemy: Snake, state: GameState, grid: Grid, rng: random.Random) -> Direction:
    """
    Decide where `enemy` goes next and buffer it as its next direction.
    Returns the direction chosen.
    """
    obstacles = obstacles_for(enemy, state)
    mode = Mode.FOLLOWING if enemy.current_path else Mode.RECALCULATING

    direction = None
    if mode is Mode.FOLLOWING:
        direction = _follow(enemy, state, obstacles)
        if direction is None:
            enemy.current_path = []
            mode = Mode.RECALCULATING

    if mode is Mode.RECALCULATING:
        direction = _recalculate(enemy, state, grid, obstacles, rng)

    enemy.request_direction(direction)
    return direction


def obstacles_for(enemy: Snake, state: GameState) -> set[Position]:
    """Every snake cell except the enemy's own head."""
    blocked: set[Position] = set()
    for snake in state.snakes():
        blocked.update(snake.body[1:] if snake is enemy else snake.body)
    return blocked


def closest_food(head: Position, food: list[Food]) -> Optional[Food]:
    best, best_dist = None, None
    for item in food:
        d = manhattan(head, item.position)
        if best_dist is None or d < best_dist:
            best, best_dist = item, d
    return best


def safe_random_direction(
    enemy: Snake,
    grid: Grid,
    obstacles: AbstractSet[Position],
    rng: random.Random,
) -> Direction:
    """Random non-reversing move into a free in-bounds cell; else keep heading."""
    safe = []
    for d in MOVES:
        if d.is_opposite(enemy.direction):
            continue
        cell = enemy.head.step(d)
        if grid.contains(cell) and cell not in obstacles:
            safe.append(d)
    if safe:
        return rng.choice(safe)
    logger.debug("%r is trapped, keeping %s", enemy, enemy.direction.name)
    return enemy.direction


# ── Internal helpers ──────────────────────────────────────────────

def _follow(enemy: Snake, state: GameState, obstacles: AbstractSet[Position]) -> Optional[Direction]:
    """Next direction along the cached path, or None when it has gone stale."""
    path = enemy.current_path
    if path and path[0] == enemy.head:
        path.pop(0)   # that step has just been taken
    if not path:
        return None
    if state.food_at(path[-1]) is None:
        return None   # target eaten by someone else
    nxt = path[0]
    if nxt == enemy.neck:
        return None
    direction = Direction.between(enemy.head, nxt)
    if direction is Direction.NONE or nxt in obstacles:
        return None
    return direction


def _recalculate(
    enemy: Snake,
    state: GameState,
    grid: Grid,
    obstacles: AbstractSet[Position],
    rng: random.Random,
) -> Direction:
    target = closest_food(enemy.head, state.food)
    if target is None:
        return safe_random_direction(enemy, grid, obstacles, rng)

    path = find_path(grid, enemy.head, target.position, obstacles)
    if not path:
        logger.debug("%r has no route to %s, moving randomly", enemy, target.position)
        enemy.current_path = []
        return safe_random_direction(enemy, grid, obstacles, rng)

    enemy.current_path = path
    return Direction.between(enemy.head, path[0])
