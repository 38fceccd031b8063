"""
session.py — Game session.

Owns the GameState and wires the subsystems together. The external game
loop feeds it Actions and elapsed time once per frame and reads back an
immutable Snapshot to draw.

Per-frame order inside update():
    timed food spawn -> timed enemy spawn -> player movement
    -> for each surviving enemy: AI decision, then movement
"""

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from . import ai_brain
from .config import GameSettings
from .engine import MovementEngine
from .grid import Direction, Grid, Position
from .model import Food, GameState, Snake
from .spawner import EnemySpawner, FoodSpawner

logger = logging.getLogger(__name__)


class Action(Enum):
    """Discrete per-frame command from the input collaborator."""
    NONE       = "none"
    MOVE_UP    = "move_up"
    MOVE_DOWN  = "move_down"
    MOVE_LEFT  = "move_left"
    MOVE_RIGHT = "move_right"
    PAUSE      = "pause"
    CONFIRM    = "confirm"
    RESTART    = "restart"


_MOVE_ACTIONS = {
    Action.MOVE_UP:    Direction.UP,
    Action.MOVE_DOWN:  Direction.DOWN,
    Action.MOVE_LEFT:  Direction.LEFT,
    Action.MOVE_RIGHT: Direction.RIGHT,
}


# ─────────────────────────── Snapshots ───────────────────────────
@dataclass(frozen=True)
class SnakeSnapshot:
    body: tuple[Position, ...]
    prev_body: tuple[Position, ...]
    direction: Direction
    next_direction: Direction
    move_progress: float
    speed_factor: float
    speed_effect_remaining: float
    is_player: bool

    @classmethod
    def of(cls, snake: Snake, now: float) -> "SnakeSnapshot":
        return cls(
            body=tuple(snake.body),
            prev_body=tuple(snake.prev_body),
            direction=snake.direction,
            next_direction=snake.next_direction,
            move_progress=snake.move_progress,
            speed_factor=snake.speed_factor,
            speed_effect_remaining=snake.speed_effect_remaining(now),
            is_player=snake.is_player,
        )

    @property
    def head(self) -> Position:
        return self.body[0]

    def segment_at(self, index: int) -> tuple[float, float]:
        """Interpolated position of segment `index` between prev_body and body."""
        px, py = self.prev_body[index]
        x, y = self.body[index]
        t = self.move_progress
        return px + (x - px) * t, py + (y - py) * t


@dataclass(frozen=True)
class Snapshot:
    """Everything the renderer needs for one frame. Safe to keep around."""
    player: SnakeSnapshot
    enemies: tuple[SnakeSnapshot, ...]
    food: tuple[Food, ...]
    score: int
    speed: float
    is_over: bool
    is_paused: bool
    over_reason: Optional[str]
    grid_width: int
    grid_height: int
    player_eaten_pos: Optional[Position]
    enemy_eaten_pos: Optional[Position]


# ─────────────────────────── GameSession ─────────────────────────
class GameSession:
    """
    Top-level simulation object. Single-threaded: update(), the input
    handlers and get_snapshot() must all be called from the game loop.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
    ):
        self.settings = settings or GameSettings()
        self.grid = Grid(self.settings.grid_width, self.settings.grid_height)
        self._clock = clock
        self.rng = random.Random(seed)
        self.food_spawner = FoodSpawner(self.settings, self.grid, self.rng)
        self.enemy_spawner = EnemySpawner(self.settings, self.grid, self.rng)
        self.engine = MovementEngine(self.settings, self.grid, self.food_spawner)
        self.state: GameState = None
        self.reset()

    # ── Accessors ────────────────────────────────────────────────
    @property
    def player(self) -> Snake:
        return self.state.player

    @property
    def enemies(self) -> list[Snake]:
        return self.state.enemies

    @property
    def food(self) -> list[Food]:
        return self.state.food

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    # ── Commands ─────────────────────────────────────────────────
    def reset(self) -> None:
        """Throw away every entity, path, schedule and effect and start over."""
        s = self.settings
        now = self._clock()

        player = Snake.straight(
            Position(s.grid_width // 4, s.grid_height // 2),
            Direction.RIGHT,
            s.initial_snake_len,
            is_player=True,
        )
        self.state = GameState(player=player, speed=s.initial_speed)

        occupied = set(player.body)
        for _ in range(s.num_enemy_snakes):
            enemy = self.enemy_spawner.create_enemy(occupied)
            if enemy is None:
                continue
            self.state.enemies.append(enemy)
            occupied.update(enemy.body)

        for _ in range(s.initial_food_items):
            self.food_spawner.try_spawn_one(self.state)

        self.food_spawner.schedule_next(self.state, now)
        self.enemy_spawner.schedule_next(self.state, now)
        logger.debug("Session reset: %d enemies, %d food",
                     len(self.state.enemies), len(self.state.food))

    def handle_input(self, direction: Direction) -> None:
        """Buffer the player's next direction; a 180° turn is ignored."""
        self.state.player.request_direction(direction)

    def handle_action(self, action: Action) -> None:
        if action in _MOVE_ACTIONS:
            self.handle_input(_MOVE_ACTIONS[action])
        elif action is Action.PAUSE:
            self.toggle_pause()
        elif action is Action.CONFIRM:
            if self.state.is_over:
                self.reset()
        elif action is Action.RESTART:
            self.reset()

    def toggle_pause(self) -> None:
        """
        Pause or resume. Countdowns are frozen while paused: on resume the
        paused interval is added to every pending deadline.
        """
        state = self.state
        if state.is_over:
            return
        now = self._clock()
        if not state.is_paused:
            state.is_paused = True
            state.paused_at = now
            logger.debug("Paused")
            return

        delay = now - state.paused_at if state.paused_at is not None else 0.0
        for snake in state.snakes():
            snake.postpone_deadlines(delay)
        state.next_food_spawn_at += delay
        state.next_enemy_spawn_at += delay
        state.is_paused = False
        state.paused_at = None
        logger.debug("Resumed after %.2fs", delay)

    def update(self, delta_time: float) -> None:
        """Advance the simulation by `delta_time` seconds."""
        if delta_time < 0:
            raise ValueError(f"delta_time must not be negative, got {delta_time}")
        state = self.state
        if state.is_over or state.is_paused:
            return

        now = self._clock()
        self.food_spawner.spawn_due(state, now)
        self.enemy_spawner.spawn_due(state, now)

        self.engine.advance(state, state.player, delta_time, now)
        if state.is_over:
            return

        for enemy in list(state.enemies):
            if not state.has_enemy(enemy):
                continue   # removed earlier this frame
            ai_brain.steer(enemy, state, self.grid, self.rng)
            self.engine.advance(state, enemy, delta_time, now)
            if state.is_over:
                return

    # ── Queries ──────────────────────────────────────────────────
    def get_snapshot(self) -> Snapshot:
        state = self.state
        now = self._clock()
        flash = self.settings.eat_flash_duration
        # Effect countdowns are frozen while paused.
        effect_now = state.paused_at if state.paused_at is not None else now

        player_eaten = state.player_eaten_pos
        if player_eaten is not None and now - state.player_eaten_at > flash:
            player_eaten = None
        enemy_eaten = state.enemy_eaten_pos
        if enemy_eaten is not None and now - state.enemy_eaten_at > flash:
            enemy_eaten = None

        return Snapshot(
            player=SnakeSnapshot.of(state.player, effect_now),
            enemies=tuple(SnakeSnapshot.of(e, effect_now) for e in state.enemies),
            food=tuple(state.food),
            score=state.score,
            speed=state.speed,
            is_over=state.is_over,
            is_paused=state.is_paused,
            over_reason=state.over_reason,
            grid_width=self.grid.width,
            grid_height=self.grid.height,
            player_eaten_pos=player_eaten,
            enemy_eaten_pos=enemy_eaten,
        )
