"""
model.py — Model layer.

Owns the game entities and the state they live in. Zero rendering,
zero input handling, no clock: callers pass `now` in.

Classes:
    FoodType    — Standard / SpeedUp / SlowDown tag
    Food        — immutable food item (position, type, points, duration)
    Snake       — body, buffered direction, speed effect, move progress
    GameState   — everything one session owns; handed to each subsystem
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from .config import GameSettings
from .grid import Direction, Position

logger = logging.getLogger(__name__)


# ─────────────────────────── Food ────────────────────────────────
class FoodType(Enum):
    STANDARD  = "standard"
    SPEED_UP  = "speed_up"
    SLOW_DOWN = "slow_down"


@dataclass(frozen=True)
class Food:
    position: Position
    type: FoodType = FoodType.STANDARD
    points: int = 10
    duration: float = 0.0   # seconds the speed effect lasts; 0 for Standard

    @classmethod
    def of(cls, food_type: FoodType, position: Position, settings: GameSettings) -> "Food":
        """Build a food item with the points and duration its type carries."""
        if food_type is FoodType.SPEED_UP:
            return cls(position, food_type, settings.speed_up_points,
                       settings.speed_effect_duration)
        if food_type is FoodType.SLOW_DOWN:
            return cls(position, food_type, settings.slow_down_points,
                       settings.speed_effect_duration)
        return cls(position, food_type, settings.standard_points, 0.0)


def apply_effect(food: Food, snake: "Snake", now: float, settings: GameSettings) -> None:
    """Apply what eating `food` does to `snake`: always grow, maybe change speed."""
    snake.grow()
    if food.type is FoodType.SPEED_UP:
        snake.apply_speed_boost(settings.speed_up_factor, food.duration, now)
    elif food.type is FoodType.SLOW_DOWN:
        snake.apply_speed_boost(settings.slow_down_factor, food.duration, now)


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for one snake (player or enemy).

    `body` is head first. `prev_body` is the body as it was before the
    last finalized step and always has the same length as `body`; the
    renderer interpolates between the two using `move_progress`.
    """

    def __init__(
        self,
        body: Iterable[Position],
        direction: Direction,
        is_player: bool = False,
    ):
        self.body: list[Position] = [Position(*p) for p in body]
        if not self.body:
            raise ValueError("a snake needs at least one segment")
        self.prev_body: list[Position] = list(self.body)
        self.direction: Direction = direction
        self.next_direction: Direction = direction
        self.speed_factor: float = 1.0
        self.speed_effect_end_time: Optional[float] = None
        self.move_progress: float = 0.0
        self.is_player: bool = is_player
        self.current_path: list[Position] = []

    @classmethod
    def straight(
        cls,
        head: Position,
        direction: Direction,
        length: int,
        is_player: bool = False,
    ) -> "Snake":
        """A straight snake of `length` cells trailing away from `direction`."""
        tail_dir = direction.opposite
        body = [Position(head[0] + tail_dir.x * i, head[1] + tail_dir.y * i)
                for i in range(length)]
        return cls(body, direction, is_player)

    def __repr__(self):
        kind = "player" if self.is_player else "enemy"
        return f"Snake({kind}, head={self.head}, len={len(self.body)})"

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Position:
        return self.body[0]

    @property
    def neck(self) -> Optional[Position]:
        return self.body[1] if len(self.body) > 1 else None

    @property
    def tail(self) -> Position:
        return self.body[-1]

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Buffer a direction for the next step. Rejects NONE and a 180° turn."""
        if new_dir is Direction.NONE or new_dir.is_opposite(self.direction):
            return False
        self.next_direction = new_dir
        return True

    def next_head(self) -> Position:
        return self.head.step(self.next_direction)

    def advance(self, new_head: Position) -> None:
        """Prepend the new head and drop the last segment."""
        self.body = [new_head] + self.body[:-1]

    def grow(self) -> None:
        """
        Duplicate the tail in both `body` and `prev_body`. The next call
        to advance() drops the duplicate instead of a real segment, so the
        snake ends up one cell longer.
        """
        self.body.append(self.body[-1])
        self.prev_body.append(self.prev_body[-1] if self.prev_body else self.body[-1])

    def apply_speed_boost(self, factor: float, duration: float, now: float) -> None:
        """Install `factor` until now + duration, replacing any active effect."""
        self.speed_factor = factor
        self.speed_effect_end_time = now + duration

    def clear_speed_effect(self) -> None:
        self.speed_factor = 1.0
        self.speed_effect_end_time = None

    def expire_speed_effect(self, now: float) -> bool:
        """Drop the speed effect if its deadline has passed. True if it did."""
        if self.speed_effect_end_time is not None and now >= self.speed_effect_end_time:
            self.clear_speed_effect()
            return True
        return False

    def speed_effect_remaining(self, now: float) -> float:
        if self.speed_effect_end_time is None:
            return 0.0
        return max(0.0, self.speed_effect_end_time - now)

    def postpone_deadlines(self, delay: float) -> None:
        if self.speed_effect_end_time is not None:
            self.speed_effect_end_time += delay

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, pos: Position) -> bool:
        return pos in self.body

    def hits_self(self) -> bool:
        return self.head in self.body[1:]

    def hits_body_of(self, other: "Snake") -> bool:
        """True if this head sits on a non-head segment of `other`."""
        return self.head in other.body[1:]


# ────────────────────────── GameState ────────────────────────────
@dataclass
class GameState:
    """
    Everything one session owns. Subsystems receive it by reference and
    mutate it; nothing else holds game state.
    """
    player: Snake
    speed: float
    enemies: list[Snake] = field(default_factory=list)
    food: list[Food] = field(default_factory=list)
    score: int = 0
    is_over: bool = False
    is_paused: bool = False
    over_reason: Optional[str] = None
    next_food_spawn_at: float = 0.0
    next_enemy_spawn_at: float = 0.0
    paused_at: Optional[float] = None
    player_eaten_pos: Optional[Position] = None
    player_eaten_at: float = 0.0
    enemy_eaten_pos: Optional[Position] = None
    enemy_eaten_at: float = 0.0

    def snakes(self) -> Iterator[Snake]:
        yield self.player
        yield from self.enemies

    def snake_cells(self) -> set[Position]:
        return {seg for snake in self.snakes() for seg in snake.body}

    def occupied_cells(self) -> set[Position]:
        """Every cell covered by a snake segment or a food item."""
        cells = self.snake_cells()
        cells.update(f.position for f in self.food)
        return cells

    def food_at(self, pos: Position) -> Optional[Food]:
        for item in self.food:
            if item.position == pos:
                return item
        return None

    def has_enemy(self, snake: Snake) -> bool:
        return any(e is snake for e in self.enemies)

    def remove_enemy(self, snake: Snake, reason: str) -> bool:
        before = len(self.enemies)
        self.enemies = [e for e in self.enemies if e is not snake]
        if len(self.enemies) == before:
            return False
        logger.info("Enemy snake removed (%s), %d left", reason, len(self.enemies))
        return True
