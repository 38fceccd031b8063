"""
grid.py — Board geometry.

Fixed-size integer grid, no wraparound. Everything here is pure and
integer-only; fractional movement lives on the Snake, not here.

Classes:
    Position    — immutable (x, y) cell value
    Direction   — the four travel directions plus a NONE sentinel
    Grid        — bounds, neighbours and random cells for a W x H board
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple


# ─────────────────────────── Position ────────────────────────────
class Position(NamedTuple):
    """A grid cell. Compares and hashes like the (x, y) tuple it is."""
    x: int
    y: int

    def step(self, direction: "Direction") -> "Position":
        return Position(self.x + direction.x, self.y + direction.y)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ─────────────────────────── Direction ───────────────────────────
class Direction(Enum):
    """Unit travel direction. NONE means "no input" and never moves a snake."""
    NONE  = (0,  0)
    UP    = (0, -1)
    DOWN  = (0,  1)
    LEFT  = (-1, 0)
    RIGHT = (1,  0)

    @property
    def x(self) -> int:
        return self.value[0]

    @property
    def y(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.x, -self.y))

    def is_opposite(self, other: "Direction") -> bool:
        if self is Direction.NONE or other is Direction.NONE:
            return False
        return self.x == -other.x and self.y == -other.y

    @classmethod
    def between(cls, a: Position, b: Position) -> "Direction":
        """Direction of the single step a -> b, NONE if b is not adjacent to a."""
        delta = (b[0] - a[0], b[1] - a[1])
        for d in MOVES:
            if d.value == delta:
                return d
        return cls.NONE


# Neighbour order matches the search order used by the pathfinder.
MOVES = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


# ───────────────────────────── Grid ──────────────────────────────
@dataclass(frozen=True)
class Grid:
    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, pos: Position) -> bool:
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def neighbors(self, pos: Position) -> Iterator[Position]:
        """In-bounds 4-connected neighbours of pos."""
        for d in MOVES:
            n = Position(pos[0] + d.x, pos[1] + d.y)
            if self.contains(n):
                yield n

    def cells(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def random_cell(self, rng: random.Random) -> Position:
        return Position(rng.randrange(self.width), rng.randrange(self.height))
