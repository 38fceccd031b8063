"""
pathfinding.py — A* search over the 4-connected grid.

Completely isolated from snakes and food: callers hand in a Grid, two
cells and the set of blocked cells, and get back a list of steps.

Details:
  - Uniform step cost 1, Manhattan heuristic (admissible and consistent,
    so the first time the target is popped its path is optimal).
  - The open set is a binary heap ordered by (f, h): ties on f prefer the
    node nearer the target.
  - Nodes are never updated in place. A strictly cheaper route pushes a
    fresh entry; stale entries are skipped when popped if the cell is
    already closed.
"""

import heapq
import itertools
from typing import AbstractSet, Optional

from .grid import Grid, Position, manhattan


def find_path(
    grid: Grid,
    start: Position,
    target: Position,
    obstacles: AbstractSet[Position] = frozenset(),
) -> Optional[list[Position]]:
    """
    Shortest path from `start` to `target` avoiding `obstacles`.

    Returns the cells to visit in travel order, excluding `start` and
    including `target`, or None when the target cannot be reached.
    A target that is itself an obstacle is unreachable. When start and
    target coincide the path is empty.
    """
    start, target = Position(*start), Position(*target)
    if start == target:
        return []
    if not grid.contains(target) or target in obstacles:
        return None

    tie = itertools.count()    # keeps heap entries comparable without comparing cells
    h0 = manhattan(start, target)
    open_heap: list[tuple[int, int, int, Position]] = [(h0, h0, next(tie), start)]
    g_score: dict[Position, int] = {start: 0}
    came_from: dict[Position, Position] = {}
    closed: set[Position] = set()

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        if current == target:
            return _reconstruct(came_from, current)
        closed.add(current)

        tentative = g_score[current] + 1
        for neighbor in grid.neighbors(current):
            if neighbor in closed or neighbor in obstacles:
                continue
            if tentative >= g_score.get(neighbor, tentative + 1):
                continue
            g_score[neighbor] = tentative
            came_from[neighbor] = current
            h = manhattan(neighbor, target)
            heapq.heappush(open_heap, (tentative + h, h, next(tie), neighbor))

    return None


def _reconstruct(came_from: dict[Position, Position], node: Position) -> list[Position]:
    path = []
    while node in came_from:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path
