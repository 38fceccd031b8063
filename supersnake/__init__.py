"""
supersnake — grid snake with A*-driven enemy snakes.

The simulation (grid, pathfinding, model, spawner, ai_brain, engine,
session) never imports pygame; only controller and view do.
"""

from .config import GameSettings
from .grid import Direction, Grid, Position, manhattan
from .model import Food, FoodType, GameState, Snake
from .pathfinding import find_path
from .session import Action, GameSession, SnakeSnapshot, Snapshot

__all__ = [
    "GameSettings",
    "Direction", "Grid", "Position", "manhattan",
    "Food", "FoodType", "GameState", "Snake",
    "find_path",
    "Action", "GameSession", "SnakeSnapshot", "Snapshot",
]
