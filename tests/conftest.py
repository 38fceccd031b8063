"""Shared fixtures: a controllable clock and small, quiet game settings."""

import pytest

from supersnake import ai_brain
from supersnake.config import GameSettings
from supersnake.session import GameSession


class FakeClock:
    """Stands in for time.monotonic; only moves when a test says so."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def quiet_settings():
    """
    10x10 board, one cell per second, no enemies, no food and no timed
    spawns unless a test asks for them.
    """
    def _build(**overrides) -> GameSettings:
        values = dict(
            grid_width=10,
            grid_height=10,
            initial_speed=1.0,
            speed_increment=0.0,
            initial_food_items=0,
            num_enemy_snakes=0,
            max_enemy_snakes=3,
            food_spawn_interval=1000.0,
            enemy_spawn_interval=1000.0,
        )
        values.update(overrides)
        return GameSettings(**values)
    return _build


@pytest.fixture
def make_session(clock, quiet_settings):
    def _make(seed: int = 1, **overrides) -> GameSession:
        return GameSession(quiet_settings(**overrides), clock=clock, seed=seed)
    return _make


@pytest.fixture
def session(make_session):
    """Player starts at (2, 5) heading right with body [(2,5), (1,5), (0,5)]."""
    return make_session()


@pytest.fixture
def scripted_enemies(monkeypatch):
    """Enemies keep whatever next_direction the test gave them."""
    monkeypatch.setattr(ai_brain, "steer",
                        lambda enemy, state, grid, rng: enemy.next_direction)
