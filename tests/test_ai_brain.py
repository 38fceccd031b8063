"""Tests for enemy steering."""

import random

import pytest

from supersnake import ai_brain
from supersnake.grid import Direction, Grid, Position
from supersnake.model import Food, GameState, Snake

GRID = Grid(10, 10)


def make_state(enemy: Snake, food=(), player: Snake = None) -> GameState:
    if player is None:
        player = Snake([(1, 9), (0, 9)], Direction.RIGHT, is_player=True)
    return GameState(player=player, speed=8.0, enemies=[enemy],
                     food=[Food(Position(*p)) for p in food])


def enemy_at(head=(5, 5), direction=Direction.LEFT, length=3) -> Snake:
    return Snake.straight(Position(*head), direction, length)


class TestRecalculating:
    def test_plans_route_to_food(self):
        enemy = enemy_at()
        state = make_state(enemy, food=[(2, 5)])
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.LEFT
        assert enemy.next_direction is Direction.LEFT
        assert enemy.current_path == [(4, 5), (3, 5), (2, 5)]

    def test_targets_closest_food(self):
        enemy = enemy_at()
        state = make_state(enemy, food=[(0, 0), (5, 7)])
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.DOWN
        assert enemy.current_path[-1] == (5, 7)

    def test_never_moves_position(self):
        enemy = enemy_at()
        body = list(enemy.body)
        ai_brain.steer(enemy, make_state(enemy, food=[(2, 5)]), GRID, random.Random(0))
        assert enemy.body == body

    def test_no_route_falls_back_to_safe_move(self):
        enemy = enemy_at(head=(2, 2))
        # food in the corner walled in by the player's body
        player = Snake([(8, 9), (8, 8), (9, 8)], Direction.DOWN, is_player=True)
        state = make_state(enemy, food=[(9, 9)], player=player)
        for seed in range(20):
            direction = ai_brain.steer(enemy, state, GRID, random.Random(seed))
            assert direction in (Direction.UP, Direction.DOWN, Direction.LEFT)
            assert enemy.current_path == []


class TestFollowing:
    def test_follows_cached_path_after_step(self):
        enemy = enemy_at()
        state = make_state(enemy, food=[(2, 5)])
        ai_brain.steer(enemy, state, GRID, random.Random(0))
        enemy.advance(Position(4, 5))
        enemy.direction = Direction.LEFT
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.LEFT
        assert enemy.current_path == [(3, 5), (2, 5)]

    def test_neck_step_triggers_replan(self):
        enemy = enemy_at()
        enemy.current_path = [Position(6, 5), Position(6, 4)]
        state = make_state(enemy, food=[(6, 4)])
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.UP
        assert enemy.current_path == [(5, 4), (6, 4)]

    def test_eaten_target_triggers_replan(self):
        enemy = enemy_at()
        enemy.current_path = [Position(4, 5), Position(3, 5)]
        state = make_state(enemy, food=[(5, 8)])
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.DOWN
        assert enemy.current_path == [(5, 6), (5, 7), (5, 8)]

    def test_non_adjacent_step_triggers_replan(self):
        enemy = enemy_at()
        enemy.current_path = [Position(3, 5), Position(2, 5)]
        state = make_state(enemy, food=[(2, 5)])
        ai_brain.steer(enemy, state, GRID, random.Random(0))
        assert enemy.current_path == [(4, 5), (3, 5), (2, 5)]

    def test_blocked_step_triggers_replan(self):
        enemy = enemy_at()
        enemy.current_path = [Position(4, 5), Position(3, 5)]
        player = Snake([(4, 5), (4, 6), (4, 7)], Direction.UP, is_player=True)
        state = make_state(enemy, food=[(3, 5)], player=player)
        direction = ai_brain.steer(enemy, state, GRID, random.Random(0))
        assert direction is Direction.UP
        assert Position(4, 5) not in enemy.current_path
        assert enemy.current_path[-1] == (3, 5)

    def test_exhausted_path_triggers_replan(self):
        enemy = enemy_at()
        enemy.current_path = [Position(5, 5)]
        state = make_state(enemy, food=[(5, 2)])
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.UP
        assert enemy.current_path == [(5, 4), (5, 3), (5, 2)]


class TestSafeRandom:
    def test_no_food_never_reverses(self):
        for seed in range(30):
            enemy = enemy_at()
            direction = ai_brain.steer(enemy, make_state(enemy), GRID, random.Random(seed))
            assert direction in (Direction.UP, Direction.DOWN, Direction.LEFT)

    def test_picks_only_free_cells(self):
        enemy = enemy_at(head=(5, 0))
        player = Snake([(4, 0), (4, 1), (4, 2)], Direction.UP, is_player=True)
        state = make_state(enemy, player=player)
        obstacles = ai_brain.obstacles_for(enemy, state)
        for seed in range(20):
            assert ai_brain.safe_random_direction(
                enemy, GRID, obstacles, random.Random(seed)) is Direction.DOWN

    def test_trapped_keeps_heading(self):
        enemy = Snake([(0, 0), (1, 0), (2, 0)], Direction.LEFT)
        player = Snake([(0, 1), (0, 2), (0, 3)], Direction.UP, is_player=True)
        state = make_state(enemy, player=player)
        assert ai_brain.steer(enemy, state, GRID, random.Random(0)) is Direction.LEFT
        assert enemy.next_direction is Direction.LEFT


class TestHelpers:
    def test_obstacles_exclude_only_own_head(self):
        enemy = enemy_at()
        other = enemy_at(head=(5, 8))
        state = make_state(enemy)
        state.enemies.append(other)
        blocked = ai_brain.obstacles_for(enemy, state)
        assert enemy.head not in blocked
        assert set(enemy.body[1:]) <= blocked
        assert set(other.body) <= blocked
        assert set(state.player.body) <= blocked

    def test_closest_food(self):
        food = [Food(Position(9, 9)), Food(Position(3, 3)), Food(Position(4, 2))]
        assert ai_brain.closest_food(Position(2, 2), food) == food[1]
        assert ai_brain.closest_food(Position(2, 2), []) is None


@pytest.mark.parametrize("seed", range(5))
def test_steer_always_sets_a_travel_direction(seed):
    enemy = enemy_at()
    state = make_state(enemy, food=[(8, 1), (1, 8)])
    direction = ai_brain.steer(enemy, state, GRID, random.Random(seed))
    assert direction is not Direction.NONE
    assert enemy.next_direction is direction
