"""
engine.py — Movement & collision.

Advances one snake at a time by fractional progress and finalizes whole
grid steps. Every finalized step runs the full eat / move / collide
sequence, so a snake that covers several cells in one frame is checked
after each of them.

Collision outcomes (head based, after each step):
    wall or own body          player: game over   enemy: removed
    enemy head  -> player head     game over, that enemy removed
    enemy head  -> player body     enemy removed
    player head -> enemy head      game over, that enemy removed
    player head -> enemy body      game over, enemy survives
    enemy head  -> enemy head      both enemies removed
    enemy head  -> enemy body      moving enemy removed
"""

import logging

from .config import GameSettings
from .grid import Grid
from .model import Food, GameState, Snake, apply_effect
from .spawner import FoodSpawner

logger = logging.getLogger(__name__)


class MovementEngine:
    def __init__(self, settings: GameSettings, grid: Grid, food_spawner: FoodSpawner):
        self.settings = settings
        self.grid = grid
        self.food_spawner = food_spawner

    # ── Public API ───────────────────────────────────────────────
    def advance(self, state: GameState, snake: Snake, dt: float, now: float) -> None:
        """Move `snake` forward by dt seconds worth of progress."""
        if state.is_over or state.is_paused:
            return
        if not snake.is_player and not state.has_enemy(snake):
            return

        snake.expire_speed_effect(now)
        snake.move_progress += snake.speed_factor * state.speed * dt

        while snake.move_progress >= 1.0:
            snake.move_progress -= 1.0
            if not self.finalize_step(state, snake, now):
                # Dead snakes keep only the fractional part; the rest is never consumed.
                snake.move_progress %= 1.0
                return

    def finalize_step(self, state: GameState, snake: Snake, now: float) -> bool:
        """Take exactly one grid step. Returns False if the snake died doing it."""
        snake.prev_body = list(snake.body)
        snake.direction = snake.next_direction
        new_head = snake.head.step(snake.direction)

        eaten = state.food_at(new_head)
        if eaten is not None:
            self._eat(state, snake, eaten, now)

        snake.advance(new_head)

        if not self.grid.contains(snake.head):
            self._kill(state, snake, "wall")
            return False
        if snake.hits_self():
            self._kill(state, snake, "self")
            return False
        return self._check_inter_snake(state, snake)

    def trigger_game_over(self, state: GameState, reason: str) -> None:
        if state.is_over:
            return
        state.is_over = True
        state.over_reason = reason
        state.player.clear_speed_effect()
        logger.info("Game over (%s), final score %d", reason, state.score)

    # ── Private helpers ──────────────────────────────────────────
    def _eat(self, state: GameState, snake: Snake, food: Food, now: float) -> None:
        apply_effect(food, snake, now, self.settings)
        if snake.is_player:
            state.score += food.points
            state.speed = min(state.speed + self.settings.speed_increment,
                              self.settings.max_speed)
            state.player_eaten_pos, state.player_eaten_at = food.position, now
        else:
            state.enemy_eaten_pos, state.enemy_eaten_at = food.position, now

        # Replacement goes in while the eaten item still blocks its own cell.
        self.food_spawner.try_spawn_one(state)
        state.food.remove(food)

    def _kill(self, state: GameState, snake: Snake, reason: str) -> None:
        if snake.is_player:
            self.trigger_game_over(state, reason)
        else:
            state.remove_enemy(snake, reason)

    def _check_inter_snake(self, state: GameState, snake: Snake) -> bool:
        """Resolve head contacts between `snake` and every other snake."""
        head = snake.head
        player = state.player

        if not snake.is_player:
            if head == player.head:
                self.trigger_game_over(state, "enemy head-on")
                state.remove_enemy(snake, "head-on with player")
                return False
            if snake.hits_body_of(player):
                state.remove_enemy(snake, "hit player body")
                return False

        for other in list(state.enemies):
            if other is snake:
                continue
            if head == other.head:
                if snake.is_player:
                    self.trigger_game_over(state, "enemy head-on")
                    state.remove_enemy(other, "head-on with player")
                else:
                    state.remove_enemy(snake, "enemy head-on")
                    state.remove_enemy(other, "enemy head-on")
                return False
            if snake.hits_body_of(other):
                if snake.is_player:
                    self.trigger_game_over(state, "enemy body")
                else:
                    state.remove_enemy(snake, "hit enemy body")
                return False

        return True
