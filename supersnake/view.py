"""
view.py — View layer.

Draws one frame from a session Snapshot. Never touches the session
itself, so whatever it does cannot change the game.

  - Pre-rendered grid surface (drawn once, blitted every frame)
  - Snake segments interpolated between prev_body and body
  - Food coloured by type, pulsing
  - Short flash where food was just eaten
  - HUD with score, base speed and the player's active speed effect

Public API:
    GameView(screen)       — bind to a pygame surface
    view.render(snapshot)  — draw the current frame
"""

import math

import pygame

from .config import (
    WIDTH, HEIGHT, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, CELL, GRID_W, GRID_H,
    BG, GRID_COL, FOOD_COL, SPEED_UP_COL, SLOW_DOWN_COL,
    FLASH_COL, ENEMY_FLASH, UI_COL, PANEL_BG, BORDER_COL,
    PLAYER_COL, PLAYER_DIM, ENEMY_COL, ENEMY_DIM,
)
from .model import FoodType
from .session import Snapshot, SnakeSnapshot

FOOD_COLORS = {
    FoodType.STANDARD:  FOOD_COL,
    FoodType.SPEED_UP:  SPEED_UP_COL,
    FoodType.SLOW_DOWN: SLOW_DOWN_COL,
}


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _cell_center(x: float, y: float) -> tuple[int, int]:
    return (int(OFFSET_X + x * CELL + CELL / 2), int(OFFSET_Y + y * CELL + CELL / 2))


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a Snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()
        self._anim_tick: int = 0

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: Snapshot) -> None:
        self._anim_tick += 1

        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        for item in snap.food:
            self._draw_food(item.position, FOOD_COLORS[item.type])

        for enemy in snap.enemies:
            self._draw_snake(enemy, ENEMY_COL, ENEMY_DIM)
        self._draw_snake(snap.player, PLAYER_COL, PLAYER_DIM)

        if snap.player_eaten_pos is not None:
            self._draw_flash(snap.player_eaten_pos, FLASH_COL)
        if snap.enemy_eaten_pos is not None:
            self._draw_flash(snap.enemy_eaten_pos, ENEMY_FLASH)

        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 1, OFFSET_Y - 1, GAME_W + 2, GAME_H + 2), 1)
        self._draw_panel(snap)

        if snap.is_over:
            self._draw_overlay("GAME OVER", f"SCORE {snap.score}  -  ENTER TO RESTART")
        elif snap.is_paused:
            self._draw_overlay("PAUSED", "PRESS  P  TO RESUME")

        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        for x in range(GRID_W + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (x * CELL, 0), (x * CELL, GAME_H))
        for y in range(GRID_H + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (0, y * CELL), (GAME_W, y * CELL))

    # ── Food ─────────────────────────────────────────────────────
    def _draw_food(self, pos: tuple[int, int], color: tuple) -> None:
        pulse = 0.75 + 0.25 * math.sin(self._anim_tick * 0.10 + pos[0] + pos[1])
        r = max(2, int((CELL / 2 - 1) * pulse))
        pygame.draw.circle(self.screen, color, _cell_center(*pos), r)

    def _draw_flash(self, pos: tuple[int, int], color: tuple) -> None:
        r = CELL
        glow = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
        pygame.draw.circle(glow, _with_alpha(color, 110), (r, r), r)
        cx, cy = _cell_center(*pos)
        self.screen.blit(glow, (cx - r, cy - r))

    # ── Snake body ───────────────────────────────────────────────
    def _draw_snake(self, snake: SnakeSnapshot, color: tuple, dim: tuple) -> None:
        length = len(snake.body)
        # Tail first so the head ends up on top.
        for i in reversed(range(length)):
            x, y = snake.segment_at(i)
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            seg_col = _lerp_color(dim, color, t)
            shrink = 0 if i == 0 else 2
            rect = pygame.Rect(
                int(OFFSET_X + x * CELL) + shrink,
                int(OFFSET_Y + y * CELL) + shrink,
                CELL - shrink * 2,
                CELL - shrink * 2,
            )
            radius = rect.width // 2 - 1 if i == 0 else rect.width // 4
            pygame.draw.rect(self.screen, seg_col, rect, border_radius=max(1, radius))

        if snake.speed_effect_remaining > 0:
            hx, hy = snake.segment_at(0)
            ring = SPEED_UP_COL if snake.speed_factor > 1.0 else SLOW_DOWN_COL
            pygame.draw.circle(self.screen, ring, _cell_center(hx, hy), CELL // 2 + 2, 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: Snapshot) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, PLAYER_COL), (16, 6))
        self.screen.blit(self.font_big.render(str(snap.score), True, PLAYER_COL), (16, 20))

        speed = self.font_small.render(f"SPEED {snap.speed:.1f}", True, UI_COL)
        self.screen.blit(speed, speed.get_rect(center=(WIDTH // 2, 16)))

        remaining = snap.player.speed_effect_remaining
        if remaining > 0:
            fast = snap.player.speed_factor > 1.0
            label = f"{'BOOST' if fast else 'SLOW'} {remaining:.1f}s"
            effect = self.font_small.render(label, True, SPEED_UP_COL if fast else SLOW_DOWN_COL)
            self.screen.blit(effect, effect.get_rect(center=(WIDTH // 2, 34)))

        enemies = self.font_small.render(f"ENEMIES {len(snap.enemies)}", True, ENEMY_COL)
        self.screen.blit(enemies, enemies.get_rect(topright=(WIDTH - 16, 6)))

    # ── Overlays ──────────────────────────────────────────────────
    def _draw_overlay(self, title: str, subtitle: str) -> None:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 200))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        title_col = _lerp_color(BG, FOOD_COL, pulse)
        cy = OFFSET_Y + GAME_H // 2
        t = self.font_title.render(title, True, title_col)
        self.screen.blit(t, t.get_rect(center=(WIDTH // 2, cy - 20)))
        s = self.font_med.render(subtitle, True, UI_COL)
        self.screen.blit(s, s.get_rect(center=(WIDTH // 2, cy + 24)))

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 42, True),
            ("font_big",   "courier", 22, True),
            ("font_med",   "courier", 17, False),
            ("font_small", "courier", 13, True),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.SysFont(None, size))
