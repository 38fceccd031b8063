"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into session Actions.
  - Drive the game loop: tick the session, hand its snapshot to the view.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the session's job).

The controller is the only layer that reads pygame events.
"""

import logging
import sys
from typing import Optional

import pygame

from .config import WIDTH, HEIGHT, FPS, GameSettings
from .session import Action, GameSession
from .view import GameView

logger = logging.getLogger(__name__)

KEY_ACTIONS = {
    pygame.K_UP:     Action.MOVE_UP,
    pygame.K_w:      Action.MOVE_UP,
    pygame.K_DOWN:   Action.MOVE_DOWN,
    pygame.K_s:      Action.MOVE_DOWN,
    pygame.K_LEFT:   Action.MOVE_LEFT,
    pygame.K_a:      Action.MOVE_LEFT,
    pygame.K_RIGHT:  Action.MOVE_RIGHT,
    pygame.K_d:      Action.MOVE_RIGHT,
    pygame.K_p:      Action.PAUSE,
    pygame.K_ESCAPE: Action.PAUSE,
    pygame.K_RETURN: Action.CONFIRM,
    pygame.K_SPACE:  Action.CONFIRM,
    pygame.K_r:      Action.RESTART,
}


def action_for_key(key: int) -> Action:
    return KEY_ACTIONS.get(key, Action.NONE)


class GameController:
    """
    Owns the main loop.
    Glues GameSession <-> GameView without them knowing about each other.
    """

    def __init__(self, settings: Optional[GameSettings] = None):
        pygame.init()
        self.screen  = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("SUPER SNAKE")
        self.clock   = pygame.time.Clock()
        self.session = GameSession(settings)
        self.view    = GameView(self.screen)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        logger.info("Game loop started at %d FPS", FPS)
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self.session.update(dt)
            self.view.render(self.session.get_snapshot())

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        # Q quits from any state
        if key == pygame.K_q:
            self._quit()
        action = action_for_key(key)
        if action is not Action.NONE:
            self.session.handle_action(action)

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        logger.info("Quitting")
        pygame.quit()
        sys.exit()
