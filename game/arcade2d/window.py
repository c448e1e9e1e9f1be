"""
Arcade windows for playing the games interactively.

    python -m game.arcade2d.window --game invaders
    python -m game.arcade2d.window --game pong

The window's scheduled `on_update` is the frame driver: it applies held-key
input and advances the simulation while the session runs; `on_draw` runs
every frame regardless, so pause and end-of-game overlays stay visible.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

import arcade

from .controls import HeldKeys
from .invaders import InvadersGame
from .pong import PongGame
from .render import draw_invaders, draw_pong

logger = logging.getLogger(__name__)

HUD_C = (220, 220, 220)

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
UP_KEYS = (arcade.key.UP, arcade.key.W)
DOWN_KEYS = (arcade.key.DOWN, arcade.key.S)


class ArcadeSurface:
    """Adapts top-left origin draw calls to arcade's bottom-left coordinates"""

    def __init__(self, window: arcade.Window):
        self.window = window

    def clear(self, color=(0, 0, 0)):
        self.window.background_color = color
        self.window.clear()

    def fill_rect(self, x, y, w, h, color):
        top = self.window.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)

    def fill_triangle(self, p1, p2, p3, color):
        h = self.window.height
        arcade.draw_triangle_filled(p1[0], h - p1[1], p2[0], h - p2[1], p3[0], h - p3[1], color)

    def fill_circle(self, cx, cy, r, color):
        arcade.draw_circle_filled(cx, self.window.height - cy, r, color)

    def draw_text(self, text, x, y, color, size=14):
        arcade.draw_text(text, x, self.window.height - y, color, size,
                         anchor_x="center", anchor_y="center")


class InvadersWindow(arcade.Window):
    """Space Invaders: Enter starts, P pauses, R resets"""

    def __init__(self, game: Optional[InvadersGame] = None, interactive: bool = True):
        self.game = game or InvadersGame()
        cfg = self.game.config
        super().__init__(cfg.width, cfg.height, "Space Invaders - Arcade")
        self.interactive = interactive
        self.surface = ArcadeSurface(self)
        self._held = HeldKeys()
        self._score = self.game.session.score
        self._lives = self.game.session.lives
        self.game.on_stats = self.show_stats

    def show_stats(self, score: int, lives: int):
        self._score = score
        self._lives = lives

    def on_draw(self):
        draw_invaders(self.surface, self.game.session, self.game.config)
        arcade.draw_text(f"Score: {self._score}   Lives: {self._lives}",
                         12, self.height - 24, HUD_C, 14)

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        direction = self._held.axis(LEFT_KEYS, RIGHT_KEYS)
        if direction:
            self.game.move_player(direction)
        self.game.step()

    def on_key_press(self, key: int, modifiers: int):
        if key in (arcade.key.ENTER, arcade.key.RETURN):
            self.game.start()
        elif key == arcade.key.P:
            self.game.toggle_pause()
        elif key == arcade.key.R:
            self._held.clear()
            self.game.reset()
        elif key == arcade.key.ESCAPE:
            self.close()
        elif key == arcade.key.SPACE:
            self.game.shoot()
        elif key in LEFT_KEYS or key in RIGHT_KEYS:
            self._held.press(key)

    def on_key_release(self, key: int, modifiers: int):
        self._held.release(key)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.game.point_player(x)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.game.shoot()


class PongWindow(arcade.Window):
    """Pong: mouse or Up/Down moves the left paddle"""

    def __init__(self, game: Optional[PongGame] = None, interactive: bool = True):
        self.game = game or PongGame()
        cfg = self.game.config
        super().__init__(cfg.width, cfg.height, "Pong - Arcade")
        self.interactive = interactive
        self.surface = ArcadeSurface(self)
        self._held = HeldKeys()

    def on_draw(self):
        draw_pong(self.surface, self.game.session, self.game.config)

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        direction = self._held.axis(UP_KEYS, DOWN_KEYS)
        if direction:
            self.game.move_player(direction)
        self.game.step()

    def on_key_press(self, key: int, modifiers: int):
        if key == arcade.key.ESCAPE:
            self.close()
        elif key in UP_KEYS or key in DOWN_KEYS:
            self._held.press(key)

    def on_key_release(self, key: int, modifiers: int):
        self._held.release(key)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        # arcade reports y from the bottom edge
        self.game.point_player(self.height - y)


WINDOWS = {
    "invaders": InvadersWindow,
    "pong": PongWindow,
}


def make_window(name: str, interactive: bool = True) -> arcade.Window:
    if name not in WINDOWS:
        raise ValueError(f"Unknown game: {name} (expected one of {sorted(WINDOWS)})")
    return WINDOWS[name](interactive=interactive)


def main():
    parser = argparse.ArgumentParser(description="Play an arcade classic")
    parser.add_argument(
        "--game",
        type=str,
        default="invaders",
        choices=sorted(WINDOWS),
        help="Which game to open (default: invaders)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    logger.info("Opening %s", args.game)

    make_window(args.game)
    arcade.run()


if __name__ == "__main__":
    main()
