from __future__ import annotations

import logging
from typing import Optional, Tuple

import arcade

from ..config import GameConfig
from ..game import Game
from ..input import InputMapper
from ..render import render_frame
from ..rng import RandomSource

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

_KEY_NAMES = ("UP", "DOWN", "LEFT", "RIGHT", "W", "A", "S", "D", "ESCAPE")


def arcade_input_mapper() -> InputMapper:
    """Default bindings with arcade's integer key codes aliased to key names."""
    mapper = InputMapper.default()
    for name in _KEY_NAMES:
        mapper.set_alias(getattr(arcade.key, name), name)
    return mapper


class ArcadeRenderer:
    """Draws cells straight onto the active arcade window during ``on_draw``.

    Cell (0, 0) is the top-left corner; arcade's origin is bottom-left.
    """

    def __init__(self, window: arcade.Window, rows: int, tile_size: int) -> None:
        self.window = window
        self.rows = rows
        self.tile_size = tile_size

    def _cell(self, x: int, y: int) -> Tuple[float, float, float, float]:
        left = x * self.tile_size
        bottom = (self.rows - 1 - y) * self.tile_size
        return left, left + self.tile_size, bottom, bottom + self.tile_size

    def clear(self) -> None:
        self.window.clear()

    def set_background(self, x: int, y: int, color: Color) -> None:
        left, right, bottom, top = self._cell(x, y)
        arcade.draw_polygon_filled(
            [(left, bottom), (right, bottom), (right, top), (left, top)],
            color,
        )

    def put_glyph(self, x: int, y: int, glyph: str, color: Color) -> None:
        left, right, bottom, top = self._cell(x, y)
        arcade.draw_text(
            glyph,
            (left + right) / 2,
            (bottom + top) / 2,
            color,
            font_size=self.tile_size * 0.75,
            anchor_x="center",
            anchor_y="center",
        )

    def present(self) -> None:
        # arcade flips the back buffer once on_draw returns
        pass


class DungeonWindow(arcade.Window):
    """Arcade window driving a Game: key presses in, frames out."""

    def __init__(self, game: Game, mapper: Optional[InputMapper] = None) -> None:
        display = game.config.display
        super().__init__(
            display.screen_width * display.tile_size,
            display.screen_height * display.tile_size,
            display.title,
        )
        self.game = game
        self.mapper = mapper or arcade_input_mapper()
        self.renderer = ArcadeRenderer(self, display.screen_height, display.tile_size)
        logger.info("Arcade window initialized (%dx%d)", self.width, self.height)

    def on_draw(self) -> None:
        self.game.update_visibility()
        render_frame(self.game, self.renderer)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        action = self.mapper.translate_key(symbol)
        if not self.game.handle_action(action):
            self.close()
            return
        self.game.update_visibility()


def run_gui(config: GameConfig, rng: Optional[RandomSource] = None) -> int:  # pragma: no cover - manual usage
    """Generate a level and open an interactive window."""
    game = Game.new(config, rng)
    DungeonWindow(game)
    arcade.run()
    return 0
