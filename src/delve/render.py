from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Tuple

from .fov import FogState

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class Renderer(Protocol):
    """Drawing surface the core paints a frame onto."""

    def clear(self) -> None: ...

    def put_glyph(self, x: int, y: int, glyph: str, color: Color) -> None: ...

    def set_background(self, x: int, y: int, color: Color) -> None: ...

    def present(self) -> None: ...


def render_frame(game: "Game", renderer: Renderer) -> None:
    """Paint the map and entities for one frame.

    Tiles never seen stay undrawn; explored tiles get the dark colors and
    visible tiles the lit ones. Entities are only drawn on visible tiles, and
    the player last so it is always on top.
    """
    game_map = game.game_map
    palette = game.config.palette
    visibility = game.visibility

    renderer.clear()
    for y in range(game_map.height):
        for x in range(game_map.width):
            state = visibility.state(game_map, x, y)
            if state is FogState.UNSEEN:
                continue
            wall = game_map.tile(x, y).is_wall
            renderer.set_background(x, y, palette.background(state is FogState.VISIBLE, wall))

    player = game.player
    for entity in game.entities:
        if entity is player:
            continue
        if visibility.is_visible(entity.x, entity.y):
            renderer.put_glyph(entity.x, entity.y, entity.glyph, entity.color)
    renderer.put_glyph(player.x, player.y, player.glyph, player.color)
    renderer.present()


class TextRenderer:
    """In-memory character grid implementing ``Renderer``.

    Backgrounds are tracked per cell; a cell with a background but no glyph
    shows ``#`` for wall colors and ``.`` otherwise. Cells never painted stay blank.
    """

    def __init__(self, width: int, height: int, wall_colors: Tuple[Color, ...] = ()) -> None:
        self.width = width
        self.height = height
        self.wall_colors = set(wall_colors)
        self.frames = 0
        self._glyphs: Dict[Tuple[int, int], Tuple[str, Color]] = {}
        self._backgrounds: Dict[Tuple[int, int], Color] = {}
        self._last: List[str] = []

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Draw outside surface: ({x},{y})")

    def clear(self) -> None:
        self._glyphs.clear()
        self._backgrounds.clear()

    def put_glyph(self, x: int, y: int, glyph: str, color: Color) -> None:
        self._check(x, y)
        self._glyphs[(x, y)] = (glyph, color)

    def set_background(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self._backgrounds[(x, y)] = color

    def background_at(self, x: int, y: int) -> Optional[Color]:
        return self._backgrounds.get((x, y))

    def glyph_at(self, x: int, y: int) -> Optional[str]:
        entry = self._glyphs.get((x, y))
        return entry[0] if entry else None

    def present(self) -> None:
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                glyph = self.glyph_at(x, y)
                if glyph is not None:
                    row.append(glyph)
                elif (x, y) in self._backgrounds:
                    row.append("#" if self._backgrounds[(x, y)] in self.wall_colors else ".")
                else:
                    row.append(" ")
            lines.append("".join(row))
        self._last = lines
        self.frames += 1

    def lines(self) -> List[str]:
        return list(self._last)
