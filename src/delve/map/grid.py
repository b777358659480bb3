from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, List, Sequence, Tuple

from .tiles import Tile

if TYPE_CHECKING:
    from ..dungeon.rooms import Room

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class GameMap:
    """
    Fixed-size grid of tiles, indexed ``(x, y)`` with x in [0, width) and
    y in [0, height). Starts as solid wall.

    Every accessor is bounds-checked: an out-of-range coordinate is a logic
    error in the caller and raises IndexError immediately.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("GameMap width/height must be > 0")
        self.width = width
        self.height = height
        self._tiles: List[List[Tile]] = [[Tile.wall() for _ in range(width)] for _ in range(height)]
        logger.debug("GameMap created: %dx%d", width, height)

    # ---- Bounds ----------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self.width})x[0,{self.height})")
        return self._tiles[y][x]

    # ---- Query -----------------------------------------------------------
    def is_blocking(self, x: int, y: int) -> bool:
        return self.tile(x, y).blocking

    def is_blocking_sight(self, x: int, y: int) -> bool:
        return self.tile(x, y).blocking_sight

    def is_explored(self, x: int, y: int) -> bool:
        return self.tile(x, y).explored

    def set_explored(self, x: int, y: int) -> None:
        self.tile(x, y).explored = True

    def coords(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def count_open(self) -> int:
        return sum(1 for row in self._tiles for t in row if not t.blocking)

    # ---- Carving helpers -------------------------------------------------
    def carve(self, x: int, y: int) -> None:
        """Turn the tile at (x, y) into open floor, keeping its explored flag."""
        tile = self.tile(x, y)
        tile.blocking = False
        tile.blocking_sight = False

    def carve_room(self, room: Room) -> None:
        for x, y in room.interior():
            self.carve(x, y)

    def carve_h_tunnel(self, x1: int, x2: int, y: int) -> None:
        if x2 < x1:
            x1, x2 = x2, x1
        for x in range(x1, x2 + 1):
            self.carve(x, y)

    def carve_v_tunnel(self, y1: int, y2: int, x: int) -> None:
        if y2 < y1:
            y1, y2 = y2, y1
        for y in range(y1, y2 + 1):
            self.carve(x, y)

    # ---- Export / tooling ------------------------------------------------
    @classmethod
    def from_ascii(cls, rows: Sequence[str], wall_chars: Iterable[str] = ("#",)) -> "GameMap":
        """
        Build a GameMap from ASCII rows for tests/tools.
        Any char in wall_chars is a wall; all others are open floor.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ValueError("All rows must be same width")
        game_map = cls(width, len(rows))
        walls = set(wall_chars)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch not in walls:
                    game_map.carve(x, y)
        return game_map

    def to_str_lines(self) -> List[str]:
        return ["".join(t.glyph for t in row) for row in self._tiles]

    def __repr__(self) -> str:
        return f"GameMap({self.width}x{self.height})"
