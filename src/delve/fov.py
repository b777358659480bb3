from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Set, Tuple

from .map.grid import GameMap

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class FovAlgorithm(str, Enum):
    BASIC = "basic"
    SHADOWCAST = "shadowcast"


class FogState(str, Enum):
    UNSEEN = "unseen"         # never seen; not drawn
    EXPLORED = "explored"     # seen before but not currently visible; dim
    VISIBLE = "visible"       # currently visible; lit


def chebyshev_distance(ax: int, ay: int, bx: int, by: int) -> int:
    return max(abs(ax - bx), abs(ay - by))


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Coord]:
    """
    Bresenham's line algorithm. Returns the list of points from (x0, y0) to (x1, y1) inclusive.
    """
    points: List[Coord] = []

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return points


def has_line_of_sight(game_map: GameMap, x0: int, y0: int, x1: int, y1: int) -> bool:
    """True if no tile strictly between the two endpoints blocks sight."""
    line = bresenham_line(x0, y0, x1, y1)
    for x, y in line[1:-1]:
        if game_map.is_blocking_sight(x, y):
            return False
    return True


def _basic_fov(game_map: GameMap, ox: int, oy: int, radius: int) -> Set[Coord]:
    visible: Set[Coord] = {(ox, oy)}

    min_x = max(0, ox - radius)
    max_x = min(game_map.width - 1, ox + radius)
    min_y = max(0, oy - radius)
    max_y = min(game_map.height - 1, oy + radius)

    for y in range(min_y, max_y + 1):
        for x in range(min_x, max_x + 1):
            if (x, y) in visible:
                continue
            if has_line_of_sight(game_map, ox, oy, x, y):
                visible.add((x, y))
    return visible


# Octant transforms: (xx, xy, yx, yy)
_OCTANTS = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


@dataclass
class _Shadowcaster:
    game_map: GameMap
    ox: int
    oy: int
    radius: int
    visible: Set[Coord] = field(default_factory=set)

    def _opaque(self, x: int, y: int) -> bool:
        if not self.game_map.in_bounds(x, y):
            return True
        return self.game_map.is_blocking_sight(x, y)

    def run(self) -> Set[Coord]:
        self.visible.add((self.ox, self.oy))
        for octant in _OCTANTS:
            self._cast(1, 1.0, 0.0, octant)
        return self.visible

    def _cast(self, row: int, start: float, end: float, octant: Tuple[int, int, int, int]) -> None:
        if start < end:
            return
        xx, xy, yx, yy = octant
        new_start = start
        for j in range(row, self.radius + 1):
            dx, dy = -j - 1, -j
            blocked = False
            while dx <= 0:
                dx += 1
                x = self.ox + dx * xx + dy * xy
                y = self.oy + dx * yx + dy * yy
                l_slope = (dx - 0.5) / (dy + 0.5)
                r_slope = (dx + 0.5) / (dy - 0.5)
                if start < r_slope:
                    continue
                if end > l_slope:
                    break
                if self.game_map.in_bounds(x, y):
                    self.visible.add((x, y))
                if blocked:
                    if self._opaque(x, y):
                        new_start = r_slope
                        continue
                    blocked = False
                    start = new_start
                elif self._opaque(x, y) and j < self.radius:
                    blocked = True
                    self._cast(j + 1, start, l_slope, octant)
                    new_start = r_slope
            if blocked:
                break


def compute_fov(
    game_map: GameMap,
    origin: Coord,
    radius: int,
    *,
    light_walls: bool = True,
    algorithm: FovAlgorithm = FovAlgorithm.BASIC,
) -> Set[Coord]:
    """
    Compute the set of tiles visible from ``origin`` within Chebyshev ``radius``.

    The origin is always visible. With ``light_walls`` the first sight-blocking
    tile on a line is itself visible; without it, sight-blocking tiles are left
    out of the result.
    """
    ox, oy = origin
    if not game_map.in_bounds(ox, oy):
        raise ValueError("Origin out of bounds")
    if radius < 0:
        raise ValueError("radius must be >= 0")

    algorithm = FovAlgorithm(algorithm)
    if algorithm is FovAlgorithm.SHADOWCAST:
        visible = _Shadowcaster(game_map, ox, oy, radius).run()
    else:
        visible = _basic_fov(game_map, ox, oy, radius)

    if not light_walls:
        visible = {(x, y) for (x, y) in visible if (x, y) == origin or not game_map.is_blocking_sight(x, y)}

    logger.debug("FOV (%s) from (%d,%d) radius %d -> %d visible tiles", algorithm.value, ox, oy, radius, len(visible))
    return visible


class VisibilityEngine:
    """
    Tracks the momentary visible set and writes fog-of-war memory into the map.

    Each ``recompute`` replaces the visible set wholesale; the ``explored``
    flag on map tiles only accumulates.
    """

    def __init__(
        self,
        radius: int = 10,
        light_walls: bool = True,
        algorithm: FovAlgorithm = FovAlgorithm.BASIC,
    ) -> None:
        if radius < 0:
            raise ValueError("radius must be >= 0")
        self.radius = radius
        self.light_walls = light_walls
        self.algorithm = FovAlgorithm(algorithm)
        self._visible: Set[Coord] = set()

    def recompute(self, game_map: GameMap, origin: Coord) -> Set[Coord]:
        self._visible = compute_fov(
            game_map,
            origin,
            self.radius,
            light_walls=self.light_walls,
            algorithm=self.algorithm,
        )
        for x, y in self._visible:
            game_map.set_explored(x, y)
        return set(self._visible)

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible

    def visible_tiles(self) -> Set[Coord]:
        return set(self._visible)

    def state(self, game_map: GameMap, x: int, y: int) -> FogState:
        if (x, y) in self._visible:
            return FogState.VISIBLE
        if game_map.is_explored(x, y):
            return FogState.EXPLORED
        return FogState.UNSEEN

    def reset(self) -> None:
        """Forget the current visible set (explored memory lives on the map)."""
        self._visible.clear()
