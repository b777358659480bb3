from __future__ import annotations

from collections import deque
from typing import Optional, Tuple

from .grid import GameMap

Coord = Tuple[int, int]


def find_path_bfs(game_map: GameMap, start: Coord, goal: Coord) -> Optional[int]:
    """Breadth-first search over open tiles; returns the number of steps or None.

    Uses 4-directional movement.
    """
    if game_map.is_blocking(*start) or game_map.is_blocking(*goal):
        return None

    q = deque([(start[0], start[1], 0)])
    seen = {start}
    while q:
        x, y, d = q.popleft()
        if (x, y) == goal:
            return d
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if (nx, ny) in seen or not game_map.in_bounds(nx, ny):
                continue
            if game_map.is_blocking(nx, ny):
                continue
            seen.add((nx, ny))
            q.append((nx, ny, d + 1))
    return None
