from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from .entities import EntityRegistry
from .map.grid import GameMap

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    handle: int
    moved: bool
    position: Tuple[int, int]


def try_move(game_map: GameMap, entities: EntityRegistry, handle: int, dx: int, dy: int) -> MoveResult:
    """
    Attempt to move entity ``handle`` by (dx, dy), updating it in place.

    Blocked when the destination tile is blocking or another blocking entity
    stands there. Only the destination is checked, so diagonal steps may cut
    corners. A destination off the map raises IndexError.
    """
    entity = entities.get(handle)
    nx, ny = entity.x + dx, entity.y + dy

    if game_map.is_blocking(nx, ny):
        logger.debug("%s blocked by terrain at (%d,%d)", entity.name, nx, ny)
        return MoveResult(handle, False, entity.pos)

    other = entities.blocking_at(nx, ny, exclude=handle)
    if other is not None:
        logger.debug("%s blocked by %s at (%d,%d)", entity.name, entities.get(other).name, nx, ny)
        return MoveResult(handle, False, entity.pos)

    entity.move_to(nx, ny)
    return MoveResult(handle, True, entity.pos)
