from __future__ import annotations

import logging
from typing import List, Optional

from .config import GameConfig
from .dungeon.generator import generate_dungeon
from .dungeon.rooms import Room
from .entities import PLAYER_HANDLE, Entity, EntityRegistry
from .errors import LevelGenerationError
from .fov import FovAlgorithm, VisibilityEngine
from .input import MOVE_DELTAS, Action
from .map.grid import GameMap
from .movement import try_move
from .rng import RandomSource

logger = logging.getLogger(__name__)


class Game:
    """Owns the level: map, entity registry, visibility and the recompute flag.

    Per turn the order is fixed: at most one move, then ``update_visibility``,
    then the renderer reads the state.
    """

    def __init__(
        self,
        config: GameConfig,
        game_map: GameMap,
        entities: EntityRegistry,
        rooms: Optional[List[Room]] = None,
    ) -> None:
        self.config = config
        self.game_map = game_map
        self.entities = entities
        self.rooms: List[Room] = list(rooms or [])
        self.visibility = VisibilityEngine(
            radius=config.fov.radius,
            light_walls=config.fov.light_walls,
            algorithm=FovAlgorithm(config.fov.algorithm.lower()),
        )
        self.recompute_visibility = True

    @classmethod
    def new(cls, config: GameConfig, rng: Optional[RandomSource] = None) -> "Game":
        """Generate a fresh level from ``config``.

        Raises LevelGenerationError when the parameters produced no rooms.
        """
        config.validate()
        rng = rng or RandomSource(config.seed)
        d = config.dungeon
        result = generate_dungeon(
            d.map_width,
            d.map_height,
            d.room_min_size,
            d.room_max_size,
            d.max_rooms,
            rng=rng,
            max_entities_per_room=d.max_entities_per_room,
        )
        if not result.ok:
            raise LevelGenerationError(
                f"No rooms could be placed on a {d.map_width}x{d.map_height} map "
                f"with {d.max_rooms} attempts of size {d.room_min_size}..{d.room_max_size}"
            )
        result.entities.player.color = config.palette.player
        logger.info(
            "Level ready: %d rooms, %d entities, player at %s",
            len(result.rooms),
            len(result.entities),
            result.player_spawn,
        )
        return cls(config, result.game_map, result.entities, result.rooms)

    @property
    def player(self) -> Entity:
        return self.entities.player

    def move(self, handle: int, dx: int, dy: int) -> bool:
        result = try_move(self.game_map, self.entities, handle, dx, dy)
        if result.moved and handle == PLAYER_HANDLE:
            self.recompute_visibility = True
        return result.moved

    def update_visibility(self) -> bool:
        """Recompute FOV from the player if a move asked for it."""
        if not self.recompute_visibility:
            return False
        self.visibility.recompute(self.game_map, self.player.pos)
        self.recompute_visibility = False
        return True

    def handle_action(self, action: Action) -> bool:
        """Apply one action. Returns False when the player asked to quit."""
        if action is Action.QUIT:
            logger.info("Quit requested")
            return False
        delta = MOVE_DELTAS.get(action)
        if delta is not None:
            self.move(PLAYER_HANDLE, *delta)
        return True
