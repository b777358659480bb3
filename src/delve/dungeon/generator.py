from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..entities import Entity, EntityKind, EntityRegistry
from ..errors import ConfigurationError
from ..map.grid import GameMap
from ..rng import RandomSource
from .rooms import Room

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class GenerationResult:
    game_map: GameMap
    rooms: List[Room]
    player_spawn: Coord
    entities: EntityRegistry

    @property
    def ok(self) -> bool:
        """False when no room was accepted and the map is solid wall."""
        return bool(self.rooms)


def validate_parameters(width: int, height: int, room_min: int, room_max: int, max_attempts: int) -> None:
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Map size must be positive, got {width}x{height}")
    if room_min < 1 or room_min > room_max:
        raise ConfigurationError(f"Need 1 <= room_min <= room_max, got {room_min}..{room_max}")
    if room_max >= min(width, height):
        raise ConfigurationError(
            f"room_max ({room_max}) must be smaller than the map's shortest side ({min(width, height)})"
        )
    if max_attempts < 0:
        raise ConfigurationError(f"max_attempts must be >= 0, got {max_attempts}")


@dataclass
class DungeonGenerator:
    """Rooms-and-corridors level builder.

    Each accepted room is chained to the previous one by an L-shaped corridor
    between their centers, so every room is reachable from the first. Corridors
    are carved straight through whatever lies in their way.
    """

    width: int
    height: int
    rng: RandomSource
    max_entities_per_room: int = 3
    game_map: GameMap = field(init=False)
    rooms: List[Room] = field(init=False, default_factory=list)
    entities: Optional[EntityRegistry] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.game_map = GameMap(self.width, self.height)

    def random_room(self, room_min: int, room_max: int) -> Room:
        w = self.rng.randint(room_min, room_max)
        h = self.rng.randint(room_min, room_max)
        x = self.rng.randrange(0, self.width - w)
        y = self.rng.randrange(0, self.height - h)
        return Room.from_size(x, y, w, h)

    def place_room(self, room: Room) -> bool:
        """Accept and carve ``room`` unless it touches an accepted room."""
        if any(room.intersects(other) for other in self.rooms):
            return False

        self.game_map.carve_room(room)
        new_x, new_y = room.center()
        if not self.rooms:
            self.entities = EntityRegistry(Entity.player(new_x, new_y))
        else:
            prev_x, prev_y = self.rooms[-1].center()
            if self.rng.coin_flip():
                self.game_map.carve_h_tunnel(prev_x, new_x, prev_y)
                self.game_map.carve_v_tunnel(prev_y, new_y, new_x)
            else:
                self.game_map.carve_v_tunnel(prev_y, new_y, prev_x)
                self.game_map.carve_h_tunnel(prev_x, new_x, new_y)
        self.rooms.append(room)
        self.scatter_entities(room)
        return True

    def scatter_entities(self, room: Room) -> int:
        """Drop 1..max_entities_per_room decorative entities inside ``room``."""
        assert self.entities is not None
        if room.x2 - room.x1 < 2 or room.y2 - room.y1 < 2:
            return 0

        wanted = self.rng.randint(1, self.max_entities_per_room)
        max_tries = self.max_entities_per_room * 10
        placed = 0
        for _ in range(wanted):
            for _ in range(max_tries):
                x = self.rng.randint(room.x1 + 1, room.x2 - 1)
                y = self.rng.randint(room.y1 + 1, room.y2 - 1)
                if self.game_map.is_blocking(x, y) or self.entities.occupied(x, y):
                    continue
                kind = self.rng.weighted_choice(EntityKind.spawn_weights())
                self.entities.add(Entity.from_kind(kind, x, y))
                placed += 1
                break
            else:
                logger.debug("No free tile for an entity in %s after %d tries", room, max_tries)
        return placed

    def result(self) -> GenerationResult:
        if self.rooms and self.entities is not None:
            spawn = self.rooms[0].center()
            entities = self.entities
        else:
            spawn = (self.width // 2, self.height // 2)
            entities = EntityRegistry(Entity.player(*spawn))
            logger.warning(
                "Generation accepted no rooms on a %dx%d map; level is solid wall",
                self.width,
                self.height,
            )
        return GenerationResult(self.game_map, list(self.rooms), spawn, entities)


def generate_dungeon(
    width: int,
    height: int,
    room_min: int,
    room_max: int,
    max_attempts: int,
    *,
    rng: RandomSource,
    max_entities_per_room: int = 3,
) -> GenerationResult:
    """Build a level from ``max_attempts`` random room candidates.

    Rejected candidates are skipped, not retried, so the final room count is
    anywhere between 0 and ``max_attempts``. Check ``result.ok`` before use.
    """
    validate_parameters(width, height, room_min, room_max, max_attempts)
    if max_entities_per_room < 1:
        raise ConfigurationError(f"max_entities_per_room must be >= 1, got {max_entities_per_room}")

    gen = DungeonGenerator(width, height, rng, max_entities_per_room)
    for _ in range(max_attempts):
        gen.place_room(gen.random_room(room_min, room_max))

    result = gen.result()
    logger.debug(
        "Generated %dx%d level: %d rooms, %d entities, %d open tiles, spawn %s",
        width,
        height,
        len(result.rooms),
        len(result.entities),
        result.game_map.count_open(),
        result.player_spawn,
    )
    return result
