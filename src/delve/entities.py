from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

PLAYER_HANDLE = 0


class EntityKind(Enum):
    """Decorative categories for scattered entities.

    Kinds differ only in display data and spawn weight.
    """

    RAT = ("r", (191, 143, 0), "rat", 60)
    GOBLIN = ("g", (0, 127, 0), "goblin", 30)
    OGRE = ("O", (127, 0, 0), "ogre", 10)

    def __init__(self, glyph: str, color: Color, label: str, weight: int) -> None:
        self.glyph = glyph
        self.color = color
        self.label = label
        self.weight = weight

    @classmethod
    def spawn_weights(cls) -> dict:
        return {kind: kind.weight for kind in cls}


@dataclass
class Entity:
    """Anything that occupies a tile. The entity owns its position."""

    x: int
    y: int
    glyph: str
    color: Color
    name: str
    blocking: bool = True
    alive: bool = True
    kind: Optional[EntityKind] = None

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    @classmethod
    def player(cls, x: int, y: int, color: Color = (255, 255, 255)) -> "Entity":
        return cls(x=x, y=y, glyph="@", color=color, name="player")

    @classmethod
    def from_kind(cls, kind: EntityKind, x: int, y: int) -> "Entity":
        return cls(x=x, y=y, glyph=kind.glyph, color=kind.color, name=kind.label, kind=kind)


class EntityRegistry:
    """Ordered arena of entities addressed by integer handles.

    A handle is the entity's index and never changes: there is no removal or
    reordering, and handle 0 is always the player. Cross-entity queries go
    through the registry rather than through references held by entities.
    """

    def __init__(self, player: Entity) -> None:
        self._entities: List[Entity] = [player]

    def add(self, entity: Entity) -> int:
        self._entities.append(entity)
        handle = len(self._entities) - 1
        logger.debug("Registered %s at (%d,%d) as handle %d", entity.name, entity.x, entity.y, handle)
        return handle

    def get(self, handle: int) -> Entity:
        if not 0 <= handle < len(self._entities):
            raise IndexError(f"Entity handle {handle} out of range (registry size {len(self._entities)})")
        return self._entities[handle]

    @property
    def player(self) -> Entity:
        return self._entities[PLAYER_HANDLE]

    def handles(self) -> range:
        return range(len(self._entities))

    def blocking_at(self, x: int, y: int, exclude: Optional[int] = None) -> Optional[int]:
        """Handle of a blocking entity standing on (x, y), ignoring ``exclude``.

        ``alive`` is not consulted.
        """
        for handle, e in enumerate(self._entities):
            if handle == exclude:
                continue
            if e.blocking and e.x == x and e.y == y:
                return handle
        return None

    def occupied(self, x: int, y: int) -> bool:
        return any(e.x == x and e.y == y for e in self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, handle: int) -> Entity:
        return self.get(handle)
