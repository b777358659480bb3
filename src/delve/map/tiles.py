from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Tile:
    """Map tile flags.

    Generation only ever produces walls (blocking, sight-blocking) or open
    floor (neither). ``explored`` is fog-of-war memory and only goes False -> True.
    """

    blocking: bool
    blocking_sight: bool
    explored: bool = False

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocking=True, blocking_sight=True)

    @classmethod
    def floor(cls) -> "Tile":
        return cls(blocking=False, blocking_sight=False)

    @property
    def is_wall(self) -> bool:
        return self.blocking_sight

    @property
    def glyph(self) -> str:
        """Debug/log character for this tile."""
        return "#" if self.blocking else "."
