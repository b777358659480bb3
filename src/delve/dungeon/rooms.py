from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Room:
    """Half-open rectangle [x1, x2) x [y1, y2); the outer ring stays wall."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Room":
        return cls(x, y, x + w, y + h)

    def center(self) -> Coord:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Room") -> bool:
        # Inclusive of shared edges, so accepted rooms keep a wall between them.
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Coord]:
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                yield (x, y)
