from .tiles import Tile
from .grid import GameMap

__all__ = ["Tile", "GameMap"]
