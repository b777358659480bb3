from .rooms import Room
from .generator import DungeonGenerator, GenerationResult, generate_dungeon

__all__ = ["Room", "DungeonGenerator", "GenerationResult", "generate_dungeon"]
