import sys
from pathlib import Path

import pytest

# Make 'src' importable without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import DungeonConfig, FovSettings, GameConfig  # noqa: E402
from delve.map.grid import GameMap  # noqa: E402


@pytest.fixture
def open_map():
    def make(width: int = 10, height: int = 10) -> GameMap:
        return GameMap.from_ascii(["." * width for _ in range(height)])

    return make


@pytest.fixture
def small_config() -> GameConfig:
    return GameConfig(
        dungeon=DungeonConfig(
            map_width=30,
            map_height=20,
            room_min_size=3,
            room_max_size=6,
            max_rooms=12,
            max_entities_per_room=2,
        ),
        fov=FovSettings(radius=4),
        seed=7,
    )
