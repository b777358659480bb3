from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

FOV_ALGORITHMS = ("basic", "shadowcast")


def _color(name: str, value: Any) -> Color:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 3
        or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value)
    ):
        raise ConfigurationError(f"{name} must be three integers in 0..255, got {value!r}")
    return tuple(value)


@dataclass
class DisplayConfig:
    screen_width: int = 80
    screen_height: int = 50
    tile_size: int = 16
    title: str = "delve"


@dataclass
class DungeonConfig:
    map_width: int = 80
    map_height: int = 45
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30
    max_entities_per_room: int = 3


@dataclass
class FovSettings:
    radius: int = 10
    light_walls: bool = True
    algorithm: str = "basic"


@dataclass
class Palette:
    """Background colors keyed by (currently visible, is wall)."""

    dark_wall: Color = (0, 0, 100)
    dark_ground: Color = (50, 50, 150)
    light_wall: Color = (130, 110, 50)
    light_ground: Color = (200, 180, 50)
    player: Color = (255, 255, 255)

    def background(self, visible: bool, wall: bool) -> Color:
        if visible:
            return self.light_wall if wall else self.light_ground
        return self.dark_wall if wall else self.dark_ground


@dataclass
class GameConfig:
    """Everything the core needs, built once at startup and passed explicitly.

    Values come from dataclass defaults, optionally overlaid by a YAML file:

        dungeon:
          map_width: 60
          max_rooms: 20
        fov:
          radius: 8
        seed: 1234
    """

    display: DisplayConfig = field(default_factory=DisplayConfig)
    dungeon: DungeonConfig = field(default_factory=DungeonConfig)
    fov: FovSettings = field(default_factory=FovSettings)
    palette: Palette = field(default_factory=Palette)
    seed: Optional[int] = None

    # ---- Validation ------------------------------------------------------
    def validate(self) -> "GameConfig":
        d = self.dungeon
        if d.map_width <= 0 or d.map_height <= 0:
            raise ConfigurationError(f"Map size must be positive, got {d.map_width}x{d.map_height}")
        if d.room_min_size < 1:
            raise ConfigurationError(f"room_min_size must be >= 1, got {d.room_min_size}")
        if d.room_min_size > d.room_max_size:
            raise ConfigurationError(
                f"room_min_size ({d.room_min_size}) must not exceed room_max_size ({d.room_max_size})"
            )
        if d.room_max_size >= min(d.map_width, d.map_height):
            raise ConfigurationError(
                f"room_max_size ({d.room_max_size}) must be smaller than the map's "
                f"shortest side ({min(d.map_width, d.map_height)})"
            )
        if d.max_rooms < 0:
            raise ConfigurationError(f"max_rooms must be >= 0, got {d.max_rooms}")
        if d.max_entities_per_room < 1:
            raise ConfigurationError(f"max_entities_per_room must be >= 1, got {d.max_entities_per_room}")
        if self.fov.radius < 0:
            raise ConfigurationError(f"fov.radius must be >= 0, got {self.fov.radius}")
        if self.fov.algorithm.lower() not in FOV_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown fov.algorithm {self.fov.algorithm!r}; expected one of {FOV_ALGORITHMS}"
            )
        if d.map_width > self.display.screen_width or d.map_height > self.display.screen_height:
            raise ConfigurationError(
                f"Map {d.map_width}x{d.map_height} does not fit the "
                f"{self.display.screen_width}x{self.display.screen_height} screen"
            )
        if self.display.tile_size <= 0:
            raise ConfigurationError(f"display.tile_size must be positive, got {self.display.tile_size}")
        return self

    # ---- Loading / saving -----------------------------------------------
    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as ex:
                raise ConfigurationError(f"Config file {path} is not valid YAML: {ex}") from ex
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _section(section_cls: type, name: str, raw: Any) -> Any:
        """Build one dataclass section, checking each value against its default's type."""
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config section {name!r} must be a mapping, got {type(raw).__name__}")
        defaults = section_cls()
        known = {f.name for f in dataclasses.fields(section_cls)}
        unknown = sorted(str(k) for k in set(raw) - known)
        if unknown:
            raise ConfigurationError(f"Unknown key(s) in {name!r}: {', '.join(unknown)}")
        values = {}
        for key, value in raw.items():
            expected = type(getattr(defaults, key))
            if expected is tuple:
                value = _color(f"{name}.{key}", value)
            elif expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigurationError(f"{name}.{key} must be an integer, got {value!r}")
            elif expected is not int and not isinstance(value, expected):
                raise ConfigurationError(f"{name}.{key} must be {expected.__name__}, got {value!r}")
            values[key] = value
        return section_cls(**values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        unknown = sorted(str(k) for k in set(data) - {f.name for f in dataclasses.fields(cls)})
        if unknown:
            raise ConfigurationError(f"Unknown config key(s): {', '.join(unknown)}")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ConfigurationError(f"seed must be an integer, got {seed!r}")
        return cls(
            display=cls._section(DisplayConfig, "display", data.get("display")),
            dungeon=cls._section(DungeonConfig, "dungeon", data.get("dungeon")),
            fov=cls._section(FovSettings, "fov", data.get("fov")),
            palette=cls._section(Palette, "palette", data.get("palette")),
            seed=seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data["palette"] = {k: list(v) for k, v in data["palette"].items()}
        return data

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GameConfig":
        """Load defaults, overlaid by the YAML file at ``path`` when given."""
        user_data: dict = {}
        if path is not None:
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")
            user_data = cls._load_yaml(path)
            logger.info("Loaded config from %s", path)

        merged = cls._deep_merge(cls().to_dict(), user_data)
        config = cls.from_dict(merged).validate()
        logger.debug("Config merged: %s", config)
        return config

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        logger.info("Saved config to %s", path)
