from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class Action(Enum):
    """Logical actions the core understands, independent of any input device."""

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    QUIT = auto()
    NO_OP = auto()


MOVE_DELTAS: Dict[Action, Tuple[int, int]] = {
    Action.MOVE_UP: (0, -1),
    Action.MOVE_DOWN: (0, 1),
    Action.MOVE_LEFT: (-1, 0),
    Action.MOVE_RIGHT: (1, 0),
}


class InputSource(Protocol):
    def wait_for_action(self) -> Action:
        """Block until the next discrete action is available."""
        ...


class InputMapper:
    """Rebindable mapping from physical key names to logical actions.

    Keys are strings normalized to upper case, so backends only need to turn
    their key codes into names (see ``set_alias`` for backend-specific codes).

        mapper = InputMapper.default()
        mapper.translate_key("w")   # -> Action.MOVE_UP
        mapper.translate_key("F12") # -> Action.NO_OP
    """

    def __init__(self, bindings: Optional[Dict[str, Action]] = None) -> None:
        self._bindings: Dict[str, Action] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)

    @staticmethod
    def _normalize(key: str | int | None) -> Optional[str]:
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        k = key.strip()
        if not k:
            return None
        return k.upper()

    def bind(self, key: str | int, action: Action) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: Action) -> None:
        for k in keys:
            self.bind(k, action)

    def unbind(self, key: str | int) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key (e.g. an integer key code) to a canonical name."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def translate_key(self, key: str | int | None) -> Action:
        nk = self._normalize(key)
        if nk is None:
            return Action.NO_OP
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get(canonical, Action.NO_OP)

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and WASD move; Escape quits."""
        mapper = cls()
        mapper.bind_many(["UP", "W"], Action.MOVE_UP)
        mapper.bind_many(["DOWN", "S"], Action.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A"], Action.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D"], Action.MOVE_RIGHT)
        mapper.bind_many(["ESCAPE", "ESC"], Action.QUIT)
        return mapper


class ScriptedInput:
    """Replays a fixed sequence of actions, then quits. For headless runs and tests."""

    def __init__(self, actions: Iterable[Action]) -> None:
        self._actions: Iterator[Action] = iter(actions)

    def wait_for_action(self) -> Action:
        return next(self._actions, Action.QUIT)


__all__ = ["Action", "MOVE_DELTAS", "InputSource", "InputMapper", "ScriptedInput"]
