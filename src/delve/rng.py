from __future__ import annotations

import logging
import random
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)


class RandomSource:
    """Seedable random stream handed to level generation.

    Generation draws only through this object, so two sources built with the
    same seed produce the same level.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        logger.debug("RandomSource ready (seed=%s)", "unseeded" if seed is None else seed)

    def randint(self, low: int, high: int) -> int:
        """Inclusive on both ends."""
        return self._rng.randint(low, high)

    def randrange(self, start: int, stop: int) -> int:
        """Half-open: start <= n < stop."""
        return self._rng.randrange(start, stop)

    def coin_flip(self) -> bool:
        return self._rng.getrandbits(1) == 1

    def weighted_choice(self, weights: Mapping[Any, float]) -> Any:
        """Pick a key with probability proportional to its weight.

        Zero weights are never picked; an empty mapping, a negative weight or
        an all-zero mapping raises ValueError.
        """
        keys: List[Any] = []
        values: List[float] = []
        for key, weight in weights.items():
            if weight < 0:
                raise ValueError(f"Weight for {key!r} must be non-negative, got {weight}")
            if weight > 0:
                keys.append(key)
                values.append(weight)
        if not keys:
            raise ValueError("weighted_choice needs at least one positive weight")
        return self._rng.choices(keys, weights=values, k=1)[0]


__all__ = ["RandomSource"]
