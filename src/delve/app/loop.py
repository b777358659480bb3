from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..config import GameConfig
from ..game import Game
from ..input import Action, InputSource, ScriptedInput
from ..render import Renderer, TextRenderer, render_frame
from ..rng import RandomSource

logger = logging.getLogger(__name__)


def run_loop(game: Game, input_source: InputSource, renderer: Renderer) -> int:
    """Run the turn loop until the input source yields QUIT.

    Each turn: recompute visibility if flagged, draw one frame, block for one
    action, apply it. Returns the number of actions applied.
    """
    turns = 0
    logger.info("Turn loop started")
    while True:
        game.update_visibility()
        render_frame(game, renderer)
        action = input_source.wait_for_action()
        if not game.handle_action(action):
            break
        turns += 1
    logger.info("Turn loop finished after %d turns", turns)
    return turns


def run_headless(
    config: GameConfig,
    actions: Iterable[Action],
    rng: Optional[RandomSource] = None,
) -> List[str]:
    """Play ``actions`` against a fresh level with a text renderer; returns the last frame."""
    game = Game.new(config, rng)
    palette = config.palette
    renderer = TextRenderer(
        game.game_map.width,
        game.game_map.height,
        wall_colors=(palette.dark_wall, palette.light_wall),
    )
    run_loop(game, ScriptedInput(actions), renderer)
    return renderer.lines()
