import pytest

from delve.config import DungeonConfig, GameConfig
from delve.errors import ConfigurationError, LevelGenerationError
from delve.fov import FogState
from delve.game import Game
from delve.input import Action
from delve.rng import RandomSource


def test_new_game_places_player_and_first_frame_computes(small_config):
    game = Game.new(small_config)
    assert game.rooms
    assert game.player.pos == game.rooms[0].center()
    assert game.player.color == small_config.palette.player
    assert game.recompute_visibility is True

    assert game.update_visibility() is True
    assert game.update_visibility() is False
    px, py = game.player.pos
    assert game.visibility.state(game.game_map, px, py) is FogState.VISIBLE
    assert game.game_map.is_explored(px, py)


def test_same_seed_gives_same_game(small_config):
    a = Game.new(small_config)
    b = Game.new(small_config, RandomSource(small_config.seed))
    assert a.game_map.to_str_lines() == b.game_map.to_str_lines()
    assert [e.pos for e in a.entities] == [e.pos for e in b.entities]


def test_no_rooms_is_rejected_up_front(small_config):
    small_config.dungeon.max_rooms = 0
    with pytest.raises(LevelGenerationError):
        Game.new(small_config)


def test_invalid_config_is_rejected():
    config = GameConfig(dungeon=DungeonConfig(map_width=10, map_height=10, room_min_size=3, room_max_size=10))
    with pytest.raises(ConfigurationError):
        Game.new(config)


def test_handle_action(small_config):
    game = Game.new(small_config)
    game.update_visibility()
    start = game.player.pos
    assert game.handle_action(Action.NO_OP) is True
    assert game.player.pos == start
    assert game.recompute_visibility is False
    assert game.handle_action(Action.QUIT) is False


def test_walking_only_grows_explored(small_config):
    game = Game.new(small_config)
    game.update_visibility()
    m = game.game_map
    explored = {c for c in m.coords() if m.is_explored(*c)}
    for action in [Action.MOVE_RIGHT, Action.MOVE_DOWN, Action.MOVE_LEFT, Action.MOVE_UP] * 4:
        game.handle_action(action)
        game.update_visibility()
        now = {c for c in m.coords() if m.is_explored(*c)}
        assert explored <= now
        explored = now
