from delve.__main__ import main
from delve.app.loop import run_headless, run_loop
from delve.config import FovSettings, GameConfig
from delve.entities import Entity, EntityRegistry
from delve.game import Game
from delve.input import Action, ScriptedInput
from delve.map.grid import GameMap
from delve.render import TextRenderer


class RecordingRenderer(TextRenderer):
    def __init__(self, game):
        super().__init__(game.game_map.width, game.game_map.height)
        self.game = game
        self.player_positions = []

    def present(self):
        super().present()
        self.player_positions.append(self.game.player.pos)


def make_game():
    m = GameMap.from_ascii([
        "#######",
        "#.....#",
        "#######",
    ])
    return Game(GameConfig(fov=FovSettings(radius=2)), m, EntityRegistry(Entity.player(1, 1)))


def test_loop_renders_once_per_turn_in_order():
    game = make_game()
    renderer = RecordingRenderer(game)
    turns = run_loop(game, ScriptedInput([Action.MOVE_RIGHT, Action.MOVE_UP, Action.MOVE_RIGHT]), renderer)
    assert turns == 3
    assert renderer.frames == 4
    assert renderer.player_positions == [(1, 1), (2, 1), (2, 1), (3, 1)]
    # Last frame was computed from the final position
    assert game.visibility.is_visible(5, 1)
    assert game.recompute_visibility is False


def test_loop_stops_immediately_on_quit():
    game = make_game()
    renderer = RecordingRenderer(game)
    assert run_loop(game, ScriptedInput([Action.QUIT, Action.MOVE_RIGHT]), renderer) == 0
    assert renderer.frames == 1
    assert game.player.pos == (1, 1)


def test_run_headless_returns_final_frame(small_config):
    lines = run_headless(small_config, [Action.MOVE_RIGHT, Action.MOVE_DOWN])
    assert len(lines) == small_config.dungeon.map_height
    assert all(len(line) == small_config.dungeon.map_width for line in lines)
    assert sum(line.count("@") for line in lines) == 1


def test_cli_headless(capsys):
    assert main(["--headless", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "@" in out
    assert len(out.splitlines()) == 45


def test_cli_reports_bad_config(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("dungeon:\n  max_rooms: 0\n", encoding="utf-8")
    assert main(["--headless", "--config", str(path)]) == 2
    assert "No rooms" in capsys.readouterr().err
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2


def test_verbosity_levels(monkeypatch):
    import logging

    from delve.logging_config import configure_logging, level_from_verbosity

    assert level_from_verbosity(0) == logging.WARNING
    assert level_from_verbosity(1) == logging.INFO
    assert level_from_verbosity(3) == logging.DEBUG

    monkeypatch.setenv("DELVE_LOG_LEVEL", "debug")
    configure_logging(logging.WARNING)
    assert logging.getLogger().level == logging.DEBUG


def test_cli_reports_mistyped_config(tmp_path, capsys):
    path = tmp_path / "typo.yaml"
    path.write_text("dungeon:\n  map_width: '80'\n", encoding="utf-8")
    assert main(["--headless", "--config", str(path)]) == 2
    assert "map_width" in capsys.readouterr().err
