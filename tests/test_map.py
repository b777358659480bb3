import pytest

from delve.dungeon.rooms import Room
from delve.map.grid import GameMap
from delve.map.pathfinding import find_path_bfs
from delve.map.tiles import Tile


def test_new_map_is_solid_wall():
    m = GameMap(4, 3)
    for x, y in m.coords():
        assert m.is_blocking(x, y)
        assert m.is_blocking_sight(x, y)
        assert not m.is_explored(x, y)
    assert m.count_open() == 0


def test_tile_constructors():
    assert Tile.wall() == Tile(blocking=True, blocking_sight=True, explored=False)
    assert Tile.floor() == Tile(blocking=False, blocking_sight=False, explored=False)
    assert Tile.wall().is_wall and not Tile.floor().is_wall


def test_out_of_bounds_access_fails_fast():
    m = GameMap(3, 3)
    for x, y in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
        with pytest.raises(IndexError):
            m.is_blocking(x, y)
        with pytest.raises(IndexError):
            m.set_explored(x, y)


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        GameMap(0, 3)
    with pytest.raises(ValueError):
        GameMap(3, -1)


def test_carve_room_leaves_boundary_ring():
    m = GameMap(8, 8)
    room = Room.from_size(1, 1, 4, 4)
    m.carve_room(room)
    assert m.to_str_lines() == [
        "########",
        "########",
        "##...###",
        "##...###",
        "##...###",
        "########",
        "########",
        "########",
    ]


def test_tunnels_are_inclusive_in_either_direction():
    m = GameMap(6, 6)
    m.carve_h_tunnel(4, 1, 2)
    m.carve_v_tunnel(4, 1, 3)
    assert all(not m.is_blocking(x, 2) for x in range(1, 5))
    assert all(not m.is_blocking(3, y) for y in range(1, 5))
    assert m.is_blocking(0, 2) and m.is_blocking(5, 2)
    assert m.is_blocking(3, 0) and m.is_blocking(3, 5)


def test_explored_is_sticky_and_survives_carving():
    m = GameMap(3, 3)
    m.set_explored(1, 1)
    m.carve(1, 1)
    assert m.is_explored(1, 1)
    m.set_explored(1, 1)
    assert m.is_explored(1, 1)


def test_from_ascii_and_back():
    rows = ["#####", "#..##", "#####"]
    m = GameMap.from_ascii(rows)
    assert (m.width, m.height) == (5, 3)
    assert m.to_str_lines() == rows
    with pytest.raises(ValueError):
        GameMap.from_ascii(["..", "."])
    with pytest.raises(ValueError):
        GameMap.from_ascii([])


def test_find_path_bfs():
    m = GameMap.from_ascii([
        "#######",
        "#..#..#",
        "#.....#",
        "#######",
    ])
    assert find_path_bfs(m, (1, 1), (5, 1)) == 6
    assert find_path_bfs(m, (1, 1), (0, 0)) is None

    walled = GameMap.from_ascii(["#.#.#"])
    assert find_path_bfs(walled, (1, 0), (3, 0)) is None
