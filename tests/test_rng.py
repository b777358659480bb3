import pytest

from delve.entities import EntityKind
from delve.rng import RandomSource


def test_seeded_sources_repeat():
    a, b = RandomSource(9), RandomSource(9)
    assert [a.randint(1, 6) for _ in range(20)] == [b.randint(1, 6) for _ in range(20)]
    assert [a.coin_flip() for _ in range(20)] == [b.coin_flip() for _ in range(20)]


def test_randrange_is_half_open():
    rng = RandomSource(1)
    assert {rng.randrange(0, 3) for _ in range(200)} == {0, 1, 2}


def test_weighted_choice_skips_zero_weights():
    rng = RandomSource(4)
    assert {rng.weighted_choice({"a": 0, "b": 2.5}) for _ in range(50)} == {"b"}


def test_weighted_choice_errors():
    rng = RandomSource(4)
    with pytest.raises(ValueError):
        rng.weighted_choice({})
    with pytest.raises(ValueError):
        rng.weighted_choice({"a": 0})
    with pytest.raises(ValueError):
        rng.weighted_choice({"a": -1})


def test_entity_kind_draws_follow_weights():
    rng = RandomSource(2024)
    weights = EntityKind.spawn_weights()
    counts = {kind: 0 for kind in EntityKind}
    for _ in range(2000):
        counts[rng.weighted_choice(weights)] += 1
    assert counts[EntityKind.RAT] > counts[EntityKind.GOBLIN] > counts[EntityKind.OGRE] > 0


def test_coin_flip_gives_both_sides():
    rng = RandomSource(3)
    assert {rng.coin_flip() for _ in range(100)} == {True, False}
