import random

import pytest

from service.dice_service import roll


def test_default_is_one_d20():
    rolls = roll()

    assert len(rolls) == 1
    assert 1 <= rolls[0] <= 20


def test_rolls_stay_in_range():
    rolls = roll(6, 200, rng=random.Random(7))

    assert len(rolls) == 200
    assert set(rolls) == {1, 2, 3, 4, 5, 6}


def test_seeded_rng_is_repeatable():
    assert roll(20, 5, rng=random.Random(42)) == roll(20, 5, rng=random.Random(42))


@pytest.mark.parametrize("sides, count", [(1, 1), (0, 1), (20, 0), (20, -2)])
def test_invalid_rolls(sides, count):
    with pytest.raises(ValueError):
        roll(sides, count)
