import random
from typing import Optional


def roll(sides: int = 20, count: int = 1, rng: Optional[random.Random] = None) -> list[int]:
    """Roll `count` dice with `sides` faces each."""
    if sides < 2:
        raise ValueError(f'A die needs at least 2 sides, got {sides}')
    if count < 1:
        raise ValueError(f'Roll at least one die, got {count}')

    rng = rng or random
    return [rng.randint(1, sides) for _ in range(count)]
