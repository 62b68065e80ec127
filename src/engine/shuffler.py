"""In-place Fisher-Yates shuffle with an injectable random source."""

from __future__ import annotations

import random
from typing import List, Optional, TypeVar

T = TypeVar("T")


def shuffle(items: List[T], rng: Optional[random.Random] = None) -> List[T]:
    """Permute ``items`` uniformly at random and return the same list.

    ``rng`` defaults to the process-wide :mod:`random` source; pass a seeded
    :class:`random.Random` to make the order reproducible.
    """

    randbelow = (rng or random).randrange
    for i in range(len(items) - 1, 0, -1):
        j = randbelow(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


__all__ = ["shuffle"]
