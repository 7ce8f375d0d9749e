from __future__ import annotations

import math
import random
from typing import Optional, Sequence, TypeVar

from .errors import InvalidWeights

T = TypeVar("T")


def check_weights(items: Sequence[T], weights: Sequence[float]) -> float:
    if len(items) != len(weights):
        raise InvalidWeights(f"{len(items)} items but {len(weights)} weights")
    total = 0.0
    for w in weights:
        if w is None or math.isnan(w) or math.isinf(w) or w < 0:
            raise InvalidWeights(f"invalid weight: {w!r}")
        total += w
    if total <= 0:
        raise InvalidWeights("at least one weight must be > 0")
    return total


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng: Optional[random.Random] = None) -> T:
    """Pick one item with probability weights[i] / sum(weights).

    One uniform draw over the cumulative weight range; items with weight 0
    are never returned. Raises InvalidWeights when nothing can be drawn.
    """
    total = check_weights(items, weights)
    rng = rng if rng is not None else random.Random()
    r = rng.random() * total
    upto = 0.0
    last = None
    for idx, w in enumerate(weights):
        if w <= 0:
            continue
        upto += w
        last = idx
        if r < upto:
            return items[idx]
    # float rounding can leave r == total
    return items[last]  # type: ignore[index]
