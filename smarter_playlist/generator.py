from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import List, Mapping, Optional, Sequence

from .albums import build_album_index
from .errors import EmptyCatalog, InvalidWeights
from .sampler import check_weights, weighted_choice
from .strategies import next_song
from .types import DEFAULT_STRATEGY_WEIGHTS, Song, Strategy, StrategyWeights

logger = logging.getLogger(__name__)


def parse_strategy_weights(text: str) -> StrategyWeights:
    """Parse ``"next-in-album=100,random=20"`` into a weights mapping.

    Strategies left out are not drawn at all.
    """
    weights: StrategyWeights = {}
    for part in (p.strip() for p in text.split(",")):
        if not part:
            continue
        name, sep, value = part.partition("=")
        if not sep:
            raise InvalidWeights(f"expected strategy=weight, got {part!r}")
        try:
            strategy = Strategy(name.strip())
        except ValueError:
            known = ", ".join(s.value for s in Strategy)
            raise InvalidWeights(f"unknown strategy {name.strip()!r} (known: {known})") from None
        try:
            weights[strategy] = float(value)
        except ValueError:
            raise InvalidWeights(f"weight for {strategy.value} is not a number: {value!r}") from None
    if not weights:
        raise InvalidWeights("no strategy weights given")
    return weights


def format_strategy_weights(weights: Mapping[Strategy, float]) -> str:
    return ", ".join(f"{Strategy(k).value}={v:g}" for k, v in weights.items())


def generate_playlist(
    songs: Sequence[Song],
    length: int,
    strategy_weights: Optional[Mapping[Strategy, float]] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Song]:
    """Build a playlist of at most ``length`` songs.

    The first song is always a recency-weighted random pick. Each of the
    following ``length - 1`` steps draws a strategy from ``strategy_weights``
    and asks for the song after the last one produced. Steps that come back
    empty (e.g. next-in-album past the last track) are dropped rather than
    retried, so the result can be shorter than ``length``.
    """
    if length < 1:
        raise ValueError("length must be >= 1")
    if not songs:
        raise EmptyCatalog("the catalog has no eligible songs")

    weights = dict(strategy_weights if strategy_weights is not None else DEFAULT_STRATEGY_WEIGHTS)
    strategies = [Strategy(k) for k in weights]
    values = list(weights.values())
    check_weights(strategies, values)
    rng = rng if rng is not None else random.Random()
    now = now or datetime.now(timezone.utc)

    albums = build_album_index(songs)
    logger.debug(f"Indexed {len(songs)} songs in {len(albums)} albums")

    current = next_song(songs, albums, None, Strategy.RANDOM, rng=rng, now=now)
    out: List[Song] = [current] if current is not None else []

    dropped = 0
    for _ in range(length - 1):
        strategy = weighted_choice(strategies, values, rng)
        song = next_song(songs, albums, current, strategy, rng=rng, now=now)
        if song is None:
            dropped += 1
            continue
        out.append(song)
        current = song

    if dropped:
        logger.info(f"{dropped} step(s) produced no song; playlist has {len(out)}/{length}")
    return out
