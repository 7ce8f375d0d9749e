from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .errors import NoAgedSongs
from .recency import age_to_weight, song_age
from .sampler import weighted_choice
from .types import Song, Strategy

logger = logging.getLogger(__name__)


def _next_in_album(albums: Dict[str, List[Song]], current: Optional[Song]) -> Optional[Song]:
    if current is None:
        return None
    group = albums.get(current.album) or []
    for idx, s in enumerate(group):
        if s.key == current.key:
            return group[idx + 1] if idx + 1 < len(group) else None
    return None


def _random_in_album(albums: Dict[str, List[Song]], current: Optional[Song], rng: random.Random) -> Optional[Song]:
    if current is None:
        return None
    group = albums.get(current.album)
    if not group:
        return None
    return rng.choice(group)


def _random_by_recency(songs: Sequence[Song], rng: random.Random, now: datetime) -> Song:
    ages = [song_age(s, now) for s in songs]
    known = [a for a in ages if a is not None]
    if not known:
        raise NoAgedSongs("no song in the catalog has a last-played date")
    oldest = max(known)
    weights = [age_to_weight(a, oldest) for a in ages]
    if not any(weights):
        # everything was played within the last second
        logger.debug("All recency weights are zero, drawing uniformly")
        weights = [1.0] * len(songs)
    return weighted_choice(songs, weights, rng)


def next_song(
    songs: Sequence[Song],
    albums: Dict[str, List[Song]],
    current: Optional[Song],
    strategy: Strategy,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> Optional[Song]:
    """Select the song that follows ``current`` using ``strategy``.

    - NEXT_IN_ALBUM: the song right after ``current`` in its album, or None
      when ``current`` is None, last in its album, or missing from it.
    - RANDOM_IN_ALBUM: a uniform pick from ``current``'s album, None when
      ``current`` is None.
    - RANDOM: a pick across the whole catalog weighted by age (see
      recency.age_to_weight); songs never played count as the oldest one.

    None means the strategy had nothing to offer; it is not an error.
    """
    rng = rng if rng is not None else random.Random()
    strategy = Strategy(strategy)
    if strategy is Strategy.NEXT_IN_ALBUM:
        return _next_in_album(albums, current)
    if strategy is Strategy.RANDOM_IN_ALBUM:
        return _random_in_album(albums, current, rng)
    if strategy is Strategy.RANDOM:
        return _random_by_recency(songs, rng, now or datetime.now(timezone.utc))
    raise ValueError(f"Unhandled strategy: {strategy!r}")
