from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from .types import Song

# log(1) == 0, anything younger is clamped up to this
MIN_AGE_SECONDS = 1.0
WEIGHT_EXPONENT = 6


def song_age(song: Song, now: Optional[datetime] = None) -> Optional[float]:
    """Seconds since the song was last played, or None if it never was."""
    if song.last_played_at is None:
        return None
    now = now or datetime.now(timezone.utc)
    return (now - song.last_played_at).total_seconds()


def age_to_weight(age: Optional[float], fallback: Optional[float] = None, default=None):
    """Convert an age in seconds into a sampling weight: log(age) ** 6.

    A missing age is replaced by ``fallback``; with no fallback either,
    ``default`` is returned unchanged.
    """
    if age is None:
        if fallback is None:
            return default
        age = fallback
    return math.log(max(age, MIN_AGE_SECONDS)) ** WEIGHT_EXPONENT


def song_weight(song: Song, now: Optional[datetime] = None, fallback: Optional[float] = None, default=None):
    return age_to_weight(song_age(song, now), fallback, default)
