from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Song:
    """Catalog entry as read from the library export."""
    title: str
    album: str
    track_number: Optional[int] = None
    last_played_at: Optional[datetime] = None

    @property
    def key(self) -> Tuple[str, str]:
        # (title, album) is all a playback sink can match on
        return (self.title, self.album)


class Strategy(str, Enum):
    NEXT_IN_ALBUM = "next-in-album"
    RANDOM_IN_ALBUM = "random-in-album"
    RANDOM = "random"


StrategyWeights = Dict[Strategy, float]

DEFAULT_STRATEGY_WEIGHTS: StrategyWeights = {
    Strategy.NEXT_IN_ALBUM: 100,
    Strategy.RANDOM_IN_ALBUM: 2,
    Strategy.RANDOM: 20,
}

DEFAULT_LENGTH = 100
DEFAULT_PLAYLIST_NAME = "Smarter Playlist"
