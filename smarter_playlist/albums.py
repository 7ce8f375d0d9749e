from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from .types import Song


def _album_order(song: Song) -> Tuple[bool, int, str]:
    # tracked songs first (by number), then untracked ones by title
    if song.track_number is not None:
        return (False, song.track_number, "")
    return (True, 0, song.title)


def build_album_index(songs: Iterable[Song]) -> Dict[str, List[Song]]:
    """Group songs by album in the order a player displays them.

    Within an album, songs with a track number come first in track order,
    followed by the songs without one sorted by title. Disc numbers are not
    taken into account. sorted() is stable, so duplicate track numbers keep
    their catalog order.
    """
    groups: Dict[str, List[Song]] = defaultdict(list)
    for s in songs:
        groups[s.album].append(s)
    return {album: sorted(group, key=_album_order) for album, group in groups.items()}
