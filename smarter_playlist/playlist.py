from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Sequence

from rich.console import Console
from rich.table import Table

from .recency import song_age
from .types import Song
from .utils import format_age


class PlaybackSink(Protocol):
    """Destination for a generated playlist.

    Songs are identified by (title, album) only; when two catalog entries
    share both, the sink may pick either.
    """

    def create_or_clear(self, name: str) -> None: ...

    def add_songs(self, name: str, songs: Sequence[Song]) -> None: ...


class ConsoleSink:
    """Prints playlists as rich tables instead of driving a player."""

    def __init__(self, console: Optional[Console] = None, now: Optional[datetime] = None):
        self.console = console or Console()
        self.now = now
        self.playlists: Dict[str, List[Song]] = {}

    def create_or_clear(self, name: str) -> None:
        self.playlists[name] = []

    def add_songs(self, name: str, songs: Sequence[Song]) -> None:
        start = len(self.playlists.setdefault(name, []))
        self.playlists[name].extend(songs)
        self.console.print(build_table(name, songs, start=start, now=self.now))


def build_table(name: str, songs: Sequence[Song], start: int = 0, now: Optional[datetime] = None) -> Table:
    now = now or datetime.now(timezone.utc)
    table = Table(title=f"{name} ({len(songs)} songs)")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Album")
    table.add_column("Track", justify="right")
    table.add_column("Last played")
    for idx, s in enumerate(songs, start=start + 1):
        table.add_row(
            str(idx),
            s.title,
            s.album or "-",
            str(s.track_number) if s.track_number is not None else "",
            format_age(song_age(s, now)),
        )
    return table


def save_playlist(sink: PlaybackSink, name: str, songs: Sequence[Song]) -> None:
    """Empty (or create) the destination playlist, then fill it."""
    sink.create_or_clear(name)
    sink.add_songs(name, songs)
