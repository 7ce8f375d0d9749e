from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from tqdm import tqdm

from .errors import CatalogError
from .types import Song
from .utils import first_present, normalize_str, parse_timestamp, safe_int

logger = logging.getLogger(__name__)

TITLE_KEYS = ("title", "name", "Name")
ALBUM_KEYS = ("album", "Album")
TRACK_KEYS = ("track_number", "tracknumber", "Track Number")
PLAYED_KEYS = ("last_played_at", "play_date_utc", "Play Date UTC")
COMMENT_KEYS = ("comments", "Comments")


def _read_rows(path: Path) -> List[Dict[str, Any]]:
    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            with path.open("r", newline="", encoding="utf-8") as f:
                return list(csv.DictReader(f))
        if suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            raise CatalogError(f"Unsupported catalog format: {path.name} (expected .json or .csv)")
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Malformed JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogError(f"{path} is not UTF-8: {e}") from e

    if isinstance(data, dict):
        # {"tracks": [...]} or a library dump keyed by track id
        tracks = data.get("tracks", data.get("Tracks"))
        if isinstance(tracks, dict):
            tracks = list(tracks.values())
        data = tracks
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise CatalogError(f"{path} does not contain a list of track objects")
    return data


def filter_eligible(rows: Iterable[Dict[str, Any]], marker: Optional[str]) -> List[Dict[str, Any]]:
    """Keep the rows whose comments contain ``marker`` (all rows if no marker)."""
    rows = list(rows)
    if not marker:
        return rows
    return [r for r in rows if marker in str(first_present(r, COMMENT_KEYS) or "")]


def song_from_row(row: Dict[str, Any]) -> Optional[Song]:
    title = normalize_str(first_present(row, TITLE_KEYS))
    if not title:
        return None
    track = safe_int(first_present(row, TRACK_KEYS))
    if track is not None and track < 1:
        track = None
    try:
        played = parse_timestamp(first_present(row, PLAYED_KEYS))
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise CatalogError(f"Bad last-played value for {title!r}: {e}") from e
    return Song(
        title=title,
        album=normalize_str(first_present(row, ALBUM_KEYS)),
        track_number=track,
        last_played_at=played,
    )


def load_catalog(path: Path | str, comment_marker: Optional[str] = None, progress: bool = False) -> List[Song]:
    """Read a JSON or CSV catalog export into eligible Songs."""
    path = Path(path)
    rows = _read_rows(path)
    eligible = filter_eligible(rows, comment_marker)
    if comment_marker:
        logger.info(f"{len(eligible)}/{len(rows)} tracks carry the marker {comment_marker!r}")

    songs: List[Song] = []
    for row in tqdm(eligible, desc="Catalog", disable=not progress):
        song = song_from_row(row)
        if song is None:
            logger.debug(f"Skipping untitled track: {row}")
            continue
        songs.append(song)
    logger.debug(f"Loaded {len(songs)} songs from {path}")
    return songs
