from __future__ import annotations

import argparse
import random
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .catalog import load_catalog
from .config import Settings, load_settings
from .errors import PlaylistError
from .generator import format_strategy_weights, generate_playlist, parse_strategy_weights
from .log_utils import setup_logging
from .playlist import ConsoleSink, save_playlist

console = Console()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="smarter-playlist",
        description="Generate a playlist that follows albums and favors songs you have not heard in a while",
    )
    p.add_argument("--catalog", type=Path, default=None, help="JSON or CSV export of the music catalog")
    p.add_argument("--length", type=int, default=None, help="Maximum number of songs (default: 100)")
    p.add_argument("--name", default=None, help='Playlist name (default: "Smarter Playlist")')
    p.add_argument(
        "--weights",
        default=None,
        help="Strategy weights, e.g. 'next-in-album=100,random-in-album=2,random=20'",
    )
    p.add_argument("--comment-marker", default=None, help="Only use tracks whose comments contain this text")
    p.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible playlist")
    p.add_argument("--log-dir", type=Path, default=None, help="Directory for per-run log files (default: logs)")
    return p.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.catalog is not None:
        settings.catalog_path = args.catalog
    if args.length is not None:
        settings.length = args.length
    if args.name:
        settings.playlist_name = args.name
    if args.weights:
        settings.strategy_weights = parse_strategy_weights(args.weights)
    if args.comment_marker:
        settings.comment_marker = args.comment_marker
    if args.log_dir is not None:
        settings.log_dir = args.log_dir
    return settings


def run(settings: Settings, seed: Optional[int] = None, sink=None) -> int:
    logger, log_path = setup_logging(settings.log_dir)

    if settings.catalog_path is None:
        console.print("[red]No catalog given. Use --catalog or set SMARTER_PLAYLIST_CATALOG.[/red]")
        return 2
    if settings.length < 1:
        console.print("[red]--length must be at least 1.[/red]")
        return 2

    console.print(
        f"Creating playlist of length {settings.length} with strategy weights "
        f"{format_strategy_weights(settings.strategy_weights)} and saving it as \"{settings.playlist_name}\"..."
    )
    rng = random.Random(seed)
    now = datetime.now(timezone.utc)
    try:
        songs = load_catalog(settings.catalog_path, settings.comment_marker, progress=True)
        logger.info(f"{len(songs)} eligible songs")
        result = generate_playlist(songs, settings.length, settings.strategy_weights, rng=rng, now=now)
    except PlaylistError as e:
        logger.error(f"{type(e).__name__}: {e}")
        console.print(f"[red]Could not create the playlist: {e}[/red]")
        console.print(f"Log: {log_path}")
        return 1

    save_playlist(sink or ConsoleSink(console, now=now), settings.playlist_name, result)
    console.print(f"Log: {log_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    try:
        settings = apply_args(load_settings(), args)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)
    sys.exit(run(settings, seed=args.seed))


if __name__ == "__main__":
    main()
