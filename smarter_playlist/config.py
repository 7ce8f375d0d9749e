from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .generator import parse_strategy_weights
from .types import DEFAULT_LENGTH, DEFAULT_PLAYLIST_NAME, DEFAULT_STRATEGY_WEIGHTS, StrategyWeights

ENV_PREFIX = "SMARTER_PLAYLIST_"


@dataclass
class Settings:
    catalog_path: Optional[Path] = None
    length: int = DEFAULT_LENGTH
    playlist_name: str = DEFAULT_PLAYLIST_NAME
    strategy_weights: StrategyWeights = field(default_factory=lambda: dict(DEFAULT_STRATEGY_WEIGHTS))
    comment_marker: Optional[str] = None
    log_dir: Path = Path("logs")


def _env(name: str) -> Optional[str]:
    v = os.getenv(ENV_PREFIX + name)
    if v is None or not v.strip():
        return None
    return v.strip()


def load_settings(dotenv: bool = True) -> Settings:
    """Read settings from the environment (and a .env file, if present).

    Variables: SMARTER_PLAYLIST_CATALOG, _LENGTH, _NAME, _WEIGHTS,
    _COMMENT_MARKER, _LOG_DIR. Command line flags override these.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    s = Settings()
    catalog = _env("CATALOG")
    if catalog:
        s.catalog_path = Path(catalog).expanduser()
    length = _env("LENGTH")
    if length:
        try:
            s.length = int(length)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}LENGTH must be an integer, got {length!r}") from None
    name = _env("NAME")
    if name:
        s.playlist_name = name
    weights = _env("WEIGHTS")
    if weights:
        s.strategy_weights = parse_strategy_weights(weights)
    s.comment_marker = _env("COMMENT_MARKER")
    log_dir = _env("LOG_DIR")
    if log_dir:
        s.log_dir = Path(log_dir).expanduser()
    return s
