from __future__ import annotations

import logging
from pathlib import Path

from .utils import ensure_dir, now_timestamp_str

LOGGER_NAME = "smarter_playlist"


def setup_logging(logs_dir: Path | str = "logs") -> tuple[logging.Logger, Path]:
    """Initialize logging to console (INFO) and file per run.

    Returns (logger, log_file_path)
    """
    ts = now_timestamp_str()
    logs_dir = Path(logs_dir)
    ensure_dir(logs_dir)
    log_path = logs_dir / f"smarter-playlist-{ts}.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter("%(levelname)s | %(message)s"))
    logger.addHandler(ch)

    # File handler
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(fh)

    logger.debug("Logging initialized")
    return logger, log_path
