from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence


def now_timestamp_str() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def normalize_str(s: Any) -> str:
    if s is None:
        return ""
    return str(s).strip()


def safe_int(value: str | int | None) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        # "3/12" style track numbers
        try:
            return int(str(value).split("/")[0])
        except ValueError:
            return None


_epoch_re = re.compile(r"^\d+(\.\d+)?$")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 string or epoch seconds into an aware UTC datetime.

    Naive values are taken to be UTC. Returns None for empty input and
    raises ValueError for anything unparseable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        s = str(value).strip()
        if not s:
            return None
        if _epoch_re.match(s):
            dt = datetime.fromtimestamp(float(s), tz=timezone.utc)
        else:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def first_present(row: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """First non-empty value among ``keys`` (exports name fields differently)."""
    for key in keys:
        v = row.get(key)
        if v is None:
            continue
        if isinstance(v, str) and not v.strip():
            continue
        return v
    return None


def format_age(seconds: float | None) -> str:
    if seconds is None:
        return "never"
    days = int(seconds // 86400)
    if days >= 365:
        return f"{days // 365}y ago"
    if days >= 1:
        return f"{days}d ago"
    hours = int(seconds // 3600)
    if hours >= 1:
        return f"{hours}h ago"
    return "just now"
