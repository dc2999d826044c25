from __future__ import annotations

import math
import numbers
from datetime import datetime
from typing import Any

import pandas as pd

MINUTES_PER_DAY = 1440


def _clock_segment(text: str) -> int | None:
    text = text.strip()
    if not text or not text.isdecimal():
        return None
    return int(text)


def parse_hhmm_to_minutes(text: Any, strict: bool = True) -> int | None:
    if not isinstance(text, str):
        return None
    parts = text.split(":")
    # A trailing seconds segment is tolerated and ignored.
    if len(parts) not in (2, 3):
        return None
    hour = _clock_segment(parts[0])
    minute = _clock_segment(parts[1])
    if hour is None or minute is None:
        return None
    if len(parts) == 3 and _clock_segment(parts[2]) is None:
        return None
    if strict and (hour >= 24 or minute >= 60):
        return None
    return hour * 60 + minute


def minutes_to_hhmm(minutes: int) -> str:
    total = int(minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def epoch_to_wall_clock(seconds: float, tz: str | None = None) -> datetime:
    if tz is None:
        return datetime.fromtimestamp(seconds)
    return pd.Timestamp(seconds, unit="s", tz="UTC").tz_convert(tz).to_pydatetime()


def normalize_minutes(timestamp: Any, *, strict: bool = True, tz: str | None = None) -> int | None:
    if isinstance(timestamp, str):
        return parse_hhmm_to_minutes(timestamp, strict=strict)
    if isinstance(timestamp, bool) or not isinstance(timestamp, numbers.Real):
        return None
    seconds = float(timestamp)
    if not math.isfinite(seconds):
        return None
    try:
        wall = epoch_to_wall_clock(seconds, tz)
    except (KeyError, OverflowError, OSError, ValueError):
        return None
    return wall.hour * 60 + wall.minute
