# Copyright (c) 2026 blockprompt Contributors. All Rights Reserved.

"""
Durations written the way people write them: "500ms", "2s", "1m 30s".

Duration is the pydantic field type used by configuration models. It also
accepts plain numbers (seconds) and timedelta values, and serializes back to
the compact string form.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

_UNITS = {
    "ms": timedelta(milliseconds=1),
    "msec": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "sec": timedelta(seconds=1),
    "secs": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "min": timedelta(minutes=1),
    "mins": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "hr": timedelta(hours=1),
    "hrs": timedelta(hours=1),
    "d": timedelta(days=1),
    "day": timedelta(days=1),
    "days": timedelta(days=1),
}

_TOKEN_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([a-z]+)\s*")


def parse_duration(value: Any) -> timedelta:
    """Parse "1m 30s"-style text, a number of seconds, or a timedelta."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Duration must not be negative, got {value!r}")
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise ValueError(f"Invalid duration {value!r}")

    text = value.strip().lower()
    if not text:
        raise ValueError("Duration must not be empty")

    total = timedelta()
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise ValueError(f"Invalid duration {value!r}")
        amount, unit = match.groups()
        if unit not in _UNITS:
            raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")
        total += _UNITS[unit] * float(amount)
        pos = match.end()
    return total


def format_duration(value: timedelta) -> str:
    """Render with millisecond precision, largest unit first: "1m 3s 200ms"."""
    ms = value // timedelta(milliseconds=1)
    if ms <= 0:
        return "0s"
    days, ms = divmod(ms, 86_400_000)
    hours, ms = divmod(ms, 3_600_000)
    minutes, ms = divmod(ms, 60_000)
    seconds, ms = divmod(ms, 1000)
    parts = []
    for amount, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"), (ms, "ms")):
        if amount:
            parts.append(f"{amount}{unit}")
    return " ".join(parts)


Duration = Annotated[
    timedelta,
    BeforeValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str),
]
