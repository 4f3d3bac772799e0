"""Free-form contest duration parsing.

Accepted shapes, checked in order:

- ``"2h 30m"`` / ``"150m"`` / ``"3h"``: hour and minute tokens
- ``"2:30:00"`` / ``"1:30"``: hours, minutes, seconds separated by colons
- ``"90"``: a bare number of minutes

Anything else falls back to two hours.
"""
from __future__ import annotations

import re

from .common import DEFAULT_DURATION_MS, Resolved

_HOURS_RE = re.compile(r'(\d+)h')
_MINUTES_RE = re.compile(r'(\d+)m')
_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


def _leading_int(text: str) -> int | None:
    m = _LEADING_INT_RE.match(text)
    return int(m.group(1)) if m else None


def _parse_units(text: str) -> int:
    hours = _HOURS_RE.search(text)
    minutes = _MINUTES_RE.search(text)
    total_minutes = (
        (int(hours.group(1)) if hours else 0) * 60
        + (int(minutes.group(1)) if minutes else 0)
    )
    return total_minutes * 60_000


def _parse_clock(text: str) -> int | None:
    parts = text.split(':')
    values = []
    for part in (parts + ['', '', ''])[:3]:
        if not part.strip():
            values.append(0)
            continue
        value = _leading_int(part)
        if value is None:
            return None
        values.append(value)
    hours, minutes, seconds = values
    return (hours * 3600 + minutes * 60 + seconds) * 1000


def parse_duration_detail(text) -> Resolved:
    """Like :func:`parse_duration`, flagging results that used the default."""
    if not isinstance(text, str):
        return Resolved(DEFAULT_DURATION_MS, degraded=True)

    if 'h' in text or 'm' in text:
        result = _parse_units(text)
    elif ':' in text:
        result = _parse_clock(text)
    else:
        minutes = _leading_int(text)
        result = None if minutes is None else minutes * 60_000

    if result is None or result < 0:
        return Resolved(DEFAULT_DURATION_MS, degraded=True)
    return Resolved(result)


def parse_duration(text) -> int:
    """Parse a duration string into milliseconds. Never raises."""
    return parse_duration_detail(text).value
