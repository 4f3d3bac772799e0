"""Resolve start and end instants from loosely-shaped contest records.

Upstream sources disagree on field names and on how they encode a contest's
length, so every logical field has an ordered list of candidate keys and the
first usable one wins. Nothing here raises on bad input: when a value is
missing or malformed a default is substituted and the result is flagged as
degraded.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Mapping

from dateutil import parser as date_parser

from .common import DEFAULT_DURATION_MS, Resolved
from .duration import parse_duration_detail

logger = logging.getLogger(__name__)

START_KEYS = ('startTime', 'start_time', 'startDate', 'start')
END_KEYS = ('endTime', 'end_time', 'endDate', 'end', 'duration')
DURATION_KEYS = ('duration', 'durationSeconds', 'length')

_YEAR_RE = re.compile(r'(?<!\d)\d{4}(?!\d)')


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _lookup(record, key):
    if not isinstance(record, Mapping):
        return None
    return record.get(key)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_text_instant(text: str) -> datetime | None:
    text = text.strip()
    # Bare digit strings ("90", "1200") are durations or ids, not timestamps.
    if not text or text.isdigit():
        return None
    try:
        return _as_utc(date_parser.isoparse(text))
    except (ValueError, OverflowError):
        pass
    # Lenient parsing guesses wildly on fragments like "1h", so require a year.
    if not _YEAR_RE.search(text):
        return None
    try:
        return _as_utc(date_parser.parse(text))
    except (ValueError, OverflowError):
        return None


def parse_instant(value) -> datetime | None:
    """Parse a date/time string or an epoch-milliseconds number.

    Returns an aware UTC datetime, or ``None`` when *value* is not a valid
    instant. Naive date/time strings are taken to be UTC.
    """
    if _is_number(value):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, str):
        return _parse_text_instant(value)
    return None


def resolve_start_detail(record, now: datetime = None) -> Resolved:
    now = now or _utcnow()
    for key in START_KEYS:
        value = _lookup(record, key)
        if value is None:
            continue
        parsed = parse_instant(value)
        if parsed is None:
            logger.debug(f"Unparseable start value {value!r} under {key!r}")
            return Resolved(now, degraded=True)
        return Resolved(parsed)
    return Resolved(now, degraded=True)


def resolve_start(record, now: datetime = None) -> datetime:
    """Start instant of *record*, or *now* when it has none."""
    return resolve_start_detail(record, now).value


def resolve_duration_detail(record) -> Resolved:
    for key in DURATION_KEYS:
        value = _lookup(record, key)
        if value is None:
            continue
        if _is_number(value):
            # Numeric durations are milliseconds.
            if not math.isfinite(value) or value < 0:
                return Resolved(DEFAULT_DURATION_MS, degraded=True)
            return Resolved(int(value))
        if isinstance(value, str):
            return parse_duration_detail(value)
        return Resolved(DEFAULT_DURATION_MS, degraded=True)
    return Resolved(DEFAULT_DURATION_MS, degraded=True)


def resolve_duration_ms(record) -> int:
    """Length of the contest in milliseconds, defaulting to two hours."""
    return resolve_duration_detail(record).value


def _direct_end(record) -> datetime | None:
    for key in END_KEYS:
        value = _lookup(record, key)
        if value is None:
            continue
        # A numeric ``duration`` is a length, never an epoch timestamp.
        if key == 'duration' and not isinstance(value, str):
            continue
        parsed = parse_instant(value)
        if parsed is not None:
            return parsed
    return None


def resolve_end_detail(record, now: datetime = None) -> Resolved:
    now = now or _utcnow()
    direct = _direct_end(record)
    if direct is not None:
        return Resolved(direct)

    start = resolve_start_detail(record, now)
    duration = resolve_duration_detail(record)
    try:
        end = start.value + timedelta(milliseconds=duration.value)
    except OverflowError:
        logger.debug(f"Duration {duration.value} ms overflows from {start.value}")
        try:
            end = start.value + timedelta(milliseconds=DEFAULT_DURATION_MS)
        except OverflowError:
            end = start.value
        return Resolved(end, degraded=True)
    return Resolved(end, degraded=start.degraded or duration.degraded)


def resolve_end(record, now: datetime = None) -> datetime:
    """End instant of *record*.

    A direct end timestamp wins; otherwise the end is the start plus the
    resolved duration (two hours when none is given).
    """
    return resolve_end_detail(record, now).value
