"""Merge contest records from several sources and attach derived status."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping

from .common import NormalizedContest
from .fields import resolve_end_detail, resolve_start_detail
from .status import classify

logger = logging.getLogger(__name__)


def normalize_contest(record: Mapping, now: datetime) -> NormalizedContest:
    start = resolve_start_detail(record, now)
    end = resolve_end_detail(record, now)
    contest = NormalizedContest(
        record=dict(record),
        start=start.value,
        end=end.value,
        status=classify(now, start.value, end.value),
        degraded=start.degraded or end.degraded,
    )
    if contest.degraded:
        logger.debug(f"Contest {contest.key!r} normalized with fallback times")
    return contest


def normalize_contests(
    record_groups: Iterable[Iterable[Mapping]], now: datetime = None,
) -> list[NormalizedContest]:
    """Flatten *record_groups* in order and normalize every record.

    All records are classified against the same *now*. Items that are not
    mappings are skipped.
    """
    now = now or datetime.now(timezone.utc)
    contests = []
    skipped = 0
    for group in record_groups:
        for record in group or ():
            if not isinstance(record, Mapping):
                skipped += 1
                continue
            contests.append(normalize_contest(record, now))

    if skipped:
        logger.warning(f"Skipped {skipped} contest record(s) that were not objects")
    degraded = sum(1 for c in contests if c.degraded)
    logger.info(
        f"Normalized {len(contests)} contest(s), {degraded} with fallback times"
    )
    return contests
