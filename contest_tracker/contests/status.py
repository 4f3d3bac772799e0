from __future__ import annotations

from datetime import datetime

from .common import ContestStatus


def classify(now: datetime, start: datetime, end: datetime) -> ContestStatus:
    """Derive a contest's status; both boundaries count as ongoing."""
    if start <= now <= end:
        return ContestStatus.ONGOING
    if now < start:
        return ContestStatus.UPCOMING
    return ContestStatus.COMPLETED
