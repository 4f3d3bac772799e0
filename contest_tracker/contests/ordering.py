"""Ordering and grouping of normalized contests."""
from __future__ import annotations

from .common import ContestStatus, NormalizedContest

_STATUS_ORDER = {
    ContestStatus.ONGOING.value: 0,
    ContestStatus.UPCOMING.value: 1,
    ContestStatus.COMPLETED.value: 2,
}

# Anything without a recognised status sorts with the upcoming contests.
_DEFAULT_BUCKET = _STATUS_ORDER[ContestStatus.UPCOMING.value]

SECTION_TITLES = {
    ContestStatus.ONGOING.value: 'Ongoing Contests',
    ContestStatus.UPCOMING.value: 'Upcoming Contests',
    ContestStatus.COMPLETED.value: 'Recent Completed Contests',
}


def _bucket(contest) -> int:
    return _STATUS_ORDER.get(getattr(contest, 'status', None), _DEFAULT_BUCKET)


def _sort_key(contest):
    bucket = _bucket(contest)
    ts = contest.start.timestamp()
    if bucket == _STATUS_ORDER[ContestStatus.COMPLETED.value]:
        return bucket, -ts
    return bucket, ts


def sort_contests(contests: list[NormalizedContest]) -> list[NormalizedContest]:
    """Order contests ongoing, upcoming, then completed.

    Ongoing and upcoming contests run earliest start first; completed
    contests run most recent start first. The sort is stable, so contests
    with equal keys keep their input order.
    """
    return sorted(contests, key=_sort_key)


def limit_completed(contests: list[NormalizedContest], per_platform: int = 3) -> list[NormalizedContest]:
    """Keep at most *per_platform* completed contests for each platform.

    Order is preserved; a non-positive limit disables trimming.
    """
    if per_platform <= 0:
        return list(contests)

    seen: dict[str, int] = {}
    result = []
    for contest in contests:
        if contest.status == ContestStatus.COMPLETED:
            platform = contest.platform.lower()
            if seen.get(platform, 0) >= per_platform:
                continue
            seen[platform] = seen.get(platform, 0) + 1
        result.append(contest)
    return result


def group_sections(contests: list[NormalizedContest]) -> list[dict]:
    """Split a sorted sequence into titled status sections, skipping empty ones."""
    grouped: dict[str, list[NormalizedContest]] = {key: [] for key in _STATUS_ORDER}
    for contest in contests:
        status = getattr(contest, 'status', None)
        if status not in grouped:
            status = ContestStatus.UPCOMING.value
        grouped[str(getattr(status, 'value', status))].append(contest)

    return [
        {'status': status, 'title': SECTION_TITLES[status], 'contests': items}
        for status, items in grouped.items()
        if items
    ]
