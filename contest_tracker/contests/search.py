from __future__ import annotations

from .common import NormalizedContest

ALL_PLATFORMS = 'all platforms'
BOOKMARKS_PLATFORM = 'bookmarks'


def normalize_platform(selector) -> str | None:
    """Lowercase a platform selector; ``None`` means no platform filter."""
    if not isinstance(selector, str):
        return None
    selector = selector.strip().lower()
    if not selector or selector == ALL_PLATFORMS:
        return None
    return selector


def matches_query(contest: NormalizedContest, query: str) -> bool:
    needle = query.lower()
    return (
        needle in contest.name.lower()
        or needle in contest.platform.lower()
        # Ids are usually numeric, so no case folding here.
        or query in contest.contest_id
    )


def filter_contests(contests: list[NormalizedContest], query=None) -> list[NormalizedContest]:
    """Keep contests whose name, platform or id contains *query*.

    Name and platform match case-insensitively. An empty or missing query
    returns the input unchanged.
    """
    if not isinstance(query, str) or not query.strip():
        return contests
    # Surrounding whitespace is ignored, so " 2" matches like "2".
    query = query.strip()
    return [c for c in contests if matches_query(c, query)]
