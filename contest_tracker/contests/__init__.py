"""Contest normalization, status classification, ordering and search."""
from .common import ContestStatus, NormalizedContest, contest_key
from .duration import parse_duration
from .fields import parse_instant, resolve_start, resolve_end, resolve_duration_ms
from .status import classify
from .ordering import sort_contests, limit_completed, group_sections
from .search import filter_contests, normalize_platform, BOOKMARKS_PLATFORM, ALL_PLATFORMS
from .normalizer import normalize_contest, normalize_contests

__all__ = [
    'ContestStatus',
    'NormalizedContest',
    'contest_key',
    'parse_duration',
    'parse_instant',
    'resolve_start',
    'resolve_end',
    'resolve_duration_ms',
    'classify',
    'sort_contests',
    'limit_completed',
    'group_sections',
    'filter_contests',
    'normalize_platform',
    'BOOKMARKS_PLATFORM',
    'ALL_PLATFORMS',
    'normalize_contest',
    'normalize_contests',
]
