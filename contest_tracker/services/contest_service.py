"""Contest listing service: fetch, normalize, sort, filter."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping

from flask import current_app, has_app_context

from contest_tracker.contests import (
    BOOKMARKS_PLATFORM,
    NormalizedContest,
    contest_key,
    filter_contests,
    group_sections,
    limit_completed,
    normalize_contests,
    normalize_platform,
    sort_contests,
)
from contest_tracker.sources import get_all_sources, get_source_instance

logger = logging.getLogger(__name__)


@dataclass
class ContestListing:
    contests: list[NormalizedContest]
    platform: str | None = None
    query: str | None = None
    bookmark_ids: list[str] = field(default_factory=list)
    is_bookmarks_page: bool = False

    def is_bookmarked(self, contest) -> bool:
        return contest.key in self.bookmark_ids

    def sections(self) -> list[dict]:
        return group_sections(self.contests)

    def to_dict(self) -> dict:
        items = []
        for contest in self.contests:
            data = contest.to_dict()
            data['is_bookmarked'] = self.is_bookmarked(contest)
            items.append(data)
        return {
            'platform': self.platform,
            'query': self.query,
            'is_bookmarks_page': self.is_bookmarks_page,
            'count': len(items),
            'contests': items,
            'bookmark_ids': list(self.bookmark_ids),
        }


class ContestService:
    """Builds the contest listing for one request.

    Args:
        sources: Mapping of platform name to an object with
                 ``fetch_contests()``. Defaults to every registered source,
                 configured from the current app.
        max_workers: Thread count for the parallel fetch.
        completed_per_platform: Completed contests kept per platform
                                (0 keeps all).
    """

    def __init__(self, sources: dict = None, max_workers: int = None,
                 completed_per_platform: int = None):
        config = current_app.config if has_app_context() else {}
        self._sources = sources
        self.max_workers = max_workers or config.get('SOURCE_MAX_WORKERS', 3)
        self.completed_per_platform = (
            completed_per_platform if completed_per_platform is not None
            else config.get('COMPLETED_PER_PLATFORM', 3)
        )
        self.source_order = config.get('SOURCE_ORDER')

    @staticmethod
    def _build_source(name: str, single: bool = False):
        config = current_app.config
        kwargs = dict(
            base_url=config.get('CONTEST_API_BASE_URL', 'http://localhost:3000'),
            timeout=config.get('SOURCE_TIMEOUT', 10.0),
            max_retries=config.get('SOURCE_MAX_RETRIES', 2),
        )
        if single:
            kwargs['no_cache'] = True
        return get_source_instance(name, **kwargs)

    def source_names(self) -> list[str]:
        if self._sources is not None:
            return list(self._sources)
        return list(get_all_sources(self.source_order))

    def _get_source(self, name: str, single: bool = False):
        if self._sources is not None:
            return self._sources[name]
        return self._build_source(name, single=single)

    def _release(self, sources):
        """Close the HTTP sessions of sources built for this call."""
        if self._sources is not None:
            return
        for source in sources:
            source.close()

    @staticmethod
    def _fetch_one(name: str, source) -> list[dict]:
        try:
            records = source.fetch_contests()
        except Exception as e:
            logger.error(f"Contest source {name} failed: {e}")
            return []
        return records if isinstance(records, list) else []

    def fetch_all(self) -> list[list[dict]]:
        """Fetch every source in parallel; results follow source order."""
        names = self.source_names()
        if not names:
            return []

        # Sources are built here; worker threads run without an app context.
        sources = {name: self._get_source(name) for name in names}
        results: dict[str, list[dict]] = {}
        try:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(names))) as executor:
                futures = {
                    executor.submit(self._fetch_one, name, source): name
                    for name, source in sources.items()
                }
                for future in as_completed(futures):
                    name = futures[future]
                    results[name] = future.result()
        finally:
            self._release(sources.values())
        return [results[name] for name in names]

    def fetch_records(self, platform: str | None, bookmarks=()) -> list[list[dict]]:
        if platform == BOOKMARKS_PLATFORM:
            return [list(bookmarks)]
        if platform and platform in self.source_names():
            source = self._get_source(platform, single=True)
            try:
                return [self._fetch_one(platform, source)]
            finally:
                self._release([source])
        if platform:
            logger.info(f"Unknown platform {platform!r}, listing all platforms")
        return self.fetch_all()

    def list_contests(self, platform=None, query=None, bookmarks=(),
                      now: datetime = None) -> ContestListing:
        platform = normalize_platform(platform)
        query = query.strip() if isinstance(query, str) and query.strip() else None
        bookmarks = list(bookmarks or ())

        contests = normalize_contests(self.fetch_records(platform, bookmarks), now=now)
        contests = sort_contests(contests)
        contests = filter_contests(contests, query)
        contests = limit_completed(contests, self.completed_per_platform)

        return ContestListing(
            contests=contests,
            platform=platform,
            query=query,
            bookmark_ids=[contest_key(b) for b in bookmarks if isinstance(b, Mapping)],
            is_bookmarks_page=platform == BOOKMARKS_PLATFORM,
        )
