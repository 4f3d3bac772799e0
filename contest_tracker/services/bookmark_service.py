"""Cookie-backed bookmark store.

Bookmarks are kept client-side as a JSON list of contest snapshots in a
single cookie, so the store is rebuilt from the request on every call and
written back onto the response.
"""
from __future__ import annotations

import json
import logging
from typing import Mapping

from flask import current_app
from werkzeug.http import dump_cookie

from contest_tracker.contests.common import DERIVED_FIELDS, contest_key

logger = logging.getLogger(__name__)


class BookmarkStore:
    def __init__(self, items=None, cookie_name: str = 'bookmarks',
                 max_items: int = 50, max_age: int = 365 * 24 * 3600,
                 max_bytes: int = 3800):
        self.cookie_name = cookie_name
        self.max_items = max_items
        self.max_age = max_age
        self.max_bytes = max_bytes
        self.items: list[dict] = [dict(i) for i in (items or []) if isinstance(i, Mapping)]

    @classmethod
    def from_request(cls, request) -> BookmarkStore:
        config = current_app.config
        cookie_name = config.get('BOOKMARK_COOKIE_NAME', 'bookmarks')
        return cls(
            items=cls.decode(request.cookies.get(cookie_name)),
            cookie_name=cookie_name,
            max_items=config.get('BOOKMARK_MAX_ITEMS', 50),
            max_age=config.get('BOOKMARK_COOKIE_MAX_AGE', 365 * 24 * 3600),
            max_bytes=config.get('BOOKMARK_COOKIE_MAX_BYTES', 3800),
        )

    @staticmethod
    def decode(raw: str | None) -> list[dict]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed bookmarks cookie")
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring bookmarks cookie holding {type(data).__name__}")
            return []
        return [item for item in data if isinstance(item, dict)]

    def encode(self) -> str:
        return json.dumps(self.items, separators=(',', ':'), default=str)

    def ids(self) -> list[str]:
        return [contest_key(item) for item in self.items]

    def contains(self, key: str) -> bool:
        return key in self.ids()

    def cookie_size(self) -> int:
        """Size of the ``name=value`` pair as sent in ``Set-Cookie``."""
        return len(dump_cookie(self.cookie_name, self.encode(), path=None, max_size=0))

    def add(self, contest: Mapping) -> bool:
        """Bookmark *contest*; returns False if it was not stored.

        The oldest snapshots are dropped once the store holds more than
        ``max_items`` or its cookie grows past ``max_bytes``.
        """
        snapshot = {k: v for k, v in contest.items() if k not in DERIVED_FIELDS}
        key = contest_key(snapshot)
        if not key or self.contains(key):
            return False
        self.items.append(snapshot)

        dropped = 0
        if self.max_items and len(self.items) > self.max_items:
            dropped = len(self.items) - self.max_items
            self.items = self.items[dropped:]
        while self.max_bytes and self.items and self.cookie_size() > self.max_bytes:
            self.items.pop(0)
            dropped += 1
        if dropped:
            logger.info(f"Bookmark cookie full, dropped {dropped} oldest bookmark(s)")
        return self.contains(key)

    def remove(self, contest) -> bool:
        """Remove by contest mapping or key; returns False if nothing matched."""
        key = contest_key(contest) if isinstance(contest, Mapping) else str(contest)
        remaining = [item for item in self.items if contest_key(item) != key]
        removed = len(remaining) != len(self.items)
        self.items = remaining
        return removed

    def apply(self, response):
        response.set_cookie(
            self.cookie_name,
            self.encode(),
            max_age=self.max_age,
            httponly=True,
            samesite='Lax',
        )
        return response
