"""Shared test fixtures for the contest tracker test suite."""

import time
from datetime import datetime, timedelta, timezone

import pytest

from contest_tracker import create_app
from contest_tracker.contests.common import NormalizedContest

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def iso(dt):
    return dt.isoformat().replace('+00:00', 'Z')


class FakeSource:
    """Stand-in for an upstream source; records every fetch."""

    def __init__(self, records=None, error=None, delay=0.0):
        self.records = records if records is not None else []
        self.error = error
        self.delay = delay
        self.calls = 0

    def fetch_contests(self):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.records


def make_contest(name, status, start, platform='Codeforces', cid=None, hours=2):
    return NormalizedContest(
        record={'id': cid if cid is not None else name, 'name': name, 'platform': platform},
        start=start,
        end=start + timedelta(hours=hours),
        status=status,
    )


@pytest.fixture()
def app():
    """Create a Flask application configured for testing."""
    application = create_app('testing')
    yield application


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""
    return app.test_client()


@pytest.fixture()
def now():
    return NOW
