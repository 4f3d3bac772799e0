"""Tests for contest ordering, completed trimming and section grouping."""

from datetime import timedelta

from contest_tracker.contests import (
    group_sections,
    limit_completed,
    normalize_contests,
    sort_contests,
)
from tests.conftest import iso, make_contest


def names(contests):
    return [c.name for c in contests]


class TestSortContests:
    def test_bucket_order(self, now):
        contests = [
            make_contest('done', 'completed', now - timedelta(hours=5)),
            make_contest('soon', 'upcoming', now + timedelta(hours=1)),
            make_contest('live', 'ongoing', now - timedelta(minutes=30)),
        ]
        assert names(sort_contests(contests)) == ['live', 'soon', 'done']

    def test_ongoing_and_upcoming_ascending(self, now):
        contests = [
            make_contest('u2', 'upcoming', now + timedelta(days=2)),
            make_contest('o2', 'ongoing', now - timedelta(minutes=10)),
            make_contest('u1', 'upcoming', now + timedelta(hours=3)),
            make_contest('o1', 'ongoing', now - timedelta(hours=1)),
        ]
        assert names(sort_contests(contests)) == ['o1', 'o2', 'u1', 'u2']

    def test_completed_descending(self, now):
        contests = [
            make_contest('old', 'completed', now - timedelta(days=3)),
            make_contest('recent', 'completed', now - timedelta(hours=4)),
            make_contest('mid', 'completed', now - timedelta(days=1)),
        ]
        assert names(sort_contests(contests)) == ['recent', 'mid', 'old']

    def test_unknown_status_sorts_as_upcoming(self, now):
        contests = [
            make_contest('u2', 'upcoming', now + timedelta(hours=5)),
            make_contest('weird', 'postponed', now + timedelta(hours=2)),
            make_contest('done', 'completed', now - timedelta(hours=5)),
            make_contest('none', None, now + timedelta(hours=9)),
            make_contest('u1', 'upcoming', now + timedelta(hours=1)),
        ]
        assert names(sort_contests(contests)) == ['u1', 'weird', 'u2', 'none', 'done']

    def test_stable_for_equal_keys(self, now):
        start = now - timedelta(minutes=15)
        contests = [
            make_contest('first', 'ongoing', start),
            make_contest('second', 'ongoing', start),
            make_contest('third', 'ongoing', start),
        ]
        assert names(sort_contests(contests)) == ['first', 'second', 'third']
        assert names(sort_contests(list(reversed(contests)))) == ['third', 'second', 'first']

    def test_idempotent(self, now):
        contests = [
            make_contest(f'c{i}', status, now + timedelta(hours=offset))
            for i, (status, offset) in enumerate([
                ('completed', -30), ('upcoming', 4), ('ongoing', -1),
                ('completed', -10), ('upcoming', 4), ('ongoing', -1),
            ])
        ]
        once = sort_contests(contests)
        assert sort_contests(once) == once

    def test_does_not_mutate_input(self, now):
        contests = [
            make_contest('b', 'upcoming', now + timedelta(hours=2)),
            make_contest('a', 'ongoing', now),
        ]
        sort_contests(contests)
        assert names(contests) == ['b', 'a']

    def test_empty(self):
        assert sort_contests([]) == []

    def test_end_to_end_scenario(self, now):
        a = {'id': 'A', 'name': 'A', 'platform': 'Codeforces',
             'startTime': iso(now - timedelta(hours=1)), 'endTime': iso(now + timedelta(hours=1))}
        b = {'id': 'B', 'name': 'B', 'platform': 'LeetCode',
             'startTime': iso(now + timedelta(hours=2))}
        c = {'id': 'C', 'name': 'C', 'platform': 'CodeChef',
             'startTime': iso(now - timedelta(hours=5)), 'duration': '1h'}

        result = sort_contests(normalize_contests([[c, b, a]], now=now))

        assert names(result) == ['A', 'B', 'C']
        assert [r.status for r in result] == ['ongoing', 'upcoming', 'completed']
        assert result[1].end == now + timedelta(hours=4)
        assert result[2].end == now - timedelta(hours=4)


class TestLimitCompleted:
    def test_caps_per_platform(self, now):
        contests = [make_contest('live', 'ongoing', now)]
        contests += [
            make_contest(f'cf{i}', 'completed', now - timedelta(days=i + 1))
            for i in range(5)
        ]
        contests.append(make_contest('lc0', 'completed', now - timedelta(days=2), platform='LeetCode'))

        result = limit_completed(contests, per_platform=3)
        assert names(result) == ['live', 'cf0', 'cf1', 'cf2', 'lc0']

    def test_platform_compared_case_insensitively(self, now):
        contests = [
            make_contest('a', 'completed', now - timedelta(days=1), platform='Codeforces'),
            make_contest('b', 'completed', now - timedelta(days=2), platform='codeforces'),
        ]
        assert names(limit_completed(contests, per_platform=1)) == ['a']

    def test_non_completed_untouched(self, now):
        contests = [make_contest(f'u{i}', 'upcoming', now + timedelta(hours=i)) for i in range(6)]
        assert names(limit_completed(contests, per_platform=1)) == [f'u{i}' for i in range(6)]

    def test_zero_disables(self, now):
        contests = [make_contest(f'c{i}', 'completed', now - timedelta(days=i)) for i in range(5)]
        assert len(limit_completed(contests, per_platform=0)) == 5


class TestGroupSections:
    def test_sections_in_order(self, now):
        contests = sort_contests([
            make_contest('done', 'completed', now - timedelta(hours=5)),
            make_contest('live', 'ongoing', now),
        ])
        sections = group_sections(contests)
        assert [s['title'] for s in sections] == ['Ongoing Contests', 'Recent Completed Contests']
        assert [s['status'] for s in sections] == ['ongoing', 'completed']
        assert names(sections[0]['contests']) == ['live']

    def test_unknown_status_grouped_with_upcoming(self, now):
        sections = group_sections([make_contest('x', 'postponed', now)])
        assert sections[0]['status'] == 'upcoming'
        assert sections[0]['title'] == 'Upcoming Contests'

    def test_empty(self):
        assert group_sections([]) == []
