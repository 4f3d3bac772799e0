from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


class ContestStatus(str, Enum):
    ONGOING = 'ongoing'
    UPCOMING = 'upcoming'
    COMPLETED = 'completed'


# Two hours, used whenever an end time or duration cannot be determined.
DEFAULT_DURATION_MS = 2 * 60 * 60 * 1000

# Keys added by the pipeline; never part of an upstream record.
DERIVED_FIELDS = ('status', 'start_instant', 'end_instant', 'is_bookmarked')


@dataclass(frozen=True)
class Resolved:
    """A resolved value plus whether a fallback default was substituted."""
    value: Any
    degraded: bool = False


def contest_key(record: Mapping) -> str:
    """Bookmark identity of a record: its ``id`` if present, else its ``name``."""
    cid = record.get('id')
    if cid is not None and cid != '':
        return str(cid)
    name = record.get('name')
    return '' if name is None else str(name)


def _text(value) -> str:
    return '' if value is None else str(value)


@dataclass
class NormalizedContest:
    record: dict
    start: datetime
    end: datetime
    status: str
    degraded: bool = False

    @property
    def name(self) -> str:
        return _text(self.record.get('name'))

    @property
    def platform(self) -> str:
        return _text(self.record.get('platform'))

    @property
    def contest_id(self) -> str:
        return _text(self.record.get('id'))

    @property
    def key(self) -> str:
        return contest_key(self.record)

    def to_dict(self) -> dict:
        data = dict(self.record)
        data['status'] = str(getattr(self.status, 'value', self.status))
        data['start_instant'] = self.start.isoformat()
        data['end_instant'] = self.end.isoformat()
        return data
