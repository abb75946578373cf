"""
Data models for the activity report: date ranges, normalized GitHub entities and day buckets.
"""

import datetime as dt
from typing import List, Optional, Iterator

ISSUE = 'issue'
PULL_REQUEST = 'pull-request'


class DateRange:
    """
    Inclusive range of calendar days in the report timezone, plus the review lookback start.
    """
    def __init__(self, start: dt.date, end: dt.date, lookback_start: dt.date, start_instant: str = '', end_instant: str = '', lookback_instant: str = ''):
        self.start = start
        self.end = end
        self.lookback_start = lookback_start
        # GitHub search qualifiers, e.g. 2021-01-01T00:00:00-08:00
        self.start_instant = start_instant
        self.end_instant = end_instant
        self.lookback_instant = lookback_instant

    def days(self) -> Iterator[dt.date]:
        """Yield every calendar day from start to end, both included."""
        day = self.start
        while day <= self.end:
            yield day
            day += dt.timedelta(days=1)

    def __repr__(self):
        return f"DateRange({self.start.isoformat()}..{self.end.isoformat()}, lookback={self.lookback_start.isoformat()})"


class ActivityItem:
    """
    Issue or pull request created by the user.
    """
    def __init__(self, number: int, url: str, title: str, kind: str, created_at: str, repository: str = '', author: str = ''):
        self.number = number
        self.url = url
        self.title = title
        self.kind = kind  # ISSUE or PULL_REQUEST
        self.created_at = created_at
        self.repository = repository
        self.author = author

    @property
    def is_pull_request(self) -> bool:
        return self.kind == PULL_REQUEST


class ReviewEvent:
    """
    A "reviewed" timeline event performed by the user on someone else's pull request.
    """
    def __init__(self, pull_request_number: int, url: str, submitted_at: str, reviewer: str):
        self.pull_request_number = pull_request_number
        self.url = url
        self.submitted_at = submitted_at
        self.reviewer = reviewer


class CommentItem:
    def __init__(self, url: str, created_at: str, author: str):
        self.url = url
        self.created_at = created_at
        self.author = author


class AssociatedPullRequest:
    def __init__(self, number: int, url: str, author: str, repository: str = ''):
        self.number = number
        self.url = url
        self.author = author
        self.repository = repository  # owner/name


class Commit:
    """
    Commit authored by the user, with the user's own pull requests that contain it.
    """
    def __init__(self, sha: str, url: str, author_date: str, repository: str, associated_pull_requests: Optional[List[AssociatedPullRequest]] = None):
        self.sha = sha
        self.url = url
        self.author_date = author_date
        self.repository = repository
        self.associated_pull_requests = associated_pull_requests or []

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class DayBucket:
    """
    Everything the user did on one calendar day in the report timezone.
    """
    def __init__(self, day: dt.date, label: str):
        self.day = day
        self.key = day.isoformat()
        self.label = label
        self.items: List[ActivityItem] = []
        self.reviews: List[ReviewEvent] = []
        self.comments: List[CommentItem] = []
        self.commits: List[Commit] = []

    def is_empty(self) -> bool:
        return not (self.items or self.reviews or self.comments or self.commits)

    def __len__(self):
        return len(self.items) + len(self.reviews) + len(self.comments) + len(self.commits)
