"""
DayBucketizer: one bucket per calendar day of the report range, filled by a single pass per item type.
"""
import logging
from typing import Dict, List

from normalize.models import DateRange, DayBucket, ActivityItem, ReviewEvent, CommentItem, Commit
from normalize.dates import local_day, day_label

logger = logging.getLogger(__name__)


def _place(buckets: Dict[str, DayBucket], kind: str, timestamp: str, value, target: str):
    if not timestamp:
        logger.debug("Skipping %s without a timestamp", kind)
        return
    key = local_day(timestamp).isoformat()
    bucket = buckets.get(key)
    if bucket is None:
        logger.debug("Dropping %s at %s: outside the report range", kind, timestamp)
        return
    getattr(bucket, target).append(value)


def bucketize(
    date_range: DateRange,
    items: List[ActivityItem],
    reviews: List[ReviewEvent],
    comments: List[CommentItem],
    commits: List[Commit],
) -> List[DayBucket]:
    """Return the day buckets for [start, end] in ascending order, empty days included."""
    buckets: Dict[str, DayBucket] = {}
    for day in date_range.days():
        bucket = DayBucket(day, day_label(day))
        buckets[bucket.key] = bucket

    for item in items:
        _place(buckets, 'item', item.created_at, item, 'items')
    for review in reviews:
        _place(buckets, 'review', review.submitted_at, review, 'reviews')
    for comment in comments:
        _place(buckets, 'comment', comment.created_at, comment, 'comments')
    for commit in commits:
        _place(buckets, 'commit', commit.author_date, commit, 'commits')

    return [buckets[key] for key in sorted(buckets)]
