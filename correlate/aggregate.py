"""
Activity aggregation: fetch -> extract comments/reviews -> enrich commits -> bucket by day.
"""
import logging
from typing import List

from ingest.github import GitHubClient
from normalize.models import DateRange, DayBucket
from normalize.util import normalize_item, normalize_commit
from correlate.fetcher import ActivityFetcher, DEFAULT_ORG
from correlate.extract import extract_comments, extract_reviews, enrich_commits
from correlate.fanout import gather_calls
from correlate.buckets import bucketize

logger = logging.getLogger(__name__)


def aggregate_activity(client: GitHubClient, identity: str, date_range: DateRange, org: str = DEFAULT_ORG) -> List[DayBucket]:
    """Build the day buckets for one user. Any FetchFailed aborts the whole aggregation."""
    fetched = ActivityFetcher(client, org).fetch(identity, date_range)

    comments, reviews = gather_calls(
        lambda: extract_comments(client, fetched.commented, identity),
        lambda: extract_reviews(client, fetched.reviewed_candidates, identity),
    )
    commits = enrich_commits(client, [normalize_commit(c) for c in fetched.commits], identity)
    items = [normalize_item(i) for i in fetched.created]

    logger.info("Bucketing %d item(s), %d review(s), %d comment(s), %d commit(s)", len(items), len(reviews), len(comments), len(commits))
    return bucketize(date_range, items, reviews, comments, commits)
