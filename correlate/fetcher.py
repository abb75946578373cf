"""
ActivityFetcher: the four organisation-scoped searches behind the activity report.
"""
import logging
from typing import List, Dict, Any

from ingest.github import GitHubClient
from normalize.models import DateRange
from correlate.fanout import gather_calls

logger = logging.getLogger(__name__)

DEFAULT_ORG = 'Expensify'


class FetchResult:
    """Raw search results, joined after all four queries complete."""
    def __init__(self, created: List[Dict[str, Any]], reviewed_candidates: List[Dict[str, Any]], commented: List[Dict[str, Any]], commits: List[Dict[str, Any]]):
        self.created = created
        self.reviewed_candidates = reviewed_candidates
        self.commented = commented
        self.commits = commits


def build_queries(org: str, identity: str, date_range: DateRange) -> Dict[str, str]:
    """Search qualifiers for each result set. Reviews use the lookback window since a review can land long after the PR is opened."""
    window = f"{date_range.start_instant}..{date_range.end_instant}"
    lookback = f"{date_range.lookback_instant}..{date_range.end_instant}"
    return {
        'created': f"org:{org} author:{identity} created:{window}",
        'reviewed': f"org:{org} type:pr reviewed-by:{identity} created:{lookback}",
        'commented': f"org:{org} commenter:{identity} updated:{window}",
        'commits': f"org:{org} author:{identity} author-date:{window}",
    }


class ActivityFetcher:
    def __init__(self, client: GitHubClient, org: str = DEFAULT_ORG):
        self.client = client
        self.org = org

    def fetch(self, identity: str, date_range: DateRange) -> FetchResult:
        """Run the four searches concurrently. Any failure propagates as FetchFailed."""
        queries = build_queries(self.org, identity, date_range)
        created, reviewed, commented, commits = gather_calls(
            lambda: self.client.search_issues(queries['created']),
            lambda: self.client.search_issues(queries['reviewed']),
            lambda: self.client.search_issues(queries['commented']),
            lambda: self.client.search_commits(queries['commits']),
        )
        logger.info(
            "Fetched %d created, %d review candidate(s), %d commented, %d commit(s) for %s",
            len(created), len(reviewed), len(commented), len(commits), identity,
        )
        return FetchResult(created=created, reviewed_candidates=reviewed, commented=commented, commits=commits)
