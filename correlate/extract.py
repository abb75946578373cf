"""
Second-stage lookups: comment threads, review timelines and the pull requests behind each commit.
Each stage fans out one request per input and filters only after the join.
"""
import logging
from typing import List, Dict, Any

from ingest.github import GitHubClient
from normalize.models import CommentItem, ReviewEvent, Commit
from normalize.util import login_of, repo_from_api_url, normalize_comment, normalize_review_event, normalize_pull_request
from correlate.fanout import gather

logger = logging.getLogger(__name__)

REVIEWED_EVENT = 'reviewed'


def extract_comments(client: GitHubClient, commented: List[Dict[str, Any]], identity: str) -> List[CommentItem]:
    """Fetch every thread the user commented on and keep only the user's own comments."""
    threads = gather(lambda item: client.get_comments(item['comments_url']), commented)
    comments: List[CommentItem] = []
    for thread in threads:
        comments.extend(normalize_comment(c) for c in thread if login_of(c) == identity)
    return comments


def _is_own_review(event: Dict[str, Any], identity: str) -> bool:
    if event.get('event') != REVIEWED_EVENT:
        return False
    return (login_of(event) or login_of(event, 'actor')) == identity


def extract_reviews(client: GitHubClient, candidates: List[Dict[str, Any]], identity: str) -> List[ReviewEvent]:
    """Turn reviewed-by search hits into the user's actual review events.

    Self-authored pull requests are not reviews. A candidate without a 'reviewed' timeline event by
    the user contributes nothing.
    """
    others = [pr for pr in candidates if login_of(pr) != identity]
    timelines = gather(lambda pr: client.get_timeline(repo_from_api_url(pr.get('repository_url')), pr['number']), others)
    reviews: List[ReviewEvent] = []
    for pr, timeline in zip(others, timelines):
        reviews.extend(normalize_review_event(e, pr['number']) for e in timeline if _is_own_review(e, identity))
    logger.debug("%d of %d review candidate(s) produced review events", len({r.pull_request_number for r in reviews}), len(candidates))
    return reviews


def enrich_commits(client: GitHubClient, commits: List[Commit], identity: str) -> List[Commit]:
    """Attach the user's own pull requests to each commit; commits with none are dropped."""
    pulls = gather(lambda c: client.get_commit_pulls(c.repository, c.sha), commits)
    enriched: List[Commit] = []
    for commit, raw_pulls in zip(commits, pulls):
        own = [normalize_pull_request(p, commit.repository) for p in raw_pulls if login_of(p) == identity]
        if not own:
            logger.debug("Dropping commit %s: no associated pull request by %s", commit.short_sha, identity)
            continue
        commit.associated_pull_requests = own
        enriched.append(commit)
    return enriched
