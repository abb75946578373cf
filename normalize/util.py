"""
Normalization utility helpers.
Small helpers to turn raw GitHub REST payloads into normalize.models entities.
"""
from typing import Dict, Any
from urllib.parse import urlparse
from normalize.models import ActivityItem, ReviewEvent, CommentItem, Commit, AssociatedPullRequest, ISSUE, PULL_REQUEST


def login_of(raw: Dict[str, Any], field: str = 'user') -> str:
    """Return the login of a nested user object ('user', 'actor', 'author'), or '' if absent."""
    return (raw.get(field) or {}).get('login') or ''


def repo_from_api_url(url: str) -> str:
    """Return 'owner/name' from an API URL such as https://api.github.com/repos/owner/name."""
    parts = urlparse(url or '').path.strip('/').split('/')
    if len(parts) >= 3 and parts[0] == 'repos':
        return f"{parts[1]}/{parts[2]}"
    return '/'.join(parts[-2:])


def normalize_item(raw: Dict[str, Any]) -> ActivityItem:
    """Create an ActivityItem from a /search/issues result. Pull requests carry a 'pull_request' key."""
    return ActivityItem(
        number=raw.get('number'),
        url=raw.get('html_url') or '',
        title=raw.get('title') or '',
        kind=PULL_REQUEST if raw.get('pull_request') else ISSUE,
        created_at=raw.get('created_at') or '',
        repository=repo_from_api_url(raw.get('repository_url')),
        author=login_of(raw),
    )


def normalize_comment(raw: Dict[str, Any]) -> CommentItem:
    return CommentItem(url=raw.get('html_url') or '', created_at=raw.get('created_at') or '', author=login_of(raw))


def normalize_review_event(raw: Dict[str, Any], pull_request_number: int) -> ReviewEvent:
    """Create a ReviewEvent from an issue timeline entry with event == 'reviewed'.
    Review entries report the reviewer under 'user' and the time under 'submitted_at'.
    """
    return ReviewEvent(
        pull_request_number=pull_request_number,
        url=raw.get('html_url') or '',
        submitted_at=raw.get('submitted_at') or raw.get('created_at') or '',
        reviewer=login_of(raw) or login_of(raw, 'actor'),
    )


def normalize_pull_request(raw: Dict[str, Any], repository: str = '') -> AssociatedPullRequest:
    """Create an AssociatedPullRequest; the base repo wins over the repository the commit was found in."""
    base_repo = ((raw.get('base') or {}).get('repo') or {}).get('full_name')
    return AssociatedPullRequest(
        number=raw.get('number'),
        url=raw.get('html_url') or '',
        author=login_of(raw),
        repository=base_repo or repository,
    )


def normalize_commit(raw: Dict[str, Any]) -> Commit:
    """Create a Commit from a /search/commits result."""
    commit = raw.get('commit') or {}
    return Commit(
        sha=raw.get('sha') or '',
        url=raw.get('html_url') or '',
        author_date=(commit.get('author') or {}).get('date') or '',
        repository=(raw.get('repository') or {}).get('full_name') or '',
    )
