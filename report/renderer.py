"""
Report renderer: plain-text daily activity report and tagged status dump.
Layout lives in Jinja2 templates under report/templates; line formatting lives here.
"""

import os
from typing import Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from normalize.models import ActivityItem, AssociatedPullRequest, Commit, DayBucket

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')
BULLET = '• GH:'


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(['html', 'xml']),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def format_item(item: ActivityItem) -> str:
    kind = 'PR' if item.is_pull_request else 'Issue'
    return f"{BULLET} [{kind} #{item.number}]({item.url}) – {item.title}"


def group_commits_by_pull_request(commits: List[Commit]) -> List[Tuple[AssociatedPullRequest, List[Commit]]]:
    """Group commits under each associated pull request, in first-seen order. A commit can appear under several PRs."""
    groups: Dict[Tuple[str, int], Tuple[AssociatedPullRequest, List[Commit]]] = {}
    for commit in commits:
        for pr in commit.associated_pull_requests:
            groups.setdefault((pr.repository, pr.number), (pr, []))[1].append(commit)
    return list(groups.values())


def format_commit_lines(bucket: DayBucket) -> List[str]:
    """One line per pull request; PRs already listed as created items on the same day are skipped."""
    listed = {(item.repository, item.number) for item in bucket.items}
    lines = []
    for pr, commits in group_commits_by_pull_request(bucket.commits):
        if (pr.repository, pr.number) in listed:
            continue
        links = ', '.join(f"[{c.short_sha}]({c.url})" for c in commits)
        lines.append(f"{BULLET} Commits on [PR #{pr.number}]({pr.url}) – {links}")
    return lines


def format_comment_block(bucket: DayBucket) -> List[str]:
    if not bucket.comments:
        return []
    return [f"{BULLET} Comments – ["] + [f"\t• {c.url}" for c in bucket.comments] + ["  ]"]


def day_lines(bucket: DayBucket) -> List[str]:
    """All report lines for one day, without the header."""
    lines = [format_item(item) for item in bucket.items]
    lines.extend(format_commit_lines(bucket))
    lines.extend(f"{BULLET} Reviewed [PR #{r.pull_request_number}]({r.url})" for r in bucket.reviews)
    lines.extend(format_comment_block(bucket))
    return lines


def render_report(buckets: List[DayBucket]) -> str:
    """Render every bucket in order; empty days still get their labeled header."""
    days = [{'label': b.label, 'lines': day_lines(b)} for b in buckets]
    return _environment().get_template('daily_report.txt.j2').render(days=days)


def render_dump(years) -> str:
    """Render tagged status years (status.tagger.TaggedYear) grouped by year, month and day entry."""
    return _environment().get_template('status_dump.txt.j2').render(years=years)
