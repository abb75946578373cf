import unittest

from correlate.buckets import bucketize
from normalize.dates import resolve_range
from normalize.models import ActivityItem, ReviewEvent, CommentItem, Commit, AssociatedPullRequest, PULL_REQUEST, ISSUE
from report.renderer import render_report, day_lines, group_commits_by_pull_request


def _commit(sha, prs, date='2021-01-01T18:00:00Z', repo='Expensify/App'):
    return Commit(sha, f"https://github.com/{repo}/commit/{sha}", date, repo, prs)


def _pr(number, repo='Expensify/App'):
    return AssociatedPullRequest(number, f"https://github.com/{repo}/pull/{number}", 'me', repo)


class TestReportRenderer(unittest.TestCase):
    def test_empty_days_still_render_in_order(self):
        buckets = bucketize(resolve_range(start_date='2021-01-01', end_date='2021-01-02'), [], [], [], [])
        out = render_report(buckets)
        self.assertEqual(out, "\nJAN 1ST 2021 FRIDAY [Note: GH Activity]\n\nJAN 2ND 2021 SATURDAY [Note: GH Activity]\n")
        self.assertLess(out.index('JAN 1ST 2021'), out.index('JAN 2ND 2021'))

    def test_created_items_reviews_and_comments(self):
        items = [
            ActivityItem(12, 'https://github.com/Expensify/App/pull/12', 'Fix login', PULL_REQUEST, '2021-01-01T18:00:00Z'),
            ActivityItem(34, 'https://github.com/Expensify/App/issues/34', 'Crash on start', ISSUE, '2021-01-01T19:00:00Z'),
        ]
        reviews = [ReviewEvent(56, 'https://github.com/Expensify/App/pull/56#pullrequestreview-1', '2021-01-01T20:00:00Z', 'me')]
        comments = [CommentItem('https://github.com/c/1', '2021-01-01T20:00:00Z', 'me'), CommentItem('https://github.com/c/2', '2021-01-01T21:00:00Z', 'me')]
        buckets = bucketize(resolve_range(date='2021-01-01'), items, reviews, comments, [])
        self.assertEqual(day_lines(buckets[0]), [
            '• GH: [PR #12](https://github.com/Expensify/App/pull/12) – Fix login',
            '• GH: [Issue #34](https://github.com/Expensify/App/issues/34) – Crash on start',
            '• GH: Reviewed [PR #56](https://github.com/Expensify/App/pull/56#pullrequestreview-1)',
            '• GH: Comments – [',
            '\t• https://github.com/c/1',
            '\t• https://github.com/c/2',
            '  ]',
        ])

    def test_commit_with_two_pull_requests_renders_one_line_per_pr(self):
        commit = _commit('abcdef1234', [_pr(7), _pr(8)])
        buckets = bucketize(resolve_range(date='2021-01-01'), [], [], [], [commit])
        lines = day_lines(buckets[0])
        self.assertEqual(lines, [
            '• GH: Commits on [PR #7](https://github.com/Expensify/App/pull/7) – [abcdef1](https://github.com/Expensify/App/commit/abcdef1234)',
            '• GH: Commits on [PR #8](https://github.com/Expensify/App/pull/8) – [abcdef1](https://github.com/Expensify/App/commit/abcdef1234)',
        ])

    def test_commits_grouped_and_created_prs_skipped(self):
        created = ActivityItem(7, 'https://github.com/Expensify/App/pull/7', 'New PR', PULL_REQUEST, '2021-01-01T17:00:00Z', 'Expensify/App')
        commits = [_commit('1111111aaa', [_pr(7)]), _commit('2222222bbb', [_pr(9)]), _commit('3333333ccc', [_pr(9)])]
        buckets = bucketize(resolve_range(date='2021-01-01'), [created], [], [], commits)
        lines = day_lines(buckets[0])
        self.assertEqual(len(lines), 2)
        self.assertIn('Commits on [PR #9]', lines[1])
        self.assertIn('[2222222]', lines[1])
        self.assertIn('[3333333]', lines[1])
        self.assertFalse(any('Commits on [PR #7]' in line for line in lines))

    def test_no_comment_block_without_comments(self):
        buckets = bucketize(resolve_range(date='2021-01-01'), [], [], [], [])
        self.assertEqual(day_lines(buckets[0]), [])


def test_group_commits_first_seen_order():
    commits = [_commit('a' * 10, [_pr(3)]), _commit('b' * 10, [_pr(1), _pr(3)])]
    groups = group_commits_by_pull_request(commits)
    assert [pr.number for pr, _ in groups] == [3, 1]
    assert [c.sha[0] for c in groups[0][1]] == ['a', 'b']


def test_same_number_in_another_repository_is_not_skipped():
    created = ActivityItem(7, 'https://github.com/Expensify/Web/issues/7', 'Web issue', ISSUE, '2021-01-01T17:00:00Z', 'Expensify/Web')
    commits = [_commit('1111111aaa', [_pr(7)]), _commit('2222222bbb', [_pr(7, 'Expensify/Web')], repo='Expensify/Web')]
    buckets = bucketize(resolve_range(date='2021-01-01'), [created], [], [], commits)
    lines = day_lines(buckets[0])
    assert lines[1:] == [
        '• GH: Commits on [PR #7](https://github.com/Expensify/App/pull/7) – [1111111](https://github.com/Expensify/App/commit/1111111aaa)',
    ]


if __name__ == '__main__':
    unittest.main()
