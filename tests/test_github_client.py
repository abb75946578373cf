from unittest.mock import patch

from ingest.github import GitHubClient


def _page(body, next_url=None):
    links = {'next': {'url': next_url}} if next_url else {}
    return {'response': body, 'status': 200, 'links': links}


def test_search_follows_next_links():
    client = GitHubClient('t')
    pages = [
        _page({'items': [{'number': 1}, {'number': 2}]}, 'https://api.github.com/search/issues?q=x&page=2'),
        _page({'items': [{'number': 3}]}),
    ]
    with patch('ingest.github.perform_request_with_retries', side_effect=pages) as mocked:
        items = client.search_issues('org:Expensify author:me')
    assert [i['number'] for i in items] == [1, 2, 3]
    first_url, second_url = mocked.call_args_list[0][0][0], mocked.call_args_list[1][0][0]
    assert first_url == 'https://api.github.com/search/issues'
    assert mocked.call_args_list[0][1]['params'] == {'q': 'org:Expensify author:me', 'per_page': 100}
    assert second_url == 'https://api.github.com/search/issues?q=x&page=2'
    assert mocked.call_args_list[1][1]['params'] == {}


def test_list_endpoints_collect_arrays():
    client = GitHubClient('t')
    pages = [_page([{'id': 1}], 'https://api.github.com/next'), _page([{'id': 2}])]
    with patch('ingest.github.perform_request_with_retries', side_effect=pages) as mocked:
        events = client.get_timeline('Expensify/App', 12)
    assert [e['id'] for e in events] == [1, 2]
    assert mocked.call_args_list[0][0][0] == 'https://api.github.com/repos/Expensify/App/issues/12/timeline'


def test_comments_url_used_verbatim():
    client = GitHubClient('t')
    url = 'https://api.github.com/repos/Expensify/App/issues/5/comments'
    with patch('ingest.github.perform_request_with_retries', return_value=_page([])) as mocked:
        client.get_comments(url)
    assert mocked.call_args[0][0] == url


def test_commit_pulls_endpoint_and_auth_header():
    client = GitHubClient('secret')
    with patch('ingest.github.perform_request_with_retries', return_value=_page([])) as mocked:
        client.get_commit_pulls('Expensify/App', 'abc123')
    assert mocked.call_args[0][0] == 'https://api.github.com/repos/Expensify/App/commits/abc123/pulls'
    assert mocked.call_args[1]['headers']['Authorization'] == 'Bearer secret'


def test_authenticated_login():
    client = GitHubClient('t')
    with patch('ingest.github.perform_request_with_retries', return_value=_page({'login': 'octocat'})):
        assert client.get_authenticated_login() == 'octocat'
