import unittest
from unittest.mock import patch, Mock

import requests

from errors import FetchFailed
from ingest import retry
from ingest.retry import perform_request_with_retries, configure_retry, reset_retry_configuration


def _resp(status, body=None, headers=None, links=None):
    resp = Mock()
    resp.status_code = status
    resp.json.return_value = body if body is not None else {}
    resp.text = str(body)
    resp.headers = headers or {}
    resp.links = links or {}
    return resp


class TestRetryPolicy(unittest.TestCase):
    def tearDown(self):
        reset_retry_configuration()

    def test_success_returns_body_and_links(self):
        links = {'next': {'url': 'https://api.github.com/x?page=2'}}
        with patch('ingest.retry.requests.get', return_value=_resp(200, {'a': 1}, links=links)):
            res = perform_request_with_retries('https://api.github.com/x')
        self.assertEqual(res['response'], {'a': 1})
        self.assertEqual(res['status'], 200)
        self.assertEqual(res['links'], links)

    def test_rate_limit_retried_once(self):
        limited = _resp(403, {'message': 'API rate limit exceeded'}, headers={'X-RateLimit-Remaining': '0', 'Retry-After': '3'})
        ok = _resp(200, {'ok': True})
        with patch('ingest.retry.requests.get', side_effect=[limited, ok]) as mocked_get, \
                patch('ingest.retry.time.sleep') as mocked_sleep:
            res = perform_request_with_retries('https://api.github.com/x')
        self.assertEqual(res['response'], {'ok': True})
        self.assertEqual(mocked_get.call_count, 2)
        mocked_sleep.assert_called_once_with(3.0)

    def test_rate_limit_gives_up_after_one_retry(self):
        limited = _resp(429, {'message': 'slow down'}, headers={'Retry-After': '1'})
        with patch('ingest.retry.requests.get', return_value=limited) as mocked_get, \
                patch('ingest.retry.time.sleep'):
            with self.assertRaises(FetchFailed) as ctx:
                perform_request_with_retries('https://api.github.com/x')
        self.assertEqual(mocked_get.call_count, 2)
        self.assertEqual(ctx.exception.status, 429)

    def test_abuse_limit_warns_without_retry(self):
        abuse = _resp(403, {'message': 'You have exceeded a secondary rate limit.'}, headers={'Retry-After': '60'})
        with patch('ingest.retry.requests.get', return_value=abuse) as mocked_get, \
                patch('ingest.retry.time.sleep') as mocked_sleep:
            with self.assertLogs('ingest.retry', level='WARNING') as logs:
                with self.assertRaises(FetchFailed):
                    perform_request_with_retries('https://api.github.com/x')
        self.assertEqual(mocked_get.call_count, 1)
        mocked_sleep.assert_not_called()
        self.assertIn('Abuse detected for request GET https://api.github.com/x', logs.output[0])

    def test_other_errors_fail_immediately(self):
        with patch('ingest.retry.requests.get', return_value=_resp(404, {'message': 'Not Found'})) as mocked_get:
            with self.assertRaises(FetchFailed) as ctx:
                perform_request_with_retries('https://api.github.com/missing')
        self.assertEqual(mocked_get.call_count, 1)
        self.assertIn('Not Found', str(ctx.exception))

    def test_connection_error_becomes_fetch_failed(self):
        with patch('ingest.retry.requests.get', side_effect=requests.ConnectionError('boom')):
            with self.assertRaises(FetchFailed):
                perform_request_with_retries('https://api.github.com/x')

    def test_configure_retry_overrides_default(self):
        configure_retry(max_retries=0)
        limited = _resp(429, {}, headers={'Retry-After': '1'})
        with patch('ingest.retry.requests.get', return_value=limited) as mocked_get, \
                patch('ingest.retry.time.sleep'):
            with self.assertRaises(FetchFailed):
                perform_request_with_retries('https://api.github.com/x')
        self.assertEqual(mocked_get.call_count, 1)

    def test_explicit_max_retries_beats_runtime_override(self):
        configure_retry(max_retries=0)
        limited = _resp(429, {}, headers={'Retry-After': '1'})
        with patch('ingest.retry.requests.get', side_effect=[limited, _resp(200, {'ok': True})]) as mocked_get, \
                patch('ingest.retry.time.sleep'):
            res = perform_request_with_retries('https://api.github.com/x', max_retries=1)
        self.assertEqual(mocked_get.call_count, 2)
        self.assertEqual(res, {'response': {'ok': True}, 'status': 200, 'links': {}})


def test_wait_is_capped():
    assert retry._compute_wait_seconds(1000.0, None, 120.0) == 120.0
    assert retry._compute_wait_seconds(None, None, 30.0) == 30.0


def test_parse_retry_after_variants():
    assert retry._parse_retry_after('5') == 5.0
    assert retry._parse_retry_after('') is None
    assert retry._parse_retry_after('garbage') is None


if __name__ == '__main__':
    unittest.main()
