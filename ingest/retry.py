"""
Rate-limit-aware HTTP GET helper for the GitHub REST API.

Policy: a primary rate-limit response (429, or 403 with X-RateLimit-Remaining: 0) is retried
once after waiting for Retry-After / X-RateLimit-Reset. A secondary ("abuse detection") limit
is logged as a warning and not retried. Every other failure raises FetchFailed immediately.
"""

import os
import time
import logging
import email.utils
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import requests

from errors import FetchFailed

logger = logging.getLogger(__name__)

# retry defaults from environment
# - ACTIVITY_MAX_RETRIES: int, retries after a primary rate-limit response
# - ACTIVITY_MAX_BACKOFF: float (seconds), cap on a single rate-limit wait
DEFAULT_MAX_RETRIES = int(os.getenv("ACTIVITY_MAX_RETRIES", "1"))
DEFAULT_MAX_BACKOFF = float(os.getenv("ACTIVITY_MAX_BACKOFF", "120.0"))
DEFAULT_TIMEOUT = 30.0

# runtime-overrides
_runtime_max_retries: Optional[int] = None
_runtime_max_backoff: Optional[float] = None

ABUSE_MARKERS = ("secondary rate limit", "abuse")


def configure_retry(max_retries: Optional[int] = None, max_backoff: Optional[float] = None):
    """Configure retry defaults at runtime (e.g. from CLI)."""
    global _runtime_max_retries, _runtime_max_backoff
    if max_retries is not None:
        _runtime_max_retries = int(max_retries)
    if max_backoff is not None:
        _runtime_max_backoff = float(max_backoff)


def reset_retry_configuration():
    global _runtime_max_retries, _runtime_max_backoff
    _runtime_max_retries = None
    _runtime_max_backoff = None


def _parse_retry_after(raw_ra: str):
    if not raw_ra:
        return None
    try:
        return float(raw_ra)
    except (TypeError, ValueError):
        try:
            dt = email.utils.parsedate_to_datetime(raw_ra)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            ra = (dt - datetime.now(timezone.utc)).total_seconds()
            return max(0.0, ra)
        except (TypeError, ValueError):
            return None


def _safe_int_from_headers(headers: Dict[str, Any], key: str) -> Optional[int]:
    try:
        val = headers.get(key)
        return int(val) if val is not None else None
    except (TypeError, ValueError):
        return None


def _safe_float_from_headers(headers: Dict[str, Any], key: str) -> Optional[float]:
    try:
        val = headers.get(key)
        return float(val) if val is not None else None
    except (TypeError, ValueError):
        return None


def _parse_rate_headers(resp):
    headers = getattr(resp, 'headers', {}) or {}
    ra = _parse_retry_after(headers.get('Retry-After'))
    rl_remaining = _safe_int_from_headers(headers, 'X-RateLimit-Remaining')
    rl_reset = _safe_float_from_headers(headers, 'X-RateLimit-Reset')
    return ra, rl_remaining, rl_reset


def _parse_body(resp):
    try:
        return resp.json()
    except ValueError:
        return getattr(resp, 'text', None)


def _error_message(body) -> str:
    if isinstance(body, dict):
        return str(body.get('message') or '')
    return str(body or '')


def _is_abuse_response(status_code: int, body) -> bool:
    if status_code != 403:
        return False
    message = _error_message(body).lower()
    return any(marker in message for marker in ABUSE_MARKERS)


def _is_rate_limited(status_code: int, rl_remaining: Optional[int]) -> bool:
    if status_code == 429:
        return True
    return status_code == 403 and rl_remaining is not None and rl_remaining <= 0


def _compute_wait_seconds(ra: Optional[float], rl_reset: Optional[float], max_backoff: float) -> float:
    if ra is not None:
        return min(float(ra), max_backoff)
    if rl_reset:
        wait = max(0.0, float(rl_reset) - time.time()) + 1.0
        return min(wait, max_backoff)
    return min(60.0, max_backoff)


def _attempt_request_once(url: str, headers: Dict[str, str], params: Dict[str, Any]):
    try:
        resp = requests.get(url, headers=headers or {}, params=params or {}, timeout=DEFAULT_TIMEOUT)
    except requests.RequestException as ex:
        return 'error', {'exception': str(ex)}

    status = getattr(resp, 'status_code', 0)
    body = _parse_body(resp)

    if 200 <= status < 300:
        return 'success', {'body': body, 'status': status, 'links': getattr(resp, 'links', None) or {}}

    if _is_abuse_response(status, body):
        return 'abuse', {'status': status, 'body': body}

    ra, rl_remaining, rl_reset = _parse_rate_headers(resp)
    if _is_rate_limited(status, rl_remaining):
        return 'retry', {'status': status, 'ra': ra, 'rl_reset': rl_reset, 'body': body}

    return 'fail', {'body': body, 'status': status}


def perform_request_with_retries(url: str, headers: Dict[str, str] = None, params: Dict[str, Any] = None, max_retries: Optional[int] = None) -> Dict[str, Any]:
    """GET url and return {'response', 'status', 'links'} or raise FetchFailed."""
    if max_retries is not None:
        effective_max_retries = int(max_retries)
    elif _runtime_max_retries is not None:
        effective_max_retries = _runtime_max_retries
    else:
        effective_max_retries = DEFAULT_MAX_RETRIES
    max_backoff = _runtime_max_backoff if _runtime_max_backoff is not None else DEFAULT_MAX_BACKOFF

    attempt = 0
    while True:
        outcome, data = _attempt_request_once(url, headers, params)

        if outcome == 'success':
            return {'response': data['body'], 'status': data['status'], 'links': data['links']}

        if outcome == 'error':
            raise FetchFailed(f"Request to {url} failed: {data['exception']}", url=url)

        if outcome == 'abuse':
            logger.warning("Abuse detected for request GET %s", url)
            raise FetchFailed(f"Secondary rate limit hit for {url}: {_error_message(data['body'])}", status=data['status'], url=url)

        if outcome == 'retry' and attempt < effective_max_retries:
            wait_seconds = _compute_wait_seconds(data.get('ra'), data.get('rl_reset'), max_backoff)
            logger.info("Rate limited on %s; retrying in %.0fs (attempt %d of %d)", url, wait_seconds, attempt + 1, effective_max_retries)
            time.sleep(wait_seconds)
            attempt += 1
            continue

        if outcome == 'retry':
            raise FetchFailed(f"Rate limit exceeded for {url}", status=data['status'], url=url)

        raise FetchFailed(f"GitHub returned {data['status']} for {url}: {_error_message(data['body'])}", status=data['status'], url=url)


__all__ = ["configure_retry", "perform_request_with_retries"]
