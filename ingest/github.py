"""
GitHub REST client for the activity report.
Wraps the endpoints the report needs and follows Link-header pagination.
"""
import logging
from typing import List, Dict, Any, Optional, Iterator
from ingest.retry import perform_request_with_retries

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubClient:
    """Thin GitHub client: authenticated user lookup, search, comments, timelines and commit pulls."""

    def __init__(self, token: str, base_url: Optional[str] = None, max_retries: Optional[int] = None):
        self.token = token
        self.base_url = (base_url or API_URL).rstrip('/')
        self.max_retries = max_retries
        self.headers = {
            "Authorization": f"Bearer {self.token}" if self.token else "",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith('http://') or path_or_url.startswith('https://'):
            return path_or_url
        return f"{self.base_url}/{path_or_url.lstrip('/')}"

    def _get(self, path_or_url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return perform_request_with_retries(self._url(path_or_url), headers=self.headers, params=params or {}, max_retries=self.max_retries)

    def _pages(self, path_or_url: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
        """Yield the body of every page, following rel="next" links."""
        url = self._url(path_or_url)
        page_params = dict(params or {})
        page_params.setdefault('per_page', PER_PAGE)
        while url:
            res = self._get(url, page_params)
            yield res.get('response')
            url = ((res.get('links') or {}).get('next') or {}).get('url')
            # the next link already carries the query string
            page_params = None

    def paginate(self, path_or_url: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Collect every entry across pages. Search responses wrap their entries in 'items'."""
        entries: List[Dict[str, Any]] = []
        for body in self._pages(path_or_url, params):
            if isinstance(body, dict):
                entries.extend(body.get('items') or [])
            elif isinstance(body, list):
                entries.extend(body)
        return entries

    def get_authenticated_login(self) -> str:
        res = self._get('/user')
        return (res.get('response') or {}).get('login') or ''

    def search_issues(self, query: str) -> List[Dict[str, Any]]:
        logger.debug("search/issues q=%s", query)
        return self.paginate('/search/issues', {'q': query})

    def search_commits(self, query: str) -> List[Dict[str, Any]]:
        logger.debug("search/commits q=%s", query)
        return self.paginate('/search/commits', {'q': query})

    def get_comments(self, comments_url: str) -> List[Dict[str, Any]]:
        """Fetch a whole comment thread given the item's comments_url."""
        return self.paginate(comments_url)

    def get_timeline(self, repository: str, number: int) -> List[Dict[str, Any]]:
        return self.paginate(f"/repos/{repository}/issues/{number}/timeline")

    def get_commit_pulls(self, repository: str, sha: str) -> List[Dict[str, Any]]:
        """Pull requests GitHub reports as containing the commit."""
        return self.paginate(f"/repos/{repository}/commits/{sha}/pulls")
