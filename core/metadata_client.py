"""Repository metadata clients with connection reuse and retry logic."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception,
    before_sleep_log
)

from core.models import MetadataRecord

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
OVERVIEW_PATH = "/api/githubOverview"


def _is_retryable_error(exc: Exception) -> bool:
    """
    Determine if an exception is retryable.

    Only retries on:
    - Timeouts
    - Server errors (5xx)
    - Connection errors without a response

    Does NOT retry on client errors (4xx) or malformed URLs.
    """
    if isinstance(exc, requests.Timeout):
        return True

    if isinstance(exc, (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema)):
        return False

    if isinstance(exc, requests.HTTPError):
        response = getattr(exc, 'response', None)
        if response is not None:
            return response.status_code >= 500
        return True

    if isinstance(exc, requests.RequestException):
        response = getattr(exc, 'response', None)
        if response is not None and 400 <= response.status_code < 500:
            return False
        return True

    return False


class MetadataSource(ABC):
    """Black-box source of repository metadata."""

    @abstractmethod
    def fetch(self, repo: str) -> MetadataRecord:
        """
        Fetch metadata for a repository identifier ("owner/name").

        Implementations return MetadataRecord.empty() when the repository
        is unknown, the source answers with a non-success status, or the
        request still fails after retries.
        """

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class _HttpMetadataSource(MetadataSource):
    """Shared requests.Session handling for HTTP-backed sources."""

    def __init__(self, request_timeout_seconds: float = 10, headers: Optional[Dict[str, str]] = None):
        self.request_timeout_seconds = request_timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if headers:
            self.session.headers.update(headers)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        retry=retry_if_exception(_is_retryable_error),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        response = self.session.get(url, params=params, timeout=self.request_timeout_seconds)
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    def _lookup(self, url: str, repo: str, params: Optional[Dict[str, Any]] = None) -> MetadataRecord:
        try:
            response = self._get(url, params=params)
        except requests.RequestException as e:
            logger.warning(f"Metadata lookup for {repo} failed after retries: {e}")
            return MetadataRecord.empty()
        return self._decode(response, repo)

    def _decode(self, response: requests.Response, repo: str) -> MetadataRecord:
        if not response.ok:
            logger.warning(f"Metadata lookup for {repo} returned HTTP {response.status_code}")
            return MetadataRecord.empty()
        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Metadata lookup for {repo} returned a non-JSON body")
            return MetadataRecord.empty()
        return MetadataRecord.from_payload(payload)

    def close(self):
        """Close the session and release resources."""
        self.session.close()


class OverviewApiSource(_HttpMetadataSource):
    """
    Client for the overview endpoint: GET {base_url}/api/githubOverview?repo=<repo>.

    The endpoint answers with {language, description, forks_count, html_url}.
    """

    def __init__(self, base_url: str, request_timeout_seconds: float = 10):
        super().__init__(request_timeout_seconds=request_timeout_seconds)
        self.base_url = base_url.rstrip("/")
        logger.info(f"OverviewApiSource initialized: base_url={self.base_url}")

    def fetch(self, repo: str) -> MetadataRecord:
        return self._lookup(f"{self.base_url}{OVERVIEW_PATH}", repo, params={"repo": repo})


class GitHubApiSource(_HttpMetadataSource):
    """Client for the GitHub REST repository endpoint: GET /repos/{owner}/{name}."""

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        token: Optional[str] = None,
        request_timeout_seconds: float = 10
    ):
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        super().__init__(request_timeout_seconds=request_timeout_seconds, headers=headers)
        self.api_url = api_url.rstrip("/")
        logger.info(
            f"GitHubApiSource initialized: api_url={self.api_url}, "
            f"authenticated={bool(token)}"
        )

    def fetch(self, repo: str) -> MetadataRecord:
        repo = repo.strip().strip("/")
        if repo.count("/") != 1:
            logger.warning(f"Invalid repository identifier: {repo!r}")
            return MetadataRecord.empty()

        return self._lookup(f"{self.api_url}/repos/{repo}", repo)
