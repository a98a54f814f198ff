import logging
from typing import Any, Dict, List

import requests

from gitlab_scaler.gitlab.exceptions import DecodeError, TransportError, UpstreamStatusError
from gitlab_scaler.models import Job, Runner

# Fixed per-request timeout in seconds; there are no retries
REQUEST_TIMEOUT = 10
API_PREFIX = "/api/v4"
# Upper bound on pages followed for one list call
MAX_PAGES = 100


class GitLabClient:
    """
    Thin read-only client for the GitLab runners API.

    Every call is a single blocking GET. Failures are raised as
    GitLabAPIError subclasses and never retried.
    """

    def __init__(self, base_url: str, token: str, timeout: float = REQUEST_TIMEOUT):
        self._base_url = base_url.rstrip('/')
        self._token = token
        self._timeout = timeout

    def list_runners(self) -> List[Runner]:
        """
        List the runners visible to the configured token.

        Returns:
            list: Runner records, one per runner

        Raises:
            TransportError: If GitLab could not be reached
            UpstreamStatusError: If GitLab answered with a non-200 status
            DecodeError: If the body is not a JSON array of runners
        """
        url = f"{self._base_url}{API_PREFIX}/runners"
        return [self._parse_runner(item, url) for item in self._get_all(url)]

    def list_pending_jobs(self, runner_id: int) -> List[Job]:
        """
        List the pending jobs assigned to a runner.

        Args:
            runner_id: GitLab runner id

        Returns:
            list: Job records with their tag sets

        Raises:
            TransportError, UpstreamStatusError, DecodeError: as for list_runners
        """
        url = f"{self._base_url}{API_PREFIX}/runners/{runner_id}/jobs?status=pending"
        return [self._parse_job(item, url) for item in self._get_all(url)]

    def _get_all(self, url: str) -> List[Any]:
        """Fetch a list endpoint, following rel="next" links across pages."""
        items = []
        seen = set()
        next_url = url
        while next_url:
            if next_url in seen:
                raise DecodeError(f"Pagination loop at {next_url}", url)
            if len(seen) >= MAX_PAGES:
                raise DecodeError(f"More than {MAX_PAGES} pages from {url}", url)
            seen.add(next_url)

            response = self._get(next_url)
            items.extend(self._decode_array(response, next_url))
            next_url = response.links.get('next', {}).get('url')
        return items

    def _get(self, url: str) -> requests.Response:
        logging.debug(f"GET {url}")
        try:
            response = requests.get(url, headers={'PRIVATE-TOKEN': self._token}, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url) from e

        if response.status_code != 200:
            raise UpstreamStatusError(response.status_code, url)
        return response

    @staticmethod
    def _decode_array(response: requests.Response, url: str) -> List[Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {url}: {e}", url) from e

        if not isinstance(body, list):
            raise DecodeError(f"Expected a JSON array from {url}, got {type(body).__name__}", url)
        return body

    @staticmethod
    def _parse_runner(item: Dict[str, Any], url: str) -> Runner:
        if not isinstance(item, dict) or not _is_int(item.get('id')):
            raise DecodeError(f"Malformed runner record from {url}: {item!r}", url)
        return Runner(id=item['id'])

    @staticmethod
    def _parse_job(item: Dict[str, Any], url: str) -> Job:
        if not isinstance(item, dict) or not _is_int(item.get('id')):
            raise DecodeError(f"Malformed job record from {url}: {item!r}", url)

        status = item.get('status')
        tag_list = item.get('tag_list') or []
        if not isinstance(status, str) or not isinstance(tag_list, list) \
                or not all(isinstance(tag, str) for tag in tag_list):
            raise DecodeError(f"Malformed job record from {url}: {item!r}", url)

        return Job(id=item['id'], status=status, tags=frozenset(tag_list))


def _is_int(value: Any) -> bool:
    # bool is a subclass of int but never a valid id
    return isinstance(value, int) and not isinstance(value, bool)
