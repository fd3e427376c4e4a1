"""GitLabClient - Read-only access to the GitLab REST API (v4)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from weeports.gitlab.exceptions import UpstreamError
from weeports.gitlab.models import Issue, MergeRequest, Project

logger = logging.getLogger("weeports.gitlab")

DEFAULT_PER_PAGE = 100

R = TypeVar("R")


class GitLabClient:
    """Authenticated session against one GitLab instance.

    Every list call follows GitLab's page-based pagination (``X-Next-Page``)
    until the last page and returns the concatenated records in the order
    GitLab listed them.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        per_page: int = DEFAULT_PER_PAGE,
        timeout: float = 30.0,
    ) -> None:
        """Initialize GitLab client.

        Args:
            base_url: GitLab instance URL (e.g. "https://gitlab.example.com")
            token: Personal access token with read_api scope
            per_page: Page size requested from the API (max 100)
            timeout: Transport timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.per_page = per_page
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=f"{self.base_url}/api/v4",
                headers={
                    "PRIVATE-TOKEN": self.token,
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitLabClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_all(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Fetch every page of a collection endpoint.

        Args:
            path: API path relative to /api/v4 (e.g. "/issues")
            params: Query filters

        Returns:
            All records from all pages, in API order

        Raises:
            UpstreamError: On transport failure, any non-200 response or a body
                that is not a JSON list
        """
        records: list[dict[str, Any]] = []
        page = 1
        while True:
            query = {**params, "per_page": self.per_page, "page": page}
            logger.debug("GET %s %s", path, query)
            try:
                response = self.client.get(path, params=query)
            except httpx.HTTPError as e:
                logger.error("Request to %s failed: %s", path, e)
                raise UpstreamError(f"GET {path} failed: {e}", path) from e

            if response.status_code != 200:
                logger.error("GET %s returned %d", path, response.status_code)
                raise UpstreamError(
                    f"GET {path} failed: {response.status_code} - {response.text}",
                    path,
                    status_code=response.status_code,
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.error("GET %s returned a body that is not JSON", path)
                raise UpstreamError(
                    f"GET {path} returned invalid JSON: {e}",
                    path,
                    status_code=response.status_code,
                ) from e
            if not isinstance(data, list):
                raise UpstreamError(
                    f"GET {path} returned {type(data).__name__}, expected a list",
                    path,
                    status_code=response.status_code,
                )
            records.extend(data)

            next_page = str(response.headers.get("X-Next-Page") or "").strip()
            if not next_page.isdigit():
                break
            page = int(next_page)

        logger.debug("GET %s returned %d record(s)", path, len(records))
        return records

    def _list(
        self, path: str, filters: dict[str, Any], parse: Callable[[dict[str, Any]], R]
    ) -> list[R]:
        """Fetch a collection and convert each record with ``parse``.

        Raises:
            UpstreamError: If a record lacks a field or holds a malformed value
        """
        records = self._get_all(path, filters)
        try:
            return [parse(item) for item in records]
        except (KeyError, TypeError, ValueError) as e:
            logger.error("GET %s returned a malformed record: %r", path, e)
            raise UpstreamError(
                f"GET {path} returned a malformed record: {e!r}", path, status_code=200
            ) from e

    def list_issues(self, **filters: Any) -> list[Issue]:
        """List issues visible to the token owner, filtered by GitLab query params."""
        return self._list("/issues", filters, Issue.from_api)

    def list_merge_requests(self, **filters: Any) -> list[MergeRequest]:
        """List merge requests visible to the token owner."""
        return self._list("/merge_requests", filters, MergeRequest.from_api)

    def list_projects(self, **filters: Any) -> list[Project]:
        """List projects visible to the token owner."""
        return self._list("/projects", filters, Project.from_api)
