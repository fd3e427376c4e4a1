"""Custom exceptions for the GitLab client."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for GitLab client errors."""


class UpstreamError(GitLabError):
    """GitLab answered with a non-success status, or the request never completed."""

    def __init__(self, message: str, path: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code
