"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import pytest

from weeports.gitlab import Issue, MergeRequest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: talks to an actual GitLab instance (local only)")


# Shared fixtures


@pytest.fixture
def issue_json() -> Callable[..., dict[str, Any]]:
    """Factory for GitLab issue payloads."""

    def _make(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": 1000,
            "iid": 1,
            "title": "Fix login form",
            "project_id": 10,
            "state": "closed",
            "web_url": "https://gitlab.example.com/group/app/-/issues/1",
            "assignee": {"id": 7, "username": "alice"},
            "assignees": [{"id": 7, "username": "alice"}],
            "due_date": None,
            "moved_to_id": None,
            "updated_at": "2026-10-15T09:30:00.000Z",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def merge_request_json() -> Callable[..., dict[str, Any]]:
    """Factory for GitLab merge request payloads."""

    def _make(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": 5000,
            "iid": 12,
            "title": "Draft: Fix login form",
            "source_branch": "fix-login-form",
            "author": {"id": 7, "username": "alice"},
            "state": "opened",
            "web_url": "https://gitlab.example.com/group/app/-/merge_requests/12",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Factory for Issue records."""

    def _make(
        id: int = 1000,
        title: str = "Fix login form",
        project_id: int = 10,
        due_date: date | None = None,
        moved_to_id: int | None = None,
        assignee_id: int | None = 7,
        state: str = "closed",
    ) -> Issue:
        return Issue(
            id=id,
            iid=id % 1000,
            title=title,
            project_id=project_id,
            web_url=f"https://gitlab.example.com/p{project_id}/-/issues/{id % 1000}",
            state=state,
            assignee_id=assignee_id,
            due_date=due_date,
            moved_to_id=moved_to_id,
        )

    return _make


@pytest.fixture
def make_merge_request() -> Callable[..., MergeRequest]:
    """Factory for MergeRequest records."""

    def _make(
        id: int = 5000,
        source_branch: str = "fix-login-form",
        title: str = "Fix login form",
        author_id: int = 7,
    ) -> MergeRequest:
        return MergeRequest(
            id=id,
            iid=id % 1000,
            title=title,
            source_branch=source_branch,
            author_id=author_id,
            state="opened",
            web_url=f"https://gitlab.example.com/group/app/-/merge_requests/{id % 1000}",
        )

    return _make


@pytest.fixture
def mock_response() -> Callable[..., MagicMock]:
    """Factory for mocked httpx responses of a list endpoint."""

    def _make(data: Any, status_code: int = 200, next_page: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = data
        response.text = str(data)
        response.headers = {"X-Next-Page": next_page}
        return response

    return _make
