"""Data models for the GitLab client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value)


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _user_id(user: dict[str, Any] | None) -> int | None:
    if not user:
        return None
    return int(user["id"])


@dataclass(frozen=True)
class Issue:
    """An issue as returned by the GitLab issues API.

    Attributes:
        id: Global issue ID.
        iid: Project-scoped issue number.
        title: Issue title.
        project_id: ID of the project the issue belongs to.
        assignee_id: ID of the (first) assignee, if any.
        due_date: Due date, if set.
        web_url: Link to the issue page.
        state: "opened" or "closed".
        moved_to_id: ID of the issue this one was moved to, if it was moved.
        updated_at: Last update timestamp.
    """

    id: int
    iid: int
    title: str
    project_id: int
    web_url: str
    state: str
    assignee_id: int | None = None
    due_date: date | None = None
    moved_to_id: int | None = None
    updated_at: datetime | None = None

    @property
    def is_moved(self) -> bool:
        """Whether the issue was migrated to another issue."""
        return bool(self.moved_to_id)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Issue:
        assignee = data.get("assignee")
        if assignee is None and data.get("assignees"):
            assignee = data["assignees"][0]
        return cls(
            id=int(data["id"]),
            iid=int(data.get("iid") or 0),
            title=data["title"],
            project_id=int(data["project_id"]),
            web_url=data["web_url"],
            state=data["state"],
            assignee_id=_user_id(assignee),
            due_date=_parse_date(data.get("due_date")),
            moved_to_id=data.get("moved_to_id"),
            updated_at=_parse_datetime(data.get("updated_at")),
        )


@dataclass(frozen=True)
class MergeRequest:
    """A merge request as returned by the GitLab merge requests API."""

    id: int
    iid: int
    title: str
    source_branch: str
    author_id: int
    state: str
    web_url: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> MergeRequest:
        return cls(
            id=int(data["id"]),
            iid=int(data.get("iid") or 0),
            title=data["title"],
            source_branch=data["source_branch"],
            author_id=int(data["author"]["id"]),
            state=data["state"],
            web_url=data["web_url"],
        )


@dataclass(frozen=True)
class Project:
    """A project ID with its display name."""

    id: int
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Project:
        return cls(id=int(data["id"]), name=data["name"])
