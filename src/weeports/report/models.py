"""Data models for the report pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from weeports.gitlab import GitLabClient, Issue, MergeRequest

T = TypeVar("T")

# Project ID -> items of that project, in the order they were supplied.
GroupedIssues = dict[int, list[T]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReportContext:
    """Everything a pipeline component needs for one run.

    Built once at start-up and shared by reference; components only read it.

    Attributes:
        client: Authenticated GitLab session.
        username: GitLab username whose issues are reported.
        now: Reference time of the run. All relative windows derive from it.
    """

    client: GitLabClient
    username: str
    now: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class EnrichedIssue:
    """An issue with the merge request correlated to it, if any."""

    issue: Issue
    merge_request: MergeRequest | None = None


@dataclass
class Report:
    """Rendered report sections in their fixed order.

    Attributes:
        sections: Section texts; empty strings stand for omitted sections.
    """

    sections: list[str] = field(default_factory=list)

    @property
    def body(self) -> str:
        """Final body text: non-empty sections concatenated."""
        return "".join(section for section in self.sections if section)

    @property
    def is_empty(self) -> bool:
        """Whether no section has any text, so the body is empty."""
        return not self.body
