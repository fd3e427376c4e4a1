"""IssueSource - Issues assigned to the report owner."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weeports.gitlab import Issue
    from weeports.report.models import ReportContext

logger = logging.getLogger(__name__)

# GitLab relative due-date filters
DUE_THIS_WEEK = "week"
DUE_OVERDUE = "overdue"


class IssueSource:
    """Queries GitLab for the report owner's closed and due issues."""

    def __init__(self, context: ReportContext) -> None:
        self.context = context

    def _assigned_filters(self) -> dict[str, str]:
        return {
            "scope": "assigned_to_me",
            "assignee_username": self.context.username,
        }

    def fetch_closed(self, lookback_weeks: int) -> list[Issue]:
        """Issues closed and updated within the last ``lookback_weeks`` weeks.

        Issues that were moved to another issue are left out: moving closes
        the original, which does not mean the work was done.

        Args:
            lookback_weeks: Size of the window, in weeks. Must be positive.

        Returns:
            Closed issues in API order.

        Raises:
            ValueError: If lookback_weeks is not a positive integer.
            UpstreamError: If GitLab cannot be queried.
        """
        if isinstance(lookback_weeks, bool) or not isinstance(lookback_weeks, int):
            raise ValueError(f"lookback_weeks must be an integer, got {lookback_weeks!r}")
        if lookback_weeks < 1:
            raise ValueError(f"lookback_weeks must be positive, got {lookback_weeks}")

        updated_after = self.context.now - timedelta(days=7 * lookback_weeks)
        issues = self.context.client.list_issues(
            **self._assigned_filters(),
            state="closed",
            updated_after=updated_after.isoformat(),
        )
        closed = [issue for issue in issues if not issue.is_moved]
        logger.info(
            "Found %d closed issue(s) since %s (%d moved issue(s) skipped)",
            len(closed),
            updated_after.date().isoformat(),
            len(issues) - len(closed),
        )
        return closed

    def _fetch_open_due(self, due_date: str) -> list[Issue]:
        issues = self.context.client.list_issues(
            **self._assigned_filters(),
            state="opened",
            due_date=due_date,
        )
        logger.debug("Found %d open issue(s) with due_date=%s", len(issues), due_date)
        return issues

    def fetch_due_this_week(self) -> list[Issue]:
        """Open issues due this week, followed by overdue ones.

        The two result sets are concatenated as returned; an issue GitLab
        reports in both appears twice.

        Raises:
            UpstreamError: If GitLab cannot be queried.
        """
        issues = self._fetch_open_due(DUE_THIS_WEEK) + self._fetch_open_due(DUE_OVERDUE)
        logger.info("Found %d issue(s) due this week or overdue", len(issues))
        return issues
