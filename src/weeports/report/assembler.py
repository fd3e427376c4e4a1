"""ReportAssembler - Drives the report pipeline from queries to text."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from weeports.report.models import EnrichedIssue, GroupedIssues, Report
from weeports.report.renderer import DIFFICULTIES_TITLE, DUE_TITLE, ReportRenderer, closed_title

if TYPE_CHECKING:
    from weeports.gitlab import Issue
    from weeports.report.correlator import MergeRequestCorrelator
    from weeports.report.issues import IssueSource
    from weeports.report.projects import ProjectNameResolver

logger = logging.getLogger(__name__)

DifficultiesProvider = Callable[[], Iterable[str]]


def group_by_project(issues: Iterable[Issue]) -> GroupedIssues[Issue]:
    """Partition issues by project ID, keeping their relative order.

    Projects appear in order of their first issue. No group is empty.
    """
    grouped: GroupedIssues[Issue] = {}
    for issue in issues:
        grouped.setdefault(issue.project_id, []).append(issue)
    return grouped


def unique_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Drop repeated issue IDs, keeping the first occurrence."""
    seen: set[int] = set()
    result = []
    for issue in issues:
        if issue.id in seen:
            continue
        seen.add(issue.id)
        result.append(issue)
    return result


class ReportAssembler:
    """Builds report sections from GitLab data.

    All upstream calls happen one after the other. Any UpstreamError
    propagates to the caller and no report is produced.
    """

    def __init__(
        self,
        source: IssueSource,
        resolver: ProjectNameResolver,
        correlator: MergeRequestCorrelator,
        renderer: ReportRenderer | None = None,
        deduplicate_due: bool = False,
    ) -> None:
        """Initialize the assembler.

        Args:
            source: Issue queries.
            resolver: Project name lookup.
            correlator: Merge request lookup per issue.
            renderer: Text renderer. Defaults to ReportRenderer().
            deduplicate_due: Drop issues listed both as due this week and
                overdue. Off by default: such issues are listed twice.
        """
        self.source = source
        self.resolver = resolver
        self.correlator = correlator
        self.renderer = renderer or ReportRenderer()
        self.deduplicate_due = deduplicate_due
        self._project_names: dict[int, str] | None = None

    def _names(self) -> dict[int, str]:
        if self._project_names is None:
            self._project_names = self.resolver.resolve_names()
        return self._project_names

    def _enrich(self, grouped: GroupedIssues[Issue]) -> GroupedIssues[EnrichedIssue]:
        return {
            project_id: [
                EnrichedIssue(issue=issue, merge_request=self.correlator.find_latest(issue))
                for issue in issues
            ]
            for project_id, issues in grouped.items()
        }

    def _section(self, title: str, issues: list[Issue]) -> str:
        if not issues:
            logger.info("Nothing to report for %r", title)
            return ""
        grouped = group_by_project(issues)
        enriched = self._enrich(grouped)
        return self.renderer.render_section(title, enriched, self._names())

    def closed_section(self, lookback_weeks: int) -> str:
        """Render the issues closed within the look-back window."""
        issues = self.source.fetch_closed(lookback_weeks)
        return self._section(closed_title(lookback_weeks), issues)

    def due_section(self) -> str:
        """Render the open issues due this week or overdue."""
        issues = self.source.fetch_due_this_week()
        if self.deduplicate_due:
            issues = unique_issues(issues)
        return self._section(DUE_TITLE, issues)

    def build(
        self,
        lookback_weeks: int,
        difficulties: DifficultiesProvider | None = None,
    ) -> Report:
        """Build the full report.

        Args:
            lookback_weeks: Window for closed issues, in weeks.
            difficulties: Called once both GitLab sections are built; its
                lines make up the difficulties section. None skips it.

        Returns:
            Report with closed, due and difficulties sections, in that order.
        """
        logger.info("Building report (lookback %d week(s))", lookback_weeks)
        sections = [self.closed_section(lookback_weeks), self.due_section()]
        if difficulties is not None:
            sections.append(
                self.renderer.render_free_text_section(DIFFICULTIES_TITLE, difficulties())
            )
        report = Report(sections=sections)
        logger.info(
            "Report built: %d non-empty section(s)",
            sum(1 for section in report.sections if section),
        )
        return report
