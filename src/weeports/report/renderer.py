"""ReportRenderer - Plain-text rendering of report sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from weeports.report.models import EnrichedIssue

CRLF = "\r\n"

DUE_TITLE = "Issues to close this week:"
DIFFICULTIES_TITLE = "Main difficulties:"


def closed_title(lookback_weeks: int) -> str:
    """Heading of the closed issues section for a given window."""
    if lookback_weeks == 1:
        return "Issues closed last week:"
    return f"Issues closed in the last {lookback_weeks} weeks:"


class ReportRenderer:
    """Renders sections as markdown-flavoured plain text with CRLF line endings.

    Every non-empty section starts with its heading and ends with one blank
    line, so sections can be concatenated as they are. Empty input renders
    as an empty string and the section is left out of the report.
    """

    def render_section(
        self,
        title: str,
        grouped: Mapping[int, Sequence[EnrichedIssue]],
        names: Mapping[int, str],
    ) -> str:
        """Render issues grouped by project.

        Args:
            title: Section heading.
            grouped: Project ID -> enriched issues of that project.
            names: Project ID -> display name. Unknown projects get an
                empty name.

        Returns:
            Section text, or "" when there is nothing to report.
        """
        lines: list[str] = []
        for project_id, entries in grouped.items():
            if not entries:
                continue
            lines.append(f"* {names.get(project_id, '')}:")
            for entry in entries:
                lines.extend(self._issue_lines(entry))

        if not lines:
            return ""
        return CRLF.join([title, "", *lines, "", ""])

    def _issue_lines(self, entry: EnrichedIssue) -> list[str]:
        issue = entry.issue
        lines = [f"\t* [{issue.title}]({issue.web_url})"]
        if issue.due_date is not None:
            lines.append(f"\t\t* Due date: {issue.due_date.isoformat()}")
        if entry.merge_request is not None:
            mr = entry.merge_request
            lines.append(f"\t\t* Merge request: [{mr.title}]({mr.web_url})")
        return lines

    def render_free_text_section(self, heading: str, lines: Iterable[str]) -> str:
        """Render a heading with one bullet per non-blank line.

        Returns:
            Section text, or "" when every line is blank.
        """
        bullets = [f"\t* {line.strip()}" for line in lines if line.strip()]
        if not bullets:
            return ""
        return CRLF.join([heading, *bullets, "", ""])
