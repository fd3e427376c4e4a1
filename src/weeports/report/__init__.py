"""Report pipeline - Issues, projects and merge requests turned into digest text."""

from weeports.report.assembler import ReportAssembler, group_by_project, unique_issues
from weeports.report.correlator import MergeRequestCorrelator, slugify
from weeports.report.issues import IssueSource
from weeports.report.models import EnrichedIssue, GroupedIssues, Report, ReportContext
from weeports.report.projects import ProjectNameResolver
from weeports.report.renderer import (
    DIFFICULTIES_TITLE,
    DUE_TITLE,
    ReportRenderer,
    closed_title,
)

__all__ = [
    "DIFFICULTIES_TITLE",
    "DUE_TITLE",
    "EnrichedIssue",
    "GroupedIssues",
    "IssueSource",
    "MergeRequestCorrelator",
    "ProjectNameResolver",
    "Report",
    "ReportAssembler",
    "ReportContext",
    "ReportRenderer",
    "closed_title",
    "group_by_project",
    "slugify",
    "unique_issues",
]
