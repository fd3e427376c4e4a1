"""ProjectNameResolver - Display names for the report owner's projects."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weeports.report.models import ReportContext

logger = logging.getLogger(__name__)

ACTIVITY_WINDOW = timedelta(days=7)


class ProjectNameResolver:
    """Maps project IDs to names for projects active in the last week."""

    def __init__(self, context: ReportContext) -> None:
        self.context = context

    def resolve_names(self) -> dict[int, str]:
        """Fetch member projects with recent activity.

        Returns:
            Project ID -> display name. May be empty.

        Raises:
            UpstreamError: If GitLab cannot be queried.
        """
        projects = self.context.client.list_projects(
            membership="true",
            last_activity_after=(self.context.now - ACTIVITY_WINDOW).isoformat(),
        )
        names = {project.id: project.name for project in projects}
        logger.info("Resolved %d project name(s)", len(names))
        return names
