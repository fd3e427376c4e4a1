"""MergeRequestCorrelator - Links an issue to the merge request working on it."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weeports.gitlab import Issue, MergeRequest
    from weeports.report.models import ReportContext

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def slugify(text: str) -> str:
    """Keep only ASCII letters and digits, lower-cased.

    >>> slugify("Fix Bug-42!")
    'fixbug42'
    """
    return _NON_ALPHANUMERIC.sub("", text).lower()


class MergeRequestCorrelator:
    """Finds merge requests by matching their source branch to the issue title.

    Branches are expected to be named after the issue title, so
    ``"Fix login form"`` matches ``fix-login-form`` or ``FixLoginForm``.
    This is a heuristic: the link is not recorded anywhere in GitLab.
    """

    def __init__(self, context: ReportContext) -> None:
        self.context = context

    def find_latest(self, issue: Issue) -> MergeRequest | None:
        """Return the last-listed open merge request matching the issue.

        Args:
            issue: Issue to correlate. Candidates are the open merge
                requests authored by its assignee.

        Returns:
            The matching merge request GitLab listed last, or None.

        Raises:
            UpstreamError: If GitLab cannot be queried.
        """
        if issue.assignee_id is None:
            logger.debug("Issue #%d has no assignee, skipping merge request lookup", issue.iid)
            return None

        merge_requests = self.context.client.list_merge_requests(
            author_id=issue.assignee_id,
            state="opened",
        )

        title_slug = slugify(issue.title)
        matches = [mr for mr in merge_requests if slugify(mr.source_branch) == title_slug]
        if not matches:
            logger.debug("No merge request matches issue #%d", issue.iid)
            return None

        if len(matches) > 1:
            logger.debug(
                "%d merge requests match issue #%d, using the last listed",
                len(matches),
                issue.iid,
            )
        merge_request = matches[-1]
        logger.info("Issue #%d correlated with merge request !%d", issue.iid, merge_request.iid)
        return merge_request
