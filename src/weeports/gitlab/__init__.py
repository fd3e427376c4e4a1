"""GitLab REST client and the records it returns."""

from weeports.gitlab.client import DEFAULT_PER_PAGE, GitLabClient
from weeports.gitlab.exceptions import GitLabError, UpstreamError
from weeports.gitlab.models import Issue, MergeRequest, Project

__all__ = [
    "DEFAULT_PER_PAGE",
    "GitLabClient",
    "GitLabError",
    "Issue",
    "MergeRequest",
    "Project",
    "UpstreamError",
]
