"""Release issue retrieval shared by every action."""

import httpx
import structlog

from release_train.exceptions import ResolutionError, TrackerError
from release_train.models.domain import Issue
from release_train.providers.base import IssueTracker

log = structlog.get_logger(__name__)


class ReleaseQuery:
    """Fetch a release's issues and their pull requests from the tracker."""

    def __init__(self, tracker: IssueTracker) -> None:
        self.tracker = tracker

    async def fetch_issues(self, release: str) -> list[Issue] | None:
        """Search the issues of a release.

        A failed search is logged and reported as ``None`` so the caller
        can stop the current action without crashing.

        Args:
            release: Release identifier

        Returns:
            The release's issues, or None if the search failed.
        """
        try:
            return await self.tracker.search_release_issues(release)
        except (TrackerError, httpx.HTTPError) as e:
            log.error("release_issues_fetch_failed", release=release, error=str(e))
            return None

    async def attach_pull_requests(self, issues: list[Issue]) -> list[Issue]:
        """Fetch each issue's pull requests, one issue at a time.

        Raises:
            ResolutionError: If any single lookup fails. No partial list is
                returned.
        """
        attached: list[Issue] = []
        for issue in issues:
            try:
                pull_requests = await self.tracker.get_pull_requests(issue)
            except (TrackerError, httpx.HTTPError) as e:
                log.error("pull_requests_fetch_failed", issue=issue.key, error=str(e))
                raise ResolutionError(f"Cannot fetch pull requests: {e}", issue_key=issue.key) from e

            attached.append(issue.with_pull_requests(pull_requests))

        return attached
