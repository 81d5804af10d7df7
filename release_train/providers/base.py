"""
Abstract base classes for providers.

This module defines the two service interfaces release-train talks to:
the issue tracker that knows which issues and pull requests make up a
release, and the source-hosting provider that release pull requests are
opened on.
"""

from abc import ABC, abstractmethod

from release_train.models.domain import Issue, PullRequest, PullRequestRef


class IssueTracker(ABC):
    """Abstract base class for issue tracker implementations.

    Both operations are read-only. All methods are async to support
    non-blocking I/O with HTTP clients.
    """

    @abstractmethod
    async def search_release_issues(self, release: str) -> list[Issue]:
        """Find every issue whose fix version is the given release.

        The search is scoped to the configured project.

        Args:
            release: Release identifier, used verbatim as the fix version.

        Returns:
            Matching issues without pull request references attached.

        Raises:
            TrackerError: If the search request fails.
        """
        pass

    @abstractmethod
    async def get_pull_requests(self, issue: Issue) -> list[PullRequestRef]:
        """Get the pull requests linked to an issue.

        Args:
            issue: An issue returned by :meth:`search_release_issues`.

        Returns:
            Pull request references, possibly empty. Duplicates are kept.

        Raises:
            TrackerError: If the development-panel request fails.
        """
        pass


class HostingProvider(ABC):
    """Abstract base class for source-hosting implementations."""

    @abstractmethod
    async def create_pull_request(
        self,
        repository: str,
        title: str,
        description: str,
        source_branch: str,
        destination_branch: str,
    ) -> PullRequest:
        """Open a pull request.

        Args:
            repository: Repository slug on the hosting provider.
            title: Pull request title.
            description: Pull request description (may be empty).
            source_branch: Branch holding the changes.
            destination_branch: Branch to merge into.

        Returns:
            The created pull request.

        Raises:
            HostingError: If the request fails, including when the source
                branch does not exist or an identical PR is already open.
        """
        pass
