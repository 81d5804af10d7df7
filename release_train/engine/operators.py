"""Per-repository release operations.

An operator applies one release action to one repository and raises on
failure. Isolating failures between repositories is the pipeline's job.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

import structlog

from release_train.config.settings import ReleaseConfig, WorkspaceConfig
from release_train.git.working_copy import WorkingCopy
from release_train.providers.base import HostingProvider

log = structlog.get_logger(__name__)


class RepositoryOperator(ABC):
    """Abstract base class for release operations on a repository."""

    action_name: str = "operation"
    """Human-readable name of the operation, used in logs and output."""

    def __init__(self, release: str, conventions: ReleaseConfig) -> None:
        self.release = release
        self.conventions = conventions

    @property
    def branch_name(self) -> str:
        """Release branch for this release."""
        return self.conventions.branch_name(self.release)

    @abstractmethod
    async def apply(self, repository: str) -> None:
        """Apply the operation to a repository.

        Raises:
            ReleaseTrainError: If any step fails. Earlier steps are not
                rolled back.
        """
        pass


class BranchOperator(RepositoryOperator):
    """Cut the release branch from the development branch and publish it."""

    action_name = "release branch"

    def __init__(
        self,
        release: str,
        conventions: ReleaseConfig,
        workspace: WorkspaceConfig,
        working_copy_factory: Callable[[Path, str], WorkingCopy] = WorkingCopy,
    ) -> None:
        super().__init__(release, conventions)
        self.workspace = workspace
        self.working_copy_factory = working_copy_factory

    async def apply(self, repository: str) -> None:
        """Run the branch-cutting steps in order, stopping at the first failure."""
        copy = self.working_copy_factory(self.workspace.repository_path(repository), repository)
        branch = self.branch_name

        log.info("creating_release_branch", repository=repository, branch=branch)

        # Blocking GitPython calls run in worker threads
        await asyncio.to_thread(copy.stash_if_dirty)
        await asyncio.to_thread(copy.fetch)
        await asyncio.to_thread(copy.checkout, self.conventions.development_branch)
        await asyncio.to_thread(copy.pull)
        await asyncio.to_thread(copy.create_branch, branch)
        await asyncio.to_thread(copy.push_upstream, branch, remote=self.conventions.remote)

        log.info("release_branch_created", repository=repository, branch=branch)


class PullRequestOperator(RepositoryOperator):
    """Open the release pull request from the release branch to the main branch."""

    action_name = "release PR"

    def __init__(self, release: str, conventions: ReleaseConfig, hosting: HostingProvider) -> None:
        super().__init__(release, conventions)
        self.hosting = hosting

    async def apply(self, repository: str) -> None:
        """Create the release pull request for a repository."""
        pr = await self.hosting.create_pull_request(
            repository=repository,
            title=self.conventions.pull_request_title(self.release),
            description="",
            source_branch=self.branch_name,
            destination_branch=self.conventions.main_branch,
        )

        log.info("release_pr_created", repository=repository, pr=pr.id, url=pr.url)
