"""Resolve the repositories touched by a release."""

import structlog

from release_train.engine.release import ReleaseQuery
from release_train.models.domain import Issue

log = structlog.get_logger(__name__)


class RepositoryResolver:
    """Collect the distinct repositories referenced by a release's pull requests."""

    def __init__(self, query: ReleaseQuery) -> None:
        self.query = query

    async def resolve(self, issues: list[Issue]) -> frozenset[str]:
        """Resolve the repository set of a release.

        Issues without pull requests contribute nothing. The result carries
        no ordering.

        Raises:
            ResolutionError: If the pull requests of any issue cannot be fetched.
        """
        attached = await self.query.attach_pull_requests(issues)
        repositories = frozenset(name for issue in attached for name in issue.repository_names)

        log.info("repositories_resolved", issues=len(issues), repositories=sorted(repositories))
        return repositories
