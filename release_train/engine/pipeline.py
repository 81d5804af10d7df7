"""Sequential per-repository release pipeline."""

import structlog

from release_train.engine.operators import RepositoryOperator
from release_train.engine.release import ReleaseQuery
from release_train.engine.resolver import RepositoryResolver
from release_train.engine.whitelist import SKIP_REASON, Whitelist
from release_train.models.domain import OutcomeStatus, RepositoryOutcome

log = structlog.get_logger(__name__)


class ReleasePipeline:
    """Apply an operator to every whitelisted repository of a release.

    Repositories are handled one at a time. A failure in one repository is
    recorded and never stops the others.
    """

    def __init__(self, query: ReleaseQuery, whitelist: Whitelist) -> None:
        self.query = query
        self.resolver = RepositoryResolver(query)
        self.whitelist = whitelist

    async def run(self, release: str, operator: RepositoryOperator) -> list[RepositoryOutcome] | None:
        """Run the operator across the release's repositories.

        Args:
            release: Release identifier
            operator: Operation applied to each accepted repository

        Returns:
            One outcome per resolved repository (skipped ones included), or
            None when the release's issues could not be fetched.

        Raises:
            ResolutionError: If the repository set cannot be fully resolved.
        """
        issues = await self.query.fetch_issues(release)
        if issues is None:
            return None

        repositories = await self.resolver.resolve(issues)
        accepted, rejected = self.whitelist.partition(repositories)

        outcomes = [
            RepositoryOutcome(repository=name, status=OutcomeStatus.SKIPPED, error=SKIP_REASON) for name in rejected
        ]

        for repository in accepted:
            outcomes.append(await self._apply(operator, repository))

        return outcomes

    async def _apply(self, operator: RepositoryOperator, repository: str) -> RepositoryOutcome:
        """Apply the operator to one repository, capturing any failure."""
        log.info("repository_operation_started", repository=repository, action=operator.action_name)
        try:
            await operator.apply(repository)
        except Exception as e:
            log.error(
                "repository_operation_failed",
                repository=repository,
                action=operator.action_name,
                error=str(e),
                exc_info=True,
            )
            return RepositoryOutcome(repository=repository, status=OutcomeStatus.FAILED, error=str(e))

        return RepositoryOutcome(repository=repository, status=OutcomeStatus.SUCCEEDED)
