"""Repository whitelist."""

from collections.abc import Iterable

import structlog

log = structlog.get_logger(__name__)

SKIP_REASON = "not managed by this automation"


class Whitelist:
    """Immutable set of repositories this automation may act on.

    Membership is an exact, case-sensitive match.
    """

    def __init__(self, repositories: Iterable[str]) -> None:
        self._repositories = frozenset(repositories)

    @property
    def repositories(self) -> frozenset[str]:
        return self._repositories

    def allows(self, repository: str) -> bool:
        """Check whether a repository is managed by this automation."""
        return repository in self._repositories

    def partition(self, repositories: Iterable[str]) -> tuple[list[str], list[str]]:
        """Split repositories into accepted and rejected, both sorted.

        Every rejected repository is logged with the reason it is skipped.
        """
        accepted: list[str] = []
        rejected: list[str] = []

        for repository in sorted(set(repositories)):
            if self.allows(repository):
                accepted.append(repository)
            else:
                log.warning("repository_not_whitelisted", repository=repository, reason=SKIP_REASON)
                rejected.append(repository)

        return accepted, rejected
