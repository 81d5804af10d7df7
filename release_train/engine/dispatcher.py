"""Select and run exactly one release action."""

from collections.abc import Callable
from enum import Enum
from pathlib import Path

import structlog
from rich.console import Console

from release_train.config.settings import ReleaseSettings
from release_train.engine.operators import BranchOperator, PullRequestOperator
from release_train.engine.pipeline import ReleasePipeline
from release_train.engine.release import ReleaseQuery
from release_train.engine.reporter import ReleaseReporter
from release_train.engine.whitelist import Whitelist
from release_train.exceptions import ConfigurationError, InvalidActionError
from release_train.git.working_copy import WorkingCopy
from release_train.models.domain import ReleaseRow, RepositoryOutcome
from release_train.providers.base import HostingProvider, IssueTracker

log = structlog.get_logger(__name__)


class ReleaseAction(str, Enum):
    """Actions release-train can perform."""

    CHECK = "check"
    RELEASE_BRANCH = "release_branch"
    RELEASE_PR = "release_pr"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str | None) -> "ReleaseAction":
        """Parse an action token.

        Raises:
            InvalidActionError: If the token is not a known action.
        """
        try:
            return cls(token)
        except ValueError as e:
            raise InvalidActionError(token) from e


class ActionDispatcher:
    """Run one of the release actions against the configured services."""

    def __init__(
        self,
        settings: ReleaseSettings,
        tracker: IssueTracker,
        hosting: HostingProvider,
        console: Console | None = None,
        working_copy_factory: Callable[[Path, str], WorkingCopy] = WorkingCopy,
    ) -> None:
        self.settings = settings
        self.tracker = tracker
        self.hosting = hosting
        self.query = ReleaseQuery(tracker)
        self.whitelist = Whitelist(settings.workspace.repositories)
        self.console = console
        self.working_copy_factory = working_copy_factory

    async def dispatch(
        self, action_token: str | None, release: str | None
    ) -> list[ReleaseRow] | list[RepositoryOutcome] | None:
        """Validate the input and run the matching action.

        Validation happens before any external call.

        Returns:
            Report rows for ``check``, per-repository outcomes for the other
            actions, or None when the release's issues could not be fetched.

        Raises:
            InvalidActionError: If the action token is unknown.
            ConfigurationError: If the release identifier is missing or blank.
            ResolutionError: If pull requests of some issue cannot be fetched.
        """
        try:
            action = ReleaseAction.parse(action_token)
        except InvalidActionError:
            log.error("invalid_action", action=action_token, valid=[a.value for a in ReleaseAction])
            raise

        if not release or not release.strip():
            raise ConfigurationError(f"A release identifier is required for '{action}'")
        release = release.strip()

        log.info("release_action_started", action=str(action), release=release)

        if action == ReleaseAction.CHECK:
            return await ReleaseReporter(self.query, self.console).report(release)

        pipeline = ReleasePipeline(self.query, self.whitelist)
        conventions = self.settings.release

        if action == ReleaseAction.RELEASE_BRANCH:
            operator: BranchOperator | PullRequestOperator = BranchOperator(
                release, conventions, self.settings.workspace, self.working_copy_factory
            )
        else:
            operator = PullRequestOperator(release, conventions, self.hosting)

        return await pipeline.run(release, operator)
