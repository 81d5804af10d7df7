"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from release_train.config.settings import ReleaseConfig, ReleaseSettings
from release_train.engine.operators import RepositoryOperator
from release_train.engine.release import ReleaseQuery
from release_train.engine.whitelist import Whitelist
from release_train.exceptions import GitOperationError, TrackerError
from release_train.models.domain import Issue, PullRequestRef
from release_train.providers.base import IssueTracker


def make_issue(
    key: str,
    issue_id: str | None = None,
    summary: str = "Some change",
    status: str = "Ready for Release",
    linked: tuple[str, ...] = (),
    remarks: str | None = None,
) -> Issue:
    """Build an issue as the tracker search would return it."""
    return Issue(
        id=issue_id or key.split("-")[-1],
        key=key,
        summary=summary,
        status=status,
        linked_issue_keys=linked,
        remarks=remarks,
    )


def make_pr(repository: str, author: str = "Alice", issue_key: str = "") -> PullRequestRef:
    """Build a development-panel pull request reference."""
    return PullRequestRef(repository_name=repository, author_name=author, issue_key=issue_key)


class InMemoryTracker(IssueTracker):
    """Issue tracker serving canned issues and pull requests."""

    def __init__(
        self,
        issues: list[Issue] | None = None,
        pull_requests: dict[str, list[PullRequestRef]] | None = None,
        search_error: Exception | None = None,
        failing_issue_keys: tuple[str, ...] = (),
    ) -> None:
        self.issues = issues or []
        self.pull_requests = pull_requests or {}
        self.search_error = search_error
        self.failing_issue_keys = set(failing_issue_keys)
        self.searches: list[str] = []
        self.lookups: list[str] = []

    async def search_release_issues(self, release: str) -> list[Issue]:
        self.searches.append(release)
        if self.search_error is not None:
            raise self.search_error
        return list(self.issues)

    async def get_pull_requests(self, issue: Issue) -> list[PullRequestRef]:
        self.lookups.append(issue.key)
        if issue.key in self.failing_issue_keys:
            raise TrackerError("dev-status unavailable", status_code=503)
        return list(self.pull_requests.get(issue.key, []))


class RecordingOperator(RepositoryOperator):
    """Operator that records the repositories it is applied to."""

    action_name = "recording"

    def __init__(self, release: str, conventions: ReleaseConfig, failing: tuple[str, ...] = ()) -> None:
        super().__init__(release, conventions)
        self.applied: list[str] = []
        self.failing = set(failing)

    async def apply(self, repository: str) -> None:
        self.applied.append(repository)
        if repository in self.failing:
            raise GitOperationError("git checkout failed", repository=repository, step="checkout")


@pytest.fixture
def settings(tmp_path: Path) -> ReleaseSettings:
    """Settings with three whitelisted repositories under a temp directory."""
    return ReleaseSettings(
        tracker={
            "base_url": "https://example.atlassian.net",
            "username": "bot@example.com",
            "api_token": "jira-token",
        },
        hosting={
            "workspace": "starlinglabs",
            "username": "bot",
            "password": "bitbucket-password",
        },
        workspace={
            "base_path": str(tmp_path / "repos"),
            "repositories": ["developer-api", "developer-center", "storefront-api"],
        },
    )


@pytest.fixture
def conventions(settings: ReleaseSettings) -> ReleaseConfig:
    return settings.release


@pytest.fixture
def whitelist(settings: ReleaseSettings) -> Whitelist:
    return Whitelist(settings.workspace.repositories)


@pytest.fixture
def release_tracker() -> InMemoryTracker:
    """Release 2.0.0: DC-1 touches developer-api and scratchpad, DC-2 touches developer-api."""
    issue_x = make_issue("DC-1", summary="Add webhook retries", linked=("DC-7",), remarks="Run migration first")
    issue_y = make_issue("DC-2", summary="Fix OAuth scopes", status="In Review")
    return InMemoryTracker(
        issues=[issue_x, issue_y],
        pull_requests={
            "DC-1": [
                make_pr("developer-api", "Alice", "DC-1"),
                make_pr("scratchpad", "Bob", "DC-1"),
                make_pr("developer-api", "Alice", "DC-1"),
            ],
            "DC-2": [make_pr("developer-api", "Carol", "DC-2")],
        },
    )


@pytest.fixture
def release_query(release_tracker: InMemoryTracker) -> ReleaseQuery:
    return ReleaseQuery(release_tracker)


@pytest.fixture
def working_copies() -> dict[str, MagicMock]:
    """Mock working copies keyed by repository, filled on demand."""
    return {}


@pytest.fixture
def working_copy_factory(working_copies: dict[str, MagicMock]):
    """Factory handing out (and remembering) one mock working copy per repository."""

    def factory(path: Path, repository: str) -> MagicMock:
        copy = MagicMock(name=f"WorkingCopy({repository})")
        copy.path = path
        copy.repository = repository
        working_copies[repository] = copy
        return copy

    return factory
