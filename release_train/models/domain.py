"""
Domain models for release-train.

These are the normalized internal representations of what the issue
tracker and the source-hosting API return, plus the per-repository
outcome records produced when a release action runs.

Example:
    Building an issue from tracker data::

        issue = Issue(
            id="10042",
            key="DC-42",
            summary="Add webhook retries",
            status="Ready for Release",
            linked_issue_keys=("DC-40",),
            remarks="Run the migration before deploying",
        )
"""

from dataclasses import dataclass, field, replace
from enum import Enum


class OutcomeStatus(str, Enum):
    """Result of applying a release operation to one repository."""

    SUCCEEDED = "succeeded"
    """The operation completed for the repository."""

    FAILED = "failed"
    """The operation raised; the error text is kept on the outcome."""

    SKIPPED = "skipped"
    """The repository is not on the whitelist and was not touched."""


@dataclass(frozen=True)
class PullRequestRef:
    """A pull request linked to an issue through the development panel.

    Only ``repository_name`` and ``author_name`` drive release behavior;
    the remaining fields are kept for display and debugging.
    """

    repository_name: str
    """Hosting-provider slug of the repository the PR lives in."""

    author_name: str
    """Display name of the PR author."""

    issue_key: str = ""
    """Key of the issue the PR was retrieved for."""

    id: str = ""
    url: str = ""
    status: str = ""
    source_branch: str = ""
    destination_branch: str = ""


@dataclass(frozen=True)
class Issue:
    """An issue that belongs to a release.

    Issues are immutable after retrieval. Pull request references are
    attached in a second pass, producing a new ``Issue`` via
    :meth:`with_pull_requests`.
    """

    id: str
    """Tracker-internal identifier, used for the development-panel lookup."""

    key: str
    """Human-readable key (e.g. ``DC-42``)."""

    summary: str
    status: str
    linked_issue_keys: tuple[str, ...] = ()
    """Keys of linked issues, always the side that is not this issue."""

    remarks: str | None = None
    """Free-text deployment remarks, verbatim; may be absent."""

    pull_requests: tuple[PullRequestRef, ...] = field(default=())

    def with_pull_requests(self, pull_requests: list[PullRequestRef]) -> "Issue":
        """Return a copy of this issue carrying the given pull requests."""
        return replace(self, pull_requests=tuple(pull_requests))

    @property
    def repository_names(self) -> list[str]:
        """Distinct repository names of this issue's PRs, first appearance first."""
        return list(dict.fromkeys(pr.repository_name for pr in self.pull_requests))

    @property
    def author_names(self) -> list[str]:
        """Distinct PR author names, first appearance first."""
        return list(dict.fromkeys(pr.author_name for pr in self.pull_requests))


@dataclass(frozen=True)
class PullRequest:
    """A pull request created on the source-hosting provider."""

    id: int
    title: str
    source_branch: str
    destination_branch: str
    url: str = ""
    repository: str = ""


@dataclass(frozen=True)
class ReleaseRow:
    """One row of the release summary table."""

    key: str
    summary: str
    status: str
    repositories: str
    """Comma-joined distinct repository names."""

    authors: str
    """Comma-joined distinct PR author names."""

    linked_issues: str
    """Comma-joined distinct linked issue keys."""

    remarks: str | None = None


@dataclass(frozen=True)
class RepositoryOutcome:
    """What happened to one repository during a release action."""

    repository: str
    status: OutcomeStatus
    error: str | None = None
    """Error text for failed outcomes, skip reason for skipped ones."""

    @property
    def succeeded(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED
