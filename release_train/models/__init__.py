"""Domain models for release-train."""

from release_train.models.domain import (
    Issue,
    OutcomeStatus,
    PullRequest,
    PullRequestRef,
    ReleaseRow,
    RepositoryOutcome,
)

__all__ = [
    "Issue",
    "OutcomeStatus",
    "PullRequest",
    "PullRequestRef",
    "ReleaseRow",
    "RepositoryOutcome",
]
