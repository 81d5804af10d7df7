"""Status reporting for per-repository release outcomes."""

import click

from release_train.models.domain import OutcomeStatus, RepositoryOutcome


def format_outcome(outcome: RepositoryOutcome, action_name: str) -> str:
    """Format one outcome as a console line.

    Args:
        outcome: Outcome of one repository
        action_name: Operation name (e.g. "release branch")
    """
    if outcome.status == OutcomeStatus.SUCCEEDED:
        return f"{click.style('[O]', fg='green')} Successfully created {action_name} for repository '{outcome.repository}'"
    if outcome.status == OutcomeStatus.FAILED:
        return (
            f"{click.style('[X]', fg='red')} Error occurred when creating {action_name} "
            f"for repository '{outcome.repository}': {outcome.error}"
        )
    return f"{click.style('[!]', fg='yellow')} {outcome.repository} is {outcome.error}, skip creating {action_name}"


def report_outcomes(outcomes: list[RepositoryOutcome], action_name: str) -> None:
    """Print one line per repository outcome."""
    if not outcomes:
        click.echo(f"No repositories to create a {action_name} for.")
        return

    for outcome in outcomes:
        click.echo(format_outcome(outcome, action_name), err=outcome.status == OutcomeStatus.FAILED)
