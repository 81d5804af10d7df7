"""CLI entry point for release-train."""

import asyncio
import sys

import click
import structlog
from dotenv import load_dotenv

from release_train.config.settings import DEFAULT_CONFIG_PATH, ReleaseSettings
from release_train.engine.dispatcher import ActionDispatcher, ReleaseAction
from release_train.engine.operators import BranchOperator, PullRequestOperator
from release_train.exceptions import InvalidActionError, ReleaseTrainError
from release_train.models.domain import ReleaseRow, RepositoryOutcome
from release_train.providers.factory import create_hosting_provider, create_issue_tracker
from release_train.utils.logging_config import configure_logging
from release_train.utils.status_reporter import report_outcomes

log = structlog.get_logger(__name__)

ACTION_NAMES = {
    ReleaseAction.RELEASE_BRANCH: BranchOperator.action_name,
    ReleaseAction.RELEASE_PR: PullRequestOperator.action_name,
}


@click.command()
@click.argument("action")
@click.argument("release", required=False)
@click.option(
    "--config",
    "config_path",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=False,
    help="Path to configuration file (defaults to the packaged release_config.yaml)",
)
@click.option("--log-level", default="INFO", help="Logging level")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(action: str, release: str | None, config_path: str, log_level: str, json_logs: bool) -> None:
    """release-train: cut release branches and open release PRs from Jira.

    \b
    Actions:
      check           Show the issues, repositories and authors of RELEASE
      release_branch  Cut release/RELEASE from dev in every release repository
      release_pr      Open release/RELEASE -> master PRs in every release repository

    \b
    Examples:
        release-train check 1.2.3
        release-train release_branch 1.2.3
        release-train release_pr 1.2.3
    """
    configure_logging(log_level, json_output=json_logs)

    try:
        release_action = ReleaseAction.parse(action)
    except InvalidActionError as e:
        click.echo(e.message, err=True)
        log.error("invalid_action", action=action, valid=[a.value for a in ReleaseAction])
        return

    load_dotenv()

    try:
        settings = ReleaseSettings.from_yaml(config_path)
        result = asyncio.run(_run_action(settings, release_action, release))
    except ReleaseTrainError as e:
        click.echo(f"Error: {e}", err=True)
        log.debug("release_action_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        log.error("release_action_unexpected", exc_info=True)
        sys.exit(1)

    if result is None:
        click.echo(f"No result for release '{release}': the issue search failed.", err=True)
        return

    if release_action in ACTION_NAMES:
        report_outcomes(result, ACTION_NAMES[release_action])  # type: ignore[arg-type]


async def _run_action(
    settings: ReleaseSettings, action: ReleaseAction, release: str | None
) -> list[ReleaseRow] | list[RepositoryOutcome] | None:
    """Open both providers and dispatch the action."""
    async with create_issue_tracker(settings) as tracker, create_hosting_provider(settings) as hosting:
        dispatcher = ActionDispatcher(settings, tracker, hosting)
        return await dispatcher.dispatch(action.value, release)


if __name__ == "__main__":
    cli()
