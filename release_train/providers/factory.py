"""Factory for creating provider instances from configuration."""

import structlog

from release_train.config.settings import ReleaseSettings
from release_train.providers.bitbucket_rest import BitbucketRestProvider
from release_train.providers.jira_rest import JiraRestProvider

log = structlog.get_logger(__name__)


def create_issue_tracker(settings: ReleaseSettings) -> JiraRestProvider:
    """Create the issue tracker provider.

    Example:
        >>> settings = ReleaseSettings.from_yaml("release_config.yaml")
        >>> async with create_issue_tracker(settings) as tracker:
        ...     issues = await tracker.search_release_issues("1.2.3")
    """
    tracker = settings.tracker
    log.debug("creating_jira_provider", base_url=str(tracker.base_url))
    return JiraRestProvider(
        base_url=str(tracker.base_url),
        username=tracker.username,
        api_token=tracker.api_token.get_secret_value(),
        project_key=tracker.project_key,
        remarks_field=tracker.remarks_field,
        application_type=tracker.application_type,
        page_size=tracker.page_size,
    )


def create_hosting_provider(settings: ReleaseSettings) -> BitbucketRestProvider:
    """Create the source-hosting provider."""
    hosting = settings.hosting
    log.debug("creating_bitbucket_provider", api_url=hosting.api_url, workspace=hosting.workspace)
    return BitbucketRestProvider(
        api_url=hosting.api_url,
        workspace=hosting.workspace,
        username=hosting.username,
        password=hosting.password.get_secret_value(),
    )
