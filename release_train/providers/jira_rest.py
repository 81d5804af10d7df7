"""Jira provider implementation using direct REST API calls."""

from typing import Any

import httpx
import structlog

from release_train.exceptions import TrackerError
from release_train.models.domain import Issue, PullRequestRef
from release_train.providers.base import IssueTracker
from release_train.utils.connection_pool import HTTPConnectionPool

log = structlog.get_logger(__name__)

SEARCH_API_PATH = "/rest/api/2"
DEV_STATUS_API_PATH = "/rest/dev-status/latest"


class JiraRestProvider(IssueTracker):
    """Jira implementation using direct REST API calls.

    Issue search goes through the platform API and pull request lookups
    through the development-panel API. Both live under ``/rest`` on the
    same host, so a single pool serves them and each call names its API
    prefix explicitly.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        project_key: str,
        remarks_field: str = "customfield_10041",
        application_type: str = "bitbucket",
        page_size: int = 50,
    ):
        """Initialize Jira provider.

        Args:
            base_url: Jira site URL (e.g., https://example.atlassian.net)
            username: Account email or username
            api_token: API token for the account
            project_key: Project searched for release issues
            remarks_field: Custom field holding deployment remarks
            application_type: Development-panel application type of the PRs
            page_size: Issues requested per search page
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.api_token = api_token.strip() if api_token else api_token
        self.project_key = project_key
        self.remarks_field = remarks_field
        self.application_type = application_type
        self.page_size = page_size
        self._pool: HTTPConnectionPool | None = None

    async def connect(self) -> None:
        """Initialize the connection pool."""
        self._pool = HTTPConnectionPool(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            auth=httpx.BasicAuth(self.username, self.api_token),
        )
        await self._pool.initialize()
        log.debug("jira_connected", base_url=self.base_url, project=self.project_key)

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            await self._pool.close()
        self._pool = None

    async def __aenter__(self) -> "JiraRestProvider":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.disconnect()

    def release_jql(self, release: str) -> str:
        """Build the JQL selecting a release's issues."""
        escaped = release.replace("\\", "\\\\").replace('"', '\\"')
        return f'project = {self.project_key} AND fixVersion = "{escaped}"'

    async def search_release_issues(self, release: str) -> list[Issue]:
        """Search the release's issues, following pagination."""
        jql = self.release_jql(release)
        log.info("search_release_issues", release=release, jql=jql)

        fields = ",".join(["summary", "status", "issuelinks", self.remarks_field])
        issues: list[Issue] = []
        start_at = 0

        while True:
            data = await self._get_json(
                SEARCH_API_PATH,
                "/search",
                params={
                    "jql": jql,
                    "startAt": start_at,
                    "maxResults": self.page_size,
                    "fields": fields,
                },
            )
            page = data.get("issues", [])
            try:
                issues.extend(self._parse_issue(issue_data) for issue_data in page)
            except (KeyError, TypeError, AttributeError) as e:
                raise TrackerError(f"Jira returned a malformed issue: {e!r}") from e

            start_at += len(page)
            if not page or start_at >= data.get("total", 0):
                break

        log.info("release_issues_found", release=release, count=len(issues))
        return issues

    async def get_pull_requests(self, issue: Issue) -> list[PullRequestRef]:
        """Get an issue's pull requests from the development panel."""
        log.debug("get_pull_requests", issue=issue.key)

        data = await self._get_json(
            DEV_STATUS_API_PATH,
            "/issue/detail",
            params={
                "issueId": issue.id,
                "applicationType": self.application_type,
                "dataType": "pullrequest",
            },
        )

        detail = data.get("detail") or []
        if not detail:
            return []

        try:
            return [self._parse_pull_request(pr_data, issue.key) for pr_data in detail[0].get("pullRequests", [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise TrackerError(f"Jira returned a malformed pull request for {issue.key}: {e!r}") from e

    async def _get_json(self, api_path: str, endpoint: str, **kwargs: Any) -> dict[str, Any]:
        """GET an endpoint under the given API prefix and decode the body.

        Raises:
            TrackerError: On transport errors, non-2xx responses and bodies
                that are not a JSON object.
        """
        if self._pool is None:
            await self.connect()
        assert self._pool is not None

        try:
            response = await self._pool.get(f"{api_path}{endpoint}", **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TrackerError(
                f"Jira request to {endpoint} failed",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise TrackerError(f"Jira request to {endpoint} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TrackerError(
                f"Jira returned an invalid response from {endpoint}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

        if not isinstance(payload, dict):
            raise TrackerError(f"Jira returned an unexpected payload from {endpoint}", status_code=response.status_code)
        return payload

    def _parse_issue(self, data: dict[str, Any]) -> Issue:
        """Parse issue data from the search API."""
        fields = data.get("fields") or {}
        status = fields.get("status") or {}

        linked_keys: list[str] = []
        for link in fields.get("issuelinks") or []:
            # Each link carries only the other side of the relation
            other = link.get("inwardIssue") or link.get("outwardIssue")
            if other and other.get("key"):
                linked_keys.append(other["key"])

        return Issue(
            id=str(data["id"]),
            key=data["key"],
            summary=fields.get("summary") or "",
            status=status.get("name", ""),
            linked_issue_keys=tuple(dict.fromkeys(linked_keys)),
            remarks=fields.get(self.remarks_field),
        )

    def _parse_pull_request(self, data: dict[str, Any], issue_key: str) -> PullRequestRef:
        """Parse pull request data from the development-panel API."""
        author = data.get("author") or {}
        source = data.get("source") or {}
        destination = data.get("destination") or {}

        return PullRequestRef(
            repository_name=data["repositoryName"],
            author_name=author.get("name", ""),
            issue_key=issue_key,
            id=str(data.get("id", "")),
            url=data.get("url", ""),
            status=data.get("status", ""),
            source_branch=source.get("branch", ""),
            destination_branch=destination.get("branch", ""),
        )
