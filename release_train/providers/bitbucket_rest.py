"""Bitbucket Cloud provider implementation using direct REST API calls."""

from typing import Any

import httpx
import structlog

from release_train.exceptions import HostingError
from release_train.models.domain import PullRequest
from release_train.providers.base import HostingProvider
from release_train.utils.connection_pool import HTTPConnectionPool

log = structlog.get_logger(__name__)


class BitbucketRestProvider(HostingProvider):
    """Bitbucket Cloud implementation using direct REST API calls."""

    def __init__(
        self,
        api_url: str,
        workspace: str,
        username: str,
        password: str,
    ):
        """Initialize Bitbucket provider.

        Args:
            api_url: REST API root (e.g., https://api.bitbucket.org/2.0)
            workspace: Workspace owning the repositories
            username: Bitbucket username
            password: App password for the user
        """
        self.api_url = api_url.rstrip("/")
        self.workspace = workspace
        self.username = username
        self.password = password
        self._pool: HTTPConnectionPool | None = None

    async def connect(self) -> None:
        """Initialize the connection pool."""
        self._pool = HTTPConnectionPool(
            base_url=self.api_url,
            headers={"Content-Type": "application/json"},
            auth=httpx.BasicAuth(self.username, self.password),
        )
        await self._pool.initialize()
        log.debug("bitbucket_connected", api_url=self.api_url, workspace=self.workspace)

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            await self._pool.close()
        self._pool = None

    async def __aenter__(self) -> "BitbucketRestProvider":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.disconnect()

    async def create_pull_request(
        self,
        repository: str,
        title: str,
        description: str,
        source_branch: str,
        destination_branch: str,
    ) -> PullRequest:
        """Create a pull request."""
        log.info(
            "create_pull_request",
            repository=repository,
            title=title,
            source=source_branch,
            destination=destination_branch,
        )

        if self._pool is None:
            await self.connect()
        assert self._pool is not None

        data = {
            "title": title,
            "description": description,
            "source": {"branch": {"name": source_branch}},
            "destination": {"branch": {"name": destination_branch}},
        }

        try:
            response = await self._pool.post(
                f"/repositories/{self.workspace}/{repository}/pullrequests",
                json=data,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HostingError(
                f"Creating pull request in {repository} failed: {self._error_detail(e.response)}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise HostingError(f"Creating pull request in {repository} failed: {e}") from e

        return self._parse_pull_request(response.json(), repository)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Extract Bitbucket's error message from a failed response."""
        try:
            error = response.json().get("error") or {}
        except ValueError:
            return response.reason_phrase
        return error.get("message") or response.reason_phrase

    def _parse_pull_request(self, data: dict[str, Any], repository: str) -> PullRequest:
        """Parse pull request data from API response."""
        links = data.get("links") or {}
        return PullRequest(
            id=data["id"],
            title=data.get("title", ""),
            source_branch=data["source"]["branch"]["name"],
            destination_branch=data["destination"]["branch"]["name"],
            url=(links.get("html") or {}).get("href", ""),
            repository=repository,
        )
