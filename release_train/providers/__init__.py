"""Provider implementations for the issue tracker and source hosting.

Key Components:
    - IssueTracker: Abstract base for issue tracker providers
    - HostingProvider: Abstract base for source-hosting providers
    - JiraRestProvider: Jira search and development-panel implementation
    - BitbucketRestProvider: Bitbucket Cloud pull request implementation

Example:
    >>> from release_train.providers import JiraRestProvider
    >>> jira = JiraRestProvider(base_url="...", username="...", api_token="...", project_key="DC")
    >>> issues = await jira.search_release_issues("1.2.3")
"""

from release_train.providers.base import HostingProvider, IssueTracker
from release_train.providers.bitbucket_rest import BitbucketRestProvider
from release_train.providers.jira_rest import JiraRestProvider

__all__ = [
    "BitbucketRestProvider",
    "HostingProvider",
    "IssueTracker",
    "JiraRestProvider",
]
