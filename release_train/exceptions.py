"""Custom exception hierarchy for release-train.

The hierarchy mirrors the three places a release action can go wrong:
bad input or configuration, failed reads against the issue tracker, and
per-repository failures while cutting branches or opening pull requests.

Exception Hierarchy:
    ReleaseTrainError (base)
    ├── ConfigurationError
    │   └── InvalidActionError
    ├── ResolutionError
    ├── GitOperationError
    │   └── WorkingCopyNotFoundError
    └── ExternalServiceError
        ├── TrackerError
        └── HostingError

Example Usage:
    >>> from release_train.exceptions import ConfigurationError
    >>> try:
    ...     load_config(path)
    ... except FileNotFoundError as e:
    ...     raise ConfigurationError(f"Config file not found: {path}") from e
"""


class ReleaseTrainError(Exception):
    """Base exception for all release-train errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(ReleaseTrainError):
    """Configuration or input errors.

    Raised before any external call is made, when the configuration file
    is invalid or missing fields, or when the caller supplied unusable
    arguments (e.g. an empty release identifier).
    """

    pass


class InvalidActionError(ConfigurationError):
    """The requested action is not one of the supported actions."""

    def __init__(self, action: str | None) -> None:
        self.action = action
        super().__init__(f'Invalid action "{action}"!')


class ResolutionError(ReleaseTrainError):
    """Resolving the repositories of a release failed.

    Raised when the pull requests of any single issue cannot be fetched.
    A partial repository set is never returned, since acting on it would
    ship a release to only some of its repositories.

    Attributes:
        issue_key: Key of the issue whose pull requests could not be fetched
    """

    def __init__(self, message: str, issue_key: str | None = None) -> None:
        self.issue_key = issue_key

        full_message = message
        if issue_key:
            full_message = f"{message} (issue: {issue_key})"

        super().__init__(full_message)
        self.message = message


class GitOperationError(ReleaseTrainError):
    """A version-control step failed in a local working copy.

    Attributes:
        repository: Repository whose working copy was being operated on
        step: Name of the step that failed (fetch, checkout, push, ...)
    """

    def __init__(
        self,
        message: str,
        repository: str | None = None,
        step: str | None = None,
    ) -> None:
        self.repository = repository
        self.step = step

        parts = []
        if repository:
            parts.append(f"repository: {repository}")
        if step:
            parts.append(f"step: {step}")

        full_message = f"{message} ({', '.join(parts)})" if parts else message
        super().__init__(full_message)
        self.message = message


class WorkingCopyNotFoundError(GitOperationError):
    """The working copy directory is missing or is not a Git repository."""

    pass


class ExternalServiceError(ReleaseTrainError):
    """External service communication errors.

    Raised when an HTTP call to the issue tracker or the source-hosting
    API fails (network error, authentication, non-2xx response).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        self.message = message


class TrackerError(ExternalServiceError):
    """The issue tracker search or development-panel call failed."""

    pass


class HostingError(ExternalServiceError):
    """The source-hosting pull request API call failed."""

    pass
