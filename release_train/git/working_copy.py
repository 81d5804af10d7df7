"""Local working copy operations.

This module wraps the handful of version-control steps needed to cut a
release branch in an existing clone: stash local changes, fetch, check
out the development branch, pull, create the release branch and push it.

Example:
    >>> from release_train.git import WorkingCopy
    >>> copy = WorkingCopy("~/Documents/developer-api", repository="developer-api")
    >>> copy.stash_if_dirty()
    False
    >>> copy.fetch()
    >>> copy.checkout("dev")

Dependencies:
    Requires GitPython (gitpython) package for repository access.

Note:
    The clone and its remote are expected to exist already. Creating or
    wiring them is outside the scope of this module.
"""

from pathlib import Path

import git
import structlog
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from release_train.exceptions import GitOperationError, WorkingCopyNotFoundError

log = structlog.get_logger(__name__)


class WorkingCopy:
    """A local clone of one repository.

    Every step runs a single git command and raises
    :class:`GitOperationError` naming the step when git fails. Steps are
    independent; ordering them is the caller's job.

    Attributes:
        path: Resolved location of the clone.
        repository: Repository name used in logs and errors.
    """

    def __init__(self, path: str | Path, repository: str | None = None) -> None:
        self.path = Path(path).expanduser()
        self.repository = repository or self.path.name
        self._repo: git.Repo | None = None

    def _get_repo(self) -> git.Repo:
        """Open the repository on first use.

        Raises:
            WorkingCopyNotFoundError: If the path is missing or not a Git repository.
        """
        if self._repo is None:
            try:
                self._repo = git.Repo(self.path)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise WorkingCopyNotFoundError(
                    f"No Git working copy at {self.path}",
                    repository=self.repository,
                    step="open",
                ) from e

        return self._repo

    def _run(self, step: str, *args: str) -> str:
        """Run ``git <args>`` in the working copy."""
        repo = self._get_repo()
        log.debug("git_command", repository=self.repository, step=step, args=args)
        try:
            return repo.git.execute(["git", *args])
        except GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise GitOperationError(
                f"git {args[0]} failed: {stderr or e}",
                repository=self.repository,
                step=step,
            ) from e

    def is_dirty(self) -> bool:
        """Whether the working tree has uncommitted or untracked changes."""
        return self._get_repo().is_dirty(untracked_files=True)

    def stash_if_dirty(self) -> bool:
        """Stash uncommitted changes, including untracked files.

        Returns:
            True if something was stashed.
        """
        if not self.is_dirty():
            return False

        log.info("stashing_uncommitted_changes", repository=self.repository)
        self._run("stash", "stash", "push", "--include-untracked")
        return True

    def fetch(self) -> None:
        """Fetch updates from all remotes."""
        self._run("fetch", "fetch", "--all")

    def checkout(self, branch: str) -> None:
        """Check out an existing branch."""
        self._run("checkout", "checkout", branch)

    def pull(self) -> None:
        """Pull the current branch from its upstream."""
        self._run("pull", "pull")

    def create_branch(self, branch: str) -> None:
        """Create a local branch at HEAD and switch to it."""
        self._run("create_branch", "checkout", "-b", branch)

    def push_upstream(self, branch: str, remote: str = "origin") -> None:
        """Push a branch, creating it on the remote and tracking it."""
        self._run("push", "push", "--set-upstream", remote, branch)
