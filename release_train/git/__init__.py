"""Local working copy operations.

Example:
    >>> from release_train.git import WorkingCopy
    >>> copy = WorkingCopy("/path/to/developer-api")
    >>> copy.fetch()
"""

from release_train.git.working_copy import WorkingCopy

__all__ = ["WorkingCopy"]
