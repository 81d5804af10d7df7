"""Release orchestration.

Data flow for the branch and pull request actions::

    ActionDispatcher -> ReleaseQuery -> RepositoryResolver -> Whitelist
        -> BranchOperator | PullRequestOperator  (via ReleasePipeline)

and for ``check``::

    ActionDispatcher -> ReleaseQuery -> ReleaseReporter
"""

from release_train.engine.dispatcher import ActionDispatcher, ReleaseAction
from release_train.engine.operators import BranchOperator, PullRequestOperator, RepositoryOperator
from release_train.engine.pipeline import ReleasePipeline
from release_train.engine.release import ReleaseQuery
from release_train.engine.reporter import ReleaseReporter
from release_train.engine.resolver import RepositoryResolver
from release_train.engine.whitelist import Whitelist

__all__ = [
    "ActionDispatcher",
    "BranchOperator",
    "PullRequestOperator",
    "ReleaseAction",
    "ReleasePipeline",
    "ReleaseQuery",
    "ReleaseReporter",
    "RepositoryOperator",
    "RepositoryResolver",
    "Whitelist",
]
