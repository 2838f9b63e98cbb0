"""Per-invocation repository context for git-shortcuts"""

import os
from typing import Optional, Union

from git_shortcuts.config import Config
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import Branch, BranchRole
from git_shortcuts.services.branch_classifier import BranchClassifier
from git_shortcuts.services.git import BranchQueries, GitOperations, WorktreeService

logger = get_logger(__name__)


class RepoContext:
    """Everything an operation needs to know about where it runs.

    Created once per invocation and handed to every component. The
    repository location and the main branch are looked up once; the current
    branch is re-read on every call because operations move HEAD.
    """

    def __init__(self, working_dir: str, config: Union[Config, dict], git_ops: Optional[GitOperations] = None):
        """Initialize the context.

        Args:
            working_dir: Directory the user invoked the command from
            config: Configuration dict or Config object
            git_ops: Git operations to use (defaults to operations in working_dir)
        """
        if isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.working_dir = os.path.abspath(working_dir)
        self.git_ops = git_ops or GitOperations(self.working_dir, config)
        self.classifier = BranchClassifier.from_config(config)
        self.branch_queries = BranchQueries(self.git_ops)
        self.worktrees = WorktreeService(self.git_ops, config.worktree_prefix)

        self._repo_dir: Optional[str] = None
        self._main_branch: Optional[str] = None

    @property
    def username(self) -> str:
        return self.config.username

    @property
    def remote_name(self) -> str:
        return self.config.remote_name

    def repo_dir(self) -> str:
        """Top-level directory of the worktree the command runs in."""
        if self._repo_dir is None:
            self._repo_dir = self.git_ops.toplevel()
        return self._repo_dir

    def current_branch(self) -> str:
        """Current branch, or the short hash when detached. Never cached."""
        return self.git_ops.current_branch()

    def is_detached(self) -> bool:
        return self.git_ops.run("rev-parse", "--abbrev-ref", "HEAD") == "HEAD"

    def main_branch(self) -> str:
        """Configured main branch, else the remote's default, else local main/master."""
        if self._main_branch is None:
            main_branch = (
                self.config.main_branch
                or self.branch_queries.remote_default_branch()
                or self.branch_queries.conventional_main_branch()
            )
            if not main_branch:
                raise PreconditionError("cannot determine main branch", repo=self.repo_dir())
            logger.debug(f"Main branch: {main_branch}")
            self._main_branch = main_branch
        return self._main_branch

    def repo_branch(self) -> str:
        """Branch bound to this worktree: `wt-<id>` in a secondary worktree, main elsewhere."""
        return self.classifier.repo_branch(self.repo_dir(), self.main_branch())

    def default_checkout_branch(self) -> str:
        """Branch a bare checkout goes to (the dev branch): the repo branch."""
        return self.repo_branch()

    def in_secondary_worktree(self) -> bool:
        return self.repo_branch() != self.main_branch()

    def main_worktree_dir(self) -> str:
        return self.worktrees.main_worktree_dir()

    def role(self, name: str) -> BranchRole:
        return self.classifier.role(name, self.main_branch(), self.repo_branch())

    def branch(self, name: Optional[str] = None) -> Branch:
        """Branch with its role; the current branch when name is None."""
        current = self.current_branch()
        if name is None or name == current:
            detached = self.is_detached()
            role = self.classifier.role(current, self.main_branch(), self.repo_branch(), is_detached=detached)
            return Branch(name=current, role=role, is_current=True)
        return Branch(name=name, role=self.role(name), is_current=False)

    def is_protected(self, name: str) -> bool:
        return self.classifier.is_protected(name, self.main_branch(), self.repo_branch())
