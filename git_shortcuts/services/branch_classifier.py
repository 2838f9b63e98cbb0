"""Branch role classification for git-shortcuts."""

import os
from typing import Union, TYPE_CHECKING

from git_shortcuts.constants import COMMIT_RE, TMP_SUFFIX, WORKTREE_PREFIX
from git_shortcuts.models.branch import BranchRole

if TYPE_CHECKING:
    from git_shortcuts.config import Config


def is_commit(ref: str) -> bool:
    """True for refs that bypass branch lookup: `HEAD...` or 6+ hex digits."""
    return ref.startswith("HEAD") or bool(COMMIT_RE.match(ref))


class BranchClassifier:
    """Derives branch roles from names and the worktree directory.

    Pure: it only looks at strings it is given and never queries git.
    """

    def __init__(self, username: str, tmp_suffix: str = TMP_SUFFIX, worktree_prefix: str = WORKTREE_PREFIX):
        self.username = username
        self.tmp_suffix = tmp_suffix
        self.worktree_prefix = worktree_prefix

    @classmethod
    def from_config(cls, config: Union["Config", dict]) -> "BranchClassifier":
        return cls(
            username=config.get("username"),
            tmp_suffix=config.get("tmp_suffix", TMP_SUFFIX),
            worktree_prefix=config.get("worktree_prefix", WORKTREE_PREFIX),
        )

    @property
    def feature_prefix(self) -> str:
        return f"{self.username}/"

    def is_ephemeral(self, name: str) -> bool:
        return name.endswith(self.tmp_suffix)

    def is_feature(self, name: str) -> bool:
        return name.startswith(self.feature_prefix)

    def ephemeral_name(self, name: str) -> str:
        """Name of the ephemeral branch that belongs to name."""
        return f"{name}{self.tmp_suffix}"

    def feature_name(self, short_name: str) -> str:
        return f"{self.feature_prefix}{short_name}"

    def is_secondary_dir(self, repo_dir: str) -> bool:
        return os.path.basename(os.path.normpath(repo_dir)).startswith(self.worktree_prefix)

    def repo_branch(self, repo_dir: str, main_branch: str) -> str:
        """Branch bound to a working directory.

        A secondary worktree `<prefix><id>` is bound to the branch of the
        same name; every other directory is bound to main.
        """
        if self.is_secondary_dir(repo_dir):
            return os.path.basename(os.path.normpath(repo_dir))
        return main_branch

    def role(self, name: str, main_branch: str, repo_branch: str, is_detached: bool = False) -> BranchRole:
        if is_detached:
            return BranchRole.DETACHED
        if self.is_ephemeral(name):
            return BranchRole.EPHEMERAL
        if name == main_branch:
            return BranchRole.MAIN
        if name == repo_branch:
            return BranchRole.REPO
        if self.is_feature(name):
            return BranchRole.FEATURE
        return BranchRole.OTHER

    def is_protected(self, name: str, main_branch: str, repo_branch: str) -> bool:
        """Main and repo branches refuse wip commits and plain commits."""
        return name in (main_branch, repo_branch)
