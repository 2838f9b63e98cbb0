"""Branch query service for git-shortcuts."""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from git_shortcuts.constants import CURRENT_BRANCH_MARKERS, MAIN_BRANCH_NAMES
from git_shortcuts.logging_config import get_logger

if TYPE_CHECKING:
    from git_shortcuts.services.git.operations import GitOperations

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListedBranch:
    """One line of `git branch` output."""

    name: str
    in_use: bool  # Checked out here (*) or in another worktree (+)


class BranchQueries:
    """Service for listing branches."""

    def __init__(self, git_ops: "GitOperations"):
        """Initialize the branch queries service.

        Args:
            git_ops: Git operations bound to a directory of the repository
        """
        self.git_ops = git_ops
        self.remote_name = git_ops.remote_name

    @staticmethod
    def parse_local_listing(output: str) -> List[ListedBranch]:
        """Parse plain `git branch` output."""
        branches = []
        for line in output.split("\n"):
            line = line.strip()
            if not line:
                continue
            in_use = line[0] in CURRENT_BRANCH_MARKERS
            if in_use:
                line = line[1:].strip()
            # Detached HEAD shows up as "(HEAD detached at abc123)"
            if line.startswith("("):
                continue
            branches.append(ListedBranch(name=line, in_use=in_use))
        return branches

    @staticmethod
    def parse_remote_listing(output: str) -> List[str]:
        """Parse `git branch -r` output, skipping symbolic refs like `origin/HEAD -> origin/main`."""
        names = []
        for line in output.split("\n"):
            line = line.strip()
            if not line or " -> " in line:
                continue
            names.append(line)
        return names

    def local_branches(self) -> List[ListedBranch]:
        """List local branches with their checked-out markers."""
        branches = self.parse_local_listing(self.git_ops.run("branch"))
        logger.debug(f"Found {len(branches)} local branches")
        return branches

    def remote_branches(self) -> List[str]:
        """List remote-tracking branches, remote prefix included."""
        names = self.parse_remote_listing(self.git_ops.run("branch", "-r"))
        logger.debug(f"Found {len(names)} remote branches")
        return names

    def remote_default_branch(self) -> Optional[str]:
        """The branch the remote's HEAD points at, if known locally."""
        ref = self.git_ops.run("symbolic-ref", "--short", f"refs/remotes/{self.remote_name}/HEAD", ignore_errors=True)
        prefix = f"{self.remote_name}/"
        if ref.startswith(prefix):
            return ref[len(prefix):]
        return None

    def conventional_main_branch(self) -> Optional[str]:
        """The local branch literally named main or master (main preferred)."""
        output = self.git_ops.run("branch", "-l", *MAIN_BRANCH_NAMES, "--format=%(refname:short)")
        found = set(output.split())
        for name in MAIN_BRANCH_NAMES:
            if name in found:
                return name
        return None
