"""Worktree operations service for git-shortcuts."""

import os
from typing import Dict, Any, TYPE_CHECKING

from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.models.worktree import WorktreeInfo
from git_shortcuts.logging_config import get_logger

if TYPE_CHECKING:
    from git_shortcuts.services.git.operations import GitOperations

logger = get_logger(__name__)


class WorktreeService:
    """Service for managing git worktrees.

    The primary worktree holds the main branch. Secondary worktrees live
    beside it in directories named `<prefix><id>` and are bound to a branch
    of the same name.
    """

    def __init__(self, git_ops: "GitOperations", prefix: str = "wt-"):
        """Initialize the worktree service.

        Args:
            git_ops: Git operations bound to any directory of the repository
            prefix: Reserved directory/branch prefix of secondary worktrees
        """
        self.git_ops = git_ops
        self.prefix = prefix

    @staticmethod
    def parse_porcelain(output: str) -> list[WorktreeInfo]:
        """Parse `git worktree list --porcelain` output.

        Format:
            worktree /path/to/worktree
            HEAD commit_sha
            branch refs/heads/branch-name
            (blank line between worktrees)
        """
        worktree_list = []
        current_worktree: Dict[str, Any] = {}

        def flush():
            path = current_worktree.get("path", "")
            if path:
                worktree_list.append(
                    WorktreeInfo(
                        path=path,
                        branch_name=current_worktree.get("branch", ""),
                        commit_sha=current_worktree.get("HEAD", ""),
                        is_main=not worktree_list,  # First worktree in list is always the main one
                        is_orphaned=not os.path.exists(path),
                    )
                )

        for line in output.split("\n"):
            line = line.strip()

            if not line:
                # Empty line marks end of worktree entry
                if current_worktree:
                    flush()
                    current_worktree = {}
                continue

            if line.startswith("worktree "):
                current_worktree["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                current_worktree["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                branch_ref = line.split(" ", 1)[1]
                if branch_ref.startswith("refs/heads/"):
                    current_worktree["branch"] = branch_ref[len("refs/heads/"):]
                else:
                    current_worktree["branch"] = ""
            elif line.startswith("detached"):
                current_worktree["branch"] = ""

        # Handle last entry if no trailing blank line
        if current_worktree:
            flush()

        return worktree_list

    def get_worktree_info(self) -> list[WorktreeInfo]:
        """Get detailed information about all worktrees."""
        output = self.git_ops.run("worktree", "list", "--porcelain")
        worktree_list = self.parse_porcelain(output)
        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def main_worktree_dir(self) -> str:
        """Directory of the one worktree not carrying the secondary prefix.

        Raises:
            PreconditionError: If zero or several worktrees qualify
        """
        primaries = [wt.path for wt in self.get_worktree_info() if not wt.is_secondary(self.prefix)]
        if len(primaries) != 1:
            raise PreconditionError("main worktree not unique", worktrees=primaries)
        return primaries[0]

    def worktree_dir(self, worktree_id: str) -> tuple[str, str]:
        """Branch name and directory for a secondary worktree id."""
        name = f"{self.prefix}{worktree_id}"
        repo_dir = self.git_ops.toplevel()
        return name, os.path.join(os.path.dirname(repo_dir), name)

    def add_worktree(self, worktree_id: str) -> tuple[str, str]:
        """Create `<prefix><id>` beside the repository on a new branch of the same name.

        Returns:
            Tuple of (branch name, worktree directory)
        """
        if not worktree_id or worktree_id.startswith(self.prefix):
            raise PreconditionError(f"worktree_id cannot be empty or begin with {self.prefix}", worktree_id=worktree_id)
        if "/" in worktree_id:
            raise PreconditionError("worktree_id cannot contain `/`", worktree_id=worktree_id)

        name, path = self.worktree_dir(worktree_id)
        self.git_ops.run("worktree", "add", "-b", name, path)
        logger.info(f"Created worktree {name} at {path}")
        return name, path

    def remove_worktree(self, worktree_id: str, force: bool = False) -> tuple[str, str]:
        """Remove a secondary worktree and delete its branch.

        Returns:
            Tuple of (branch name, worktree directory)
        """
        name, path = self.worktree_dir(worktree_id)
        args = ["worktree", "remove", path]
        if force:
            args.append("--force")
        self.git_ops.run(*args)
        self.git_ops.delete_local_branch(name)
        logger.info(f"Removed worktree {name} at {path}")
        return name, path
