"""Ephemeral (tmp) branch bookkeeping for git-shortcuts."""

import re
from typing import Iterable, List, Sequence, Tuple, TYPE_CHECKING

from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import BranchKind
from git_shortcuts.services.pattern_resolver import PatternResolver

if TYPE_CHECKING:
    from git_shortcuts.core.context import RepoContext
    from git_shortcuts.services.branch_classifier import BranchClassifier
    from git_shortcuts.services.git.operations import GitOperations

logger = get_logger(__name__)


class EphemeralBranchManager:
    """Creates rebase anchors and sweeps tmp-suffixed branches.

    Sweeping is coarse: it removes every tmp branch (the user's, on the
    remote) no matter which run created it. There is no ownership tracking
    and no locking between concurrent invocations.
    """

    def __init__(self, git_ops: "GitOperations", resolver: PatternResolver, classifier: "BranchClassifier"):
        self.git_ops = git_ops
        self.resolver = resolver
        self.classifier = classifier

    @classmethod
    def from_context(cls, context: "RepoContext") -> "EphemeralBranchManager":
        return cls(context.git_ops, PatternResolver.from_context(context), context.classifier)

    @property
    def _suffix_pattern(self) -> str:
        return re.escape(self.classifier.tmp_suffix) + "$"

    def create_anchor(self, commits_back: int) -> str:
        """Create `<current><suffix>` at HEAD~commits_back and return its name.

        Raises:
            PreconditionError: If commits_back < 1 or the anchor already exists
        """
        if commits_back < 1:
            raise PreconditionError("number of commits must be positive", n=commits_back)

        name = self.classifier.ephemeral_name(self.git_ops.current_branch())
        if self.git_ops.has_local_branch(name):
            raise PreconditionError("ephemeral branch already exists, sweep it first", branch=name)

        self.git_ops.create_branch(name, f"HEAD~{commits_back}")
        logger.debug(f"Created anchor {name} at HEAD~{commits_back}")
        return name

    def delete_branches(self, local: Iterable[str], remote: Iterable[str]) -> None:
        """Force-delete local branches and delete remote ones by pushing an empty ref."""
        for name in local:
            self.git_ops.delete_local_branch(name)
        for name in remote:
            self.git_ops.delete_remote_branch(name)

    def local_ephemeral_branches(self) -> List[str]:
        return self.resolver.match(BranchKind.LOCAL, self._suffix_pattern, include_ephemeral=True)

    def remote_ephemeral_branches(self) -> List[str]:
        """The user's tmp branches still present on the remote."""
        self.git_ops.prune_remote()
        return self.resolver.match(BranchKind.REMOTE, self._suffix_pattern, include_ephemeral=True, mine=True)

    def sweep(self, local: bool = True, remote: bool = False, keep: Sequence[str] = ()) -> Tuple[List[str], List[str]]:
        """Delete tmp branches; remote sweeping only touches the user's own branches.

        A local tmp branch checked out in any worktree is skipped, so it can
        survive a sweep. Remote candidates are listed after pruning stale
        tracking refs, so a branch already deleted elsewhere is not pushed
        again.

        Args:
            local: Delete local tmp branches (checked-out ones are left alone)
            remote: Delete the user's remote tmp branches
            keep: Remote names to leave in place (a live pull request base)

        Returns:
            Tuple of (deleted local names, deleted remote names)
        """
        local_names = self.local_ephemeral_branches() if local else []
        remote_names = [n for n in self.remote_ephemeral_branches() if n not in keep] if remote else []
        if local_names or remote_names:
            logger.info(f"Sweeping tmp branches local={local_names} remote={remote_names}")
        self.delete_branches(local_names, remote_names)
        return local_names, remote_names
