"""Pull-main and rebase-back-onto workflows for git-shortcuts"""

from typing import List, Optional

from rich.console import Console

from git_shortcuts.core.context import RepoContext
from git_shortcuts.exceptions import GitHubAPIError, GitOperationError, PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import BaseLinkage, ReviewState
from git_shortcuts.services.editor_service import EditorService
from git_shortcuts.services.ephemeral_service import EphemeralBranchManager
from git_shortcuts.services.git import GitHubService
from git_shortcuts.services.pattern_resolver import PatternResolver

console = Console(stderr=True)
logger = get_logger(__name__)


class RebaseOrchestrator:
    """Multi-step history rewrites that keep main, the repo branch and PRs in line.

    Every step is a separate git or GitHub call whose effect is permanent as
    soon as it succeeds. A failure stops the sequence where it is; nothing is
    rolled back or retried, and leftover tmp branches are swept by the next
    run.
    """

    def __init__(
        self,
        context: RepoContext,
        github_service: Optional[GitHubService] = None,
        editor: Optional[EditorService] = None,
    ):
        self.context = context
        self.git_ops = context.git_ops
        self.resolver = PatternResolver.from_context(context)
        self.ephemeral = EphemeralBranchManager.from_context(context)
        self.github = github_service or GitHubService(context.git_ops, context.config)
        self.editor = editor or EditorService(context.config)

    def _step(self, message: str) -> None:
        console.print(f"# {message}", style="dim", highlight=False, markup=False)
        logger.debug(message)

    def pull_main(self) -> None:
        """Bring main up to date and rebase the repo branch on it.

        From a secondary worktree, main is updated in the primary worktree.
        The originally checked-out branch is restored at the end unless it
        is main or the repo branch.
        """
        self._step("pull main")
        self.git_ops.fetch()

        original = self.context.current_branch()
        main_branch = self.context.main_branch()
        repo_branch = self.context.repo_branch()

        main_ops = self.git_ops
        if repo_branch != main_branch:
            main_dir = self.context.main_worktree_dir()
            self._step(f"cd main dir: {main_dir}")
            main_ops = self.git_ops.in_directory(main_dir)

        if main_ops.current_branch() != main_branch:
            self._step(f"switch to main: {main_branch}")
            main_ops.checkout(main_branch)

        current = main_ops.current_branch()
        if current != main_branch:
            raise PreconditionError("not in main branch", current_branch=current, main_branch=main_branch)
        self._step(f"pull in {main_branch}")
        main_ops.pull_rebase()

        if repo_branch != main_branch:
            self._step(f"cd worktree dir: {self.context.working_dir}")
            if self.context.current_branch() != repo_branch:
                self._step(f"switch to worktree: {repo_branch}")
                self.git_ops.checkout(repo_branch)
            self._step(f"rebase {repo_branch} on {main_branch}")
            self.git_ops.rebase(main_branch)

        if original not in (main_branch, repo_branch):
            self._step(f"switch back to {original}")
            self.git_ops.checkout(original)

    def rebase(self, pattern: Optional[str] = None, revert_buffers: bool = True) -> str:
        """Rebase the current branch on a branch, or on the repo branch after pull-main.

        Returns:
            The branch rebased onto
        """
        if pattern is None:
            self.pull_main()
            onto = self.context.repo_branch()
        else:
            onto = self.resolver.local_branch(pattern, include_current=True)
        self._step(f"rebase on {onto}")
        self.git_ops.rebase(onto)
        if revert_buffers:
            self.editor.revert_buffers()
        return onto

    def rebase_back_onto(self, commits: int = 1, pattern: Optional[str] = None, revert_buffers: bool = False) -> str:
        """Replay the last `commits` commits of the current branch onto a new base.

        If the branch has an open pull request its base follows: a non-main
        base is published as `<branch><tmp suffix>` and the PR points at it;
        going back to main points the PR at main again and deletes that ref.

        Args:
            commits: Number of commits to keep
            pattern: Base branch pattern; None means main after pull-main
            revert_buffers: Revert editor buffers after the rewrite

        Returns:
            The new base branch
        """
        if commits < 1:
            raise PreconditionError("number of commits must be positive", n=commits)

        if pattern is None:
            onto = self.context.main_branch()
            self.pull_main()
        else:
            onto = self.resolver.local_branch(pattern, include_current=True)

        self.ephemeral.sweep(local=True, remote=False)

        current = self.context.current_branch()
        anchor = self.ephemeral.create_anchor(commits)
        self._step(f"rebase last {commits} commit(s) of {current} onto {onto}")
        self.git_ops.rebase_onto(onto, anchor, current)
        self.git_ops.delete_local_branch(anchor)
        if revert_buffers:
            self.editor.revert_buffers()

        keep: List[str] = []
        if self.github.state_of() == ReviewState.OPEN:
            if self.retarget_review_base(current, onto) == BaseLinkage.REBASING:
                keep.append(self.context.classifier.ephemeral_name(current))
            self._step(f"push {current}")
            self.git_ops.push("HEAD", current, force=True)

        self.sweep_remote_ephemeral(keep)
        return onto

    def retarget_review_base(self, branch_name: str, onto: str) -> BaseLinkage:
        """Point the open PR of branch_name at onto, via an ephemeral remote ref if needed.

        Returns:
            The linkage the PR is left in
        """
        ephemeral_base = self.context.classifier.ephemeral_name(branch_name)
        main_branch = self.context.main_branch()

        if onto != main_branch:
            self._step(f"set pr base to {ephemeral_base}")
            self.git_ops.push(onto, ephemeral_base, force=True)
            self.github.retarget_base(branch_name, ephemeral_base)
            return BaseLinkage.REBASING

        if self.git_ops.remote_ref_exists(ephemeral_base):
            self._step("reset pr base to main")
            self.github.retarget_base(branch_name, main_branch)
            self.git_ops.delete_remote_branch(ephemeral_base)
        return BaseLinkage.NORMAL

    def sweep_remote_ephemeral(self, keep: List[str]) -> List[str]:
        """Delete the user's remote tmp branches except live PR bases.

        Deleting the base of an open PR would close that PR, so bases of the
        user's open PRs are kept too. When GitHub cannot be asked, remote
        tmp branches are left alone.
        """
        try:
            live_bases = {
                pr.base.ref for pr in self.github.open_pulls_with_prefix(self.context.classifier.feature_prefix)
            }
        except (GitHubAPIError, GitOperationError) as e:
            logger.info(f"Skipping remote tmp branch sweep: {e}")
            return []
        _, deleted = self.ephemeral.sweep(local=False, remote=True, keep=sorted(live_bases.union(keep)))
        return deleted
