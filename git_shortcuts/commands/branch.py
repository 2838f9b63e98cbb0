"""Branch aliases: checkout, create, track and delete."""

import re

from git_shortcuts.commands.session import Session
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import BranchKind
from git_shortcuts.services.branch_classifier import is_commit

logger = get_logger(__name__)


def exact_with_tmp_pattern(session: Session, name: str, remote: bool = False) -> str:
    """Regex matching exactly a branch and its tmp twin."""
    prefix = f"{session.context.remote_name}/" if remote else ""
    return "^" + re.escape(prefix + name) + "(" + re.escape(session.classifier.tmp_suffix) + ")?$"


def checkout_local_branch(session: Session, args) -> None:
    """bo: switch to the one local branch matching the pattern, or to the dev branch."""
    ctx = session.context
    if args.branch_re is None:
        branch = ctx.default_checkout_branch()
    else:
        branch = session.resolver.local_branch(args.branch_re)

    current = ctx.current_branch()
    if branch == current:
        raise PreconditionError("already in branch", branch=current)

    session.step(f"branch {current} -> {branch}")
    session.git_ops.checkout(branch)
    if args.revert:
        session.editor.revert_buffers()


def checkout_commit(session: Session, args) -> None:
    """bc: detach at a commit, or check out a tag on a new branch named after it."""
    ref = args.commit_or_tag
    if is_commit(ref):
        session.git_ops.run("checkout", "--detach", ref)
    else:
        session.git_ops.run("checkout", f"tags/{ref}", "-b", ref)


def checkout_remote_branch(session: Session, args) -> None:
    """bt: create a local branch tracking the one remote branch matching the pattern."""
    branch = session.resolver.remote_branch(args.remote_branch_re)
    session.git_ops.run("checkout", "-b", branch, "--track", f"{session.context.remote_name}/{branch}")


def new_branch(session: Session, args) -> None:
    """bn: create `<user>/<name>` from main (after pull-main), HEAD (".") or a branch."""
    if "/" in args.branch_name:
        raise PreconditionError("branch name cannot contain `/`", branch=args.branch_name)
    branch = session.classifier.feature_name(args.branch_name)

    base = None
    if args.base_branch_re is None:
        base = session.context.main_branch()
        session.orchestrator.pull_main()
    elif args.base_branch_re != ".":
        base = session.resolver.local_branch(args.base_branch_re, include_current=True)

    command = ["checkout", "-b", branch]
    if base:
        command.append(base)
    session.git_ops.run(*command)
    if base:
        session.editor.revert_buffers()


def track_remote_branch(session: Session, args) -> None:
    """br: set the upstream of the current branch to its remote namesake."""
    current = session.context.current_branch()
    remote = session.context.remote_name
    session.resolver.resolve(BranchKind.REMOTE, "^" + re.escape(f"{remote}/{current}") + "$")
    session.git_ops.run("branch", "-u", f"{remote}/{current}")


def delete_branches(session: Session, args) -> None:
    """bd: delete matching local branches and the user's matching remote branches."""
    pattern = args.branch_re
    if pattern == ".":
        _delete_current_branch(session)
        return

    ctx = session.context
    session.git_ops.fetch()
    local = session.resolver.match(BranchKind.LOCAL, pattern, include_ephemeral=True)
    remote = []
    if not args.local_only:
        remote = session.resolver.match(BranchKind.REMOTE, pattern, include_ephemeral=True, mine=True)

    if not local and not remote:
        session.step(f"no branch found by {pattern}")
        return

    protected = [name for name in local if ctx.is_protected(name)]
    if protected:
        raise PreconditionError("cannot delete main or repo branch", branches=protected)

    if not pattern.endswith(session.classifier.tmp_suffix):
        session.confirm(f"delete local branches:{local} and remote branches:{remote}")
    session.ephemeral.delete_branches(local, remote)
    logger.info(f"Deleted local={local} remote={remote}")


def _delete_current_branch(session: Session) -> None:
    ctx = session.context
    current = ctx.current_branch()
    repo_branch = ctx.repo_branch()
    if ctx.is_protected(current):
        raise PreconditionError("cannot delete repo branch", branch=current)

    session.git_ops.prune_remote()
    remote = session.resolver.match(
        BranchKind.REMOTE,
        exact_with_tmp_pattern(session, current, remote=True),
        include_ephemeral=True,
        mine=True,
    )
    session.confirm(f"delete this branch:{current} and remote branches:{remote}")
    session.git_ops.checkout(repo_branch)
    session.editor.revert_buffers()
    session.ephemeral.delete_branches([current], remote)
