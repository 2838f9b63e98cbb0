"""Working-tree, commit, cherry-pick and history-rewrite aliases."""

from typing import List, Optional

from git_shortcuts.commands.session import Session
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.logging_config import get_logger

logger = get_logger(__name__)

MAX_REWRITE_COMMITS = 9


def _refuse_protected(session: Session) -> None:
    ctx = session.context
    current = ctx.current_branch()
    if ctx.is_protected(current):
        raise PreconditionError(
            "cannot commit to main or repo branch",
            branch=current,
            main_branch=ctx.main_branch(),
            repo_branch=ctx.repo_branch(),
        )


def _commit_args(messages: List[str]) -> List[str]:
    args = []
    for message in messages:
        args.extend(["-m", message])
    return args


def commit_wip(session: Session, args) -> None:
    """mw: commit everything (or only what is staged) as "wip"."""
    _refuse_protected(session)
    if session.git_ops.is_staged():
        session.git_ops.run("commit", "-m", "wip")
    else:
        session.git_ops.run("commit", "-a", "-m", "wip")


def discard_modified(session: Session, args) -> None:
    """mr: throw away unstaged changes of the given files."""
    modified = session.git_ops.run("ls-files", "-m", "--", *args.files)
    if not modified:
        session.step("no modified file to discard")
        return
    session.confirm(f"discard modified: {' '.join(modified.splitlines())}")
    session.git_ops.run("checkout", "--", *args.files)


def clean_untracked(session: Session, args) -> None:
    """mx: delete untracked, non-ignored files."""
    untracked = session.git_ops.run("ls-files", "--others", "--exclude-standard")
    if not untracked:
        session.step("no file to clean")
        return
    session.confirm(f"delete these files?\n{untracked}\n")
    session.git_ops.run("clean", "-f")


def commit(session: Session, args) -> None:
    """mc: commit with messages; stages tracked changes when nothing is staged."""
    if not args.force:
        _refuse_protected(session)
    command = ["commit"]
    if not session.git_ops.is_staged():
        command.append("-a")
    session.git_ops.run(*command, *_commit_args(args.messages))


def add_files(session: Session, args) -> None:
    """ma"""
    session.git_ops.run("add", "--", *args.files)


def amend(session: Session, args) -> None:
    """mm: amend HEAD; without a message the editor opens."""
    if args.messages:
        session.git_ops.run("commit", "--amend", *_commit_args(args.messages))
    else:
        session.git_ops.run_interactive("commit", "--amend")


def stash(session: Session, args) -> None:
    """mh"""
    session.git_ops.run("stash")


def stash_pop(session: Session, args) -> None:
    """ms"""
    session.git_ops.run("stash", "pop")


def unstage(session: Session, args) -> None:
    """mu"""
    session.git_ops.run("restore", "--staged", "--", *args.files)


def cherry_pick_abort(session: Session, args) -> None:
    session.git_ops.run("cherry-pick", "--abort")


def cherry_pick_continue(session: Session, args) -> None:
    session.git_ops.run_interactive("cherry-pick", "--continue")


def cherry_pick(session: Session, args) -> None:
    """cp: cherry-pick a commit, or the tip of the one branch matching the pattern."""
    session.git_ops.run("cherry-pick", session.resolver.resolve_ref(args.ref))


def rewrite_target(commits_or_commit: Optional[str], squash: bool = False) -> str:
    """Oldest commit touched by uncommit/delete/squash.

    A count N of 1..9 means the last N commits (HEAD~(N-1)); anything that is
    not a number is taken as a commit. Squashing needs at least two commits,
    so its default is HEAD~1 and N=1 is refused.
    """
    if commits_or_commit is None:
        return "HEAD~1" if squash else "HEAD"
    try:
        n = int(commits_or_commit)
    except ValueError:
        return commits_or_commit
    if not 0 < n <= MAX_REWRITE_COMMITS or (squash and n == 1):
        raise PreconditionError("invalid number of commits", n=n)
    return "HEAD" if n == 1 else f"HEAD~{n - 1}"


def _commit_range(session: Session, target: str) -> str:
    return f"[{session.git_ops.short_hash(target)}..{session.git_ops.short_hash('HEAD')}]"


def uncommit(session: Session, args) -> None:
    """ru: undo commits, keeping their changes in the working tree."""
    target = rewrite_target(args.commits_or_commit)
    session.confirm(f"undo commits {_commit_range(session, target)}")
    session.git_ops.reset("mixed", f"{target}~")


def delete_commits(session: Session, args) -> None:
    """rd: drop commits and their changes."""
    target = rewrite_target(args.commits_or_commit)
    session.confirm(f"delete commits {_commit_range(session, target)}")
    session.git_ops.reset("hard", f"{target}~")


def squash_commits(session: Session, args) -> None:
    """rs: squash commits into one carrying the message of the oldest."""
    target = rewrite_target(args.commits_or_commit, squash=True)
    session.confirm(f"squash commits {_commit_range(session, target)}")
    message = session.git_ops.commit_message(target)
    logger.debug(f"Squashing {target}..HEAD into: {message.splitlines()[0] if message else ''}")
    session.git_ops.reset("soft", f"{target}~")
    session.git_ops.run("commit", "-m", message)


def reset_to_branch(session: Session, args) -> None:
    """rt: hard-reset the current branch to a branch (main by default)."""
    ctx = session.context
    if args.branch_re is None:
        target = ctx.main_branch()
    else:
        target = session.resolver.local_branch(args.branch_re, include_current=True)
    session.confirm(f"reset {ctx.current_branch()} to {target}")
    session.git_ops.reset("hard", target)
