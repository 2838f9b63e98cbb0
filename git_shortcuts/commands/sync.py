"""Pull, push and rebase aliases."""

from git_shortcuts.commands.session import Session
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.services.branch_classifier import is_commit


def _is_wip(line: str) -> bool:
    line = line.strip().lower()
    return line.endswith("wip") or " wip " in line


def pull_main(session: Session, args) -> None:
    """pm"""
    session.orchestrator.pull_main()


def pull(session: Session, args) -> None:
    """pl"""
    session.git_ops.pull_rebase()


def push(session: Session, args) -> None:
    """ps: push HEAD to the same-named remote branch.

    Main is never force-pushed and never receives wip commits.
    """
    ctx = session.context
    current = ctx.current_branch()
    main_branch = ctx.main_branch()
    if current == main_branch:
        if args.force:
            raise PreconditionError("cannot force push to main", branch=current)
        outgoing = session.git_ops.run("log", "--oneline", f"{ctx.remote_name}/{main_branch}..{main_branch}")
        wip = [line for line in outgoing.splitlines() if _is_wip(line)]
        if wip:
            raise PreconditionError("cannot push wip commit to main", commits=wip)
    session.git_ops.push("HEAD", current, force=args.force)


def update_submodules(session: Session, args) -> None:
    """po"""
    session.git_ops.run("submodule", "update", "--init")


def rebase_interactive(session: Session, args) -> None:
    """ri: interactive rebase on a relative ref, a commit or a branch."""
    ref = args.ref
    if "~" not in ref and "^" not in ref and not is_commit(ref):
        ref = session.resolver.local_branch(ref, include_current=True)
    session.git_ops.run_interactive("rebase", "-i", ref)
    session.editor.revert_buffers()


def rebase_continue(session: Session, args) -> None:
    """rc: stage resolved files and continue the rebase."""
    session.git_ops.run("add", "-u")
    session.git_ops.run_interactive("rebase", "--continue")
    session.editor.revert_buffers()


def rebase_abort(session: Session, args) -> None:
    session.git_ops.run("rebase", "--abort")


def rebase(session: Session, args) -> None:
    """rr"""
    session.orchestrator.rebase(args.branch_re, revert_buffers=True)


def rebase_back_onto(session: Session, args) -> None:
    """rb"""
    session.orchestrator.rebase_back_onto(args.commits, args.branch_re, revert_buffers=args.revert)
