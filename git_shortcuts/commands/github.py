"""Pull request aliases."""

import webbrowser

from rich.markup import escape
from rich.table import Table

from git_shortcuts.commands.branch import exact_with_tmp_pattern
from git_shortcuts.commands.session import Session
from git_shortcuts.exceptions import PreconditionError
from git_shortcuts.logging_config import get_logger
from git_shortcuts.models.branch import BranchKind, ReviewState
from git_shortcuts.services.branch_classifier import is_commit

logger = get_logger(__name__)


def pr_status(session: Session, args) -> None:
    """gh: PR of the current branch and the user's open PRs."""
    current = session.context.current_branch()
    table = Table(title=f"Pull requests of {session.context.username}")
    table.add_column("#", justify="right")
    table.add_column("Branch")
    table.add_column("Base")
    table.add_column("State")
    table.add_column("Title")

    state = session.github.state_of(current)
    if state == ReviewState.NONE:
        session.out(f"current branch {current}: no pull request")
    else:
        session.out(f"current branch {current}: {state.value}")

    for pull in session.github.open_pulls_with_prefix(session.classifier.feature_prefix):
        table.add_row(
            str(pull.number),
            f"[bold]{escape(pull.head.ref)}[/bold]" if pull.head.ref == current else escape(pull.head.ref),
            escape(pull.base.ref),
            "draft" if pull.draft else "open",
            escape(pull.title),
        )
    session.console.print(table)


def _open_in_browser(session: Session, ref: str) -> None:
    state = session.github.state_of(ref)
    if state != ReviewState.OPEN:
        raise PreconditionError("no pr is open", ref=ref or session.context.current_branch(), state=state.value)
    url = session.github.pull_url(ref)
    session.step(f"open {url}")
    webbrowser.open(url)


def create_pull(session: Session, args) -> None:
    """gt: force-push HEAD and open a PR against main or an ephemeral base."""
    base_ref = None
    if args.base_branch_re is not None:
        base_ref = args.base_branch_re
        if not is_commit(base_ref):
            base_ref = session.resolver.local_branch(base_ref, include_current=True)

    ctx = session.context
    current = ctx.current_branch()
    session.step(f"push {current}")
    session.git_ops.push("HEAD", current, force=True)

    if base_ref is None:
        base = ctx.main_branch()
    else:
        base = session.classifier.ephemeral_name(current)
        session.step(f"push {base_ref} as pr base {base}")
        session.git_ops.push(base_ref, base, force=True)

    pull = session.github.create_pull(current, base, draft=args.draft)
    session.out(pull.html_url)
    if not args.silent:
        _open_in_browser(session, current)


def open_pull(session: Session, args) -> None:
    """gp: open the PR of the current branch, a matching branch, or a PR number."""
    ref = args.ref or ""
    if ref and not ref.isdigit():
        matches = session.resolver.match(BranchKind.LOCAL, ref, include_current=True)
        if len(matches) == 1:
            ref = matches[0]
    _open_in_browser(session, ref)


def pull_state(session: Session, args) -> None:
    """gs: print the PR state of a branch and clean up after a merge."""
    if args.branch_re is None:
        pr_status(session, args)
        return

    ctx = session.context
    current = ctx.current_branch()
    branch = current if args.branch_re == "." else session.resolver.local_branch(args.branch_re)

    state = session.github.state_of(branch)
    session.out(state.value)
    logger.debug(f"PR state of {branch}: {state.value}")
    if state != ReviewState.MERGED:
        return

    if ctx.is_protected(branch):
        session.step(f"{branch} is the main or repo branch, nothing to clean")
        return

    main_branch = ctx.main_branch()
    if branch == current:
        session.confirm(f"reset {current} to {main_branch}")
        session.git_ops.reset("hard", main_branch)
        return

    session.git_ops.prune_remote()
    local = session.resolver.match(BranchKind.LOCAL, exact_with_tmp_pattern(session, branch), include_ephemeral=True)
    remote = session.resolver.match(
        BranchKind.REMOTE,
        exact_with_tmp_pattern(session, branch, remote=True),
        include_ephemeral=True,
        mine=True,
    )
    session.confirm(f"delete local branches:{local} and remote branches:{remote}")
    session.ephemeral.delete_branches(local, remote)
