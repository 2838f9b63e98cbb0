"""Yes/no confirmation gate for destructive operations."""

from typing import Callable, Optional

from git_shortcuts.constants import CONFIRM_SUFFIX
from git_shortcuts.exceptions import AbortedError


def confirm(question: str, assume_yes: bool = False, input_func: Optional[Callable[[str], str]] = None) -> None:
    """Ask a yes/no question; return on yes, raise AbortedError on no.

    A bare enter and end-of-file count as yes. Any other answer must start
    with "y"; leading whitespace is not skipped.
    """
    if assume_yes:
        return
    ask = input_func or input
    try:
        answer = ask(question + CONFIRM_SUFFIX)
    except EOFError:
        return
    if answer and not answer.startswith("y"):
        raise AbortedError(question)
