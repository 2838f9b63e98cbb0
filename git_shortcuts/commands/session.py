"""Services shared by the alias handlers of one invocation."""

from typing import Callable, Optional

from rich.console import Console

from git_shortcuts.core.context import RepoContext
from git_shortcuts.core.rebase import RebaseOrchestrator
from git_shortcuts.services.editor_service import EditorService
from git_shortcuts.services.ephemeral_service import EphemeralBranchManager
from git_shortcuts.services.git import GitHubService
from git_shortcuts.services.pattern_resolver import PatternResolver
from git_shortcuts.utils.prompt import confirm


class Session:
    """Wires the repository context to every service a command may need.

    Nothing here touches git on construction, so building a session
    outside a repository is safe; the first git call reports the problem.
    """

    def __init__(
        self,
        context: RepoContext,
        github_service: Optional[GitHubService] = None,
        editor: Optional[EditorService] = None,
        input_func: Optional[Callable[[str], str]] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        program: Optional[str] = None,
    ):
        self.context = context
        self.config = context.config
        self.git_ops = context.git_ops
        self.classifier = context.classifier
        self.resolver = PatternResolver.from_context(context)
        self.ephemeral = EphemeralBranchManager.from_context(context)
        self.github = github_service or GitHubService(context.git_ops, context.config)
        self.editor = editor or EditorService(context.config)
        self.orchestrator = RebaseOrchestrator(context, self.github, self.editor)
        self.input_func = input_func
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.program = program

    def confirm(self, question: str) -> None:
        confirm(question, assume_yes=self.config.assume_yes, input_func=self.input_func)

    def out(self, text: str, end: str = "\n") -> None:
        """Print git output verbatim to stdout."""
        print(text, end=end, flush=True)

    def step(self, message: str) -> None:
        """Print a progress note to stderr."""
        self.err_console.print(f"# {message}", style="dim", markup=False, highlight=False, soft_wrap=True)
