#!/usr/bin/env python3
"""Main entry point for git-shortcuts."""

import os
import sys
from typing import Optional, Sequence

from rich.console import Console

from git_shortcuts.cli.args import parse_args, split_invocation
from git_shortcuts.commands.registry import get_operation
from git_shortcuts.commands.session import Session
from git_shortcuts.config import Config
from git_shortcuts.core.context import RepoContext
from git_shortcuts.exceptions import AbortedError
from git_shortcuts.logging_config import get_logger, setup_logging

console = Console(stderr=True)
logger = get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    argv = list(sys.argv if argv is None else argv)
    parsed_args = None
    try:
        alias, rest = split_invocation(argv)
        operation = get_operation(alias) if alias else None
        if operation is None:
            if alias:
                console.print(f"Unknown alias: {alias}", style="red", markup=False, soft_wrap=True)
            operation = get_operation("help")
            rest = []

        parsed_args = parse_args(operation, rest, prog=f"{os.path.basename(argv[0])} {operation.alias}")
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
        logger.debug(f"Running alias {operation.alias} with {rest}")

        config = Config.from_env(assume_yes=parsed_args.yes, verbose=parsed_args.verbose, debug=parsed_args.debug)
        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}", markup=False)

        context = RepoContext(os.getcwd(), config)
        session = Session(context, program=argv[0])
        try:
            operation.handler(session, parsed_args)
        finally:
            session.github.close()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except AbortedError:
        console.print("[yellow]aborted[/yellow]")
        return 1
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True)
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
