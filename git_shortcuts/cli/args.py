"""Command-line argument parsing for git-shortcuts."""

import argparse
import os
from typing import List, Optional, Sequence, Tuple

from git_shortcuts.__version__ import __version__
from git_shortcuts.commands.registry import Operation
from git_shortcuts.constants import PROGRAM_NAME


def split_invocation(argv: Sequence[str]) -> Tuple[Optional[str], List[str]]:
    """Alias and its arguments from argv.

    Called through a `<prefix>.<alias>` link the alias is in the program
    name; called as the program itself it is the first argument.
    """
    program = os.path.basename(argv[0]) if argv else PROGRAM_NAME
    if "." in program and not program.endswith(".py"):
        return program.split(".", 1)[1], list(argv[1:])
    if len(argv) < 2:
        return None, []
    return argv[1], list(argv[2:])


def common_options() -> argparse.ArgumentParser:
    """Options every alias accepts."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("-v", "--verbose", action="store_true", help="Show every git command that runs")
    parser.add_argument("--debug", action="store_true", help="Show debug information for troubleshooting")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmations")
    parser.add_argument("--version", action="version", version=f"{PROGRAM_NAME} {__version__}")
    return parser


def build_parser(operation: Operation, prog: Optional[str] = None) -> argparse.ArgumentParser:
    """Parser for one alias."""
    parser = argparse.ArgumentParser(
        prog=prog or f"{PROGRAM_NAME} {operation.alias}",
        description=operation.description,
        parents=[common_options()],
        epilog="GitHub aliases need the GITHUB_TOKEN environment variable.",
    )
    for argument in operation.arguments:
        parser.add_argument(*argument.flags, **argument.options)
    return parser


def parse_args(operation: Operation, args: Sequence[str], prog: Optional[str] = None) -> argparse.Namespace:
    """Parse the arguments of one alias."""
    return build_parser(operation, prog).parse_args(list(args))
