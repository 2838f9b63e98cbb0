"""Logging setup for git-shortcuts.

Warnings only by default; `-v` shows each git command as it runs and
`--debug` adds timestamps plus a log file under ~/.git-shortcuts/.
"""
import logging
import sys
from pathlib import Path

PACKAGE_PREFIX = 'git_shortcuts.'
DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_DATEFMT = '%Y-%m-%d %H:%M:%S'
LOG_FILE = Path('.git-shortcuts') / 'git-shortcuts.log'


class ColoredFormatter(logging.Formatter):
    """Colors the level name when stderr is a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None or not sys.stderr.isatty():
            return super().format(record)
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def _log_file_handler() -> logging.Handler:
    path = Path.home() / LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode='w')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DEBUG_FORMAT, datefmt=DEBUG_DATEFMT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure the root logger for one invocation.

    Called once per alias run; handlers from an earlier call are replaced.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        root_logger.addHandler(_log_file_handler())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DEBUG_DATEFMT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt='[%(name)s] %(message)s'))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger named after the module, without the package prefix."""
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    return logging.getLogger(name)
