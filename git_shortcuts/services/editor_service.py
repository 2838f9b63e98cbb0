"""Editor integration: revert unmodified buffers after history rewrites."""

import subprocess
from typing import Union, TYPE_CHECKING

from git_shortcuts.logging_config import get_logger

if TYPE_CHECKING:
    from git_shortcuts.config import Config

logger = get_logger(__name__)


class EditorService:
    """Runs the configured buffer-revert command; failures are ignored."""

    def __init__(self, config: Union["Config", dict]):
        self.revert_command = list(config.get("revert_command") or [])

    def revert_buffers(self) -> bool:
        """Ask the editor to reload files changed on disk.

        Returns:
            True if the command ran successfully
        """
        if not self.revert_command:
            return False
        logger.info(" ".join(self.revert_command))
        try:
            subprocess.run(self.revert_command, check=True, capture_output=True)
            return True
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug(f"Could not revert editor buffers: {e}")
            return False
