"""Command executor to route result actions to command classes."""

import logging
from typing import Any, List, Optional

from ..cache import StaticCache
from ..config import Config
from .base import Command
from .close_tab import CloseTabCommand
from .flush_cache import FlushCacheCommand
from .switch_tab import SwitchTabCommand

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Executes the action argument of a chosen result item."""

    def __init__(self, config: Config, commands: Optional[List[Command]] = None):
        """
        Initialize the command executor with available commands.

        Args:
            config: Workflow configuration
            commands: Commands to route to (defaults to switch, close and flush)
        """
        if commands is None:
            commands = [
                SwitchTabCommand(config.source_app),
                CloseTabCommand(config.source_app),
                FlushCacheCommand(StaticCache(config.cache_path, config.cache_ttl)),
            ]
        self.commands = commands

    def execute(self, action: Any) -> bool:
        """
        Execute an action argument.

        Args:
            action: Deserialized ``arg`` list

        Returns:
            True if the action succeeded, False otherwise
        """
        if not isinstance(action, list) or not action or not isinstance(action[0], str):
            logger.error("Invalid action: %r", action)
            return False

        for command in self.commands:
            if command.can_handle(action[0]):
                return command.execute(action)

        logger.error("No command for action '%s'", action[0])
        return False
