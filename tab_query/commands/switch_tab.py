"""Command to switch to a space or tab."""

import logging
from typing import Any, List

from ..models import Address
from ..tab_control import focus
from .base import Command

logger = logging.getLogger(__name__)


class SwitchTabCommand(Command):
    """Command to bring a space or tab to the front."""

    def __init__(self, app_name: str = "Arc"):
        self.app_name = app_name

    def can_handle(self, action_type: str) -> bool:
        """Check if this command can handle the action type."""
        return action_type in (Address.SPACE, Address.TOP_TAB, Address.FULL)

    def execute(self, action: List[Any]) -> bool:
        """Execute the switch command."""
        try:
            address = Address.from_list(action)
        except ValueError as e:
            logger.error("%s", e)
            return False

        success = focus(self.app_name, address)
        if success:
            logger.info("Switched to %s", address.to_list())
        return success
