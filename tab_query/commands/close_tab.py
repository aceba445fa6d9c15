"""Command to close a tab."""

import logging
from typing import Any, List

from ..models import Address
from ..results import CLOSE_ACTION
from ..tab_control import close_tab
from .base import Command

logger = logging.getLogger(__name__)


class CloseTabCommand(Command):
    """Command to close the tab addressed by a close modifier."""

    def __init__(self, app_name: str = "Arc"):
        self.app_name = app_name

    def can_handle(self, action_type: str) -> bool:
        """Check if this command can handle the action type."""
        return action_type == CLOSE_ACTION

    def execute(self, action: List[Any]) -> bool:
        """Execute the close command; the address follows the action name."""
        try:
            address = Address.from_list(action[1:])
        except ValueError as e:
            logger.error("%s", e)
            return False

        success = close_tab(self.app_name, address)
        if success:
            logger.info("Closed tab %s", address.to_list())
        return success
