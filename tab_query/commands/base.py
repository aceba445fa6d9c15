"""Base command class for result actions."""

from abc import ABC, abstractmethod
from typing import Any, List


class Command(ABC):
    """Abstract base class for actions triggered from a result item."""

    @abstractmethod
    def execute(self, action: List[Any]) -> bool:
        """
        Execute the command for a serialized action argument.

        Args:
            action: The item's ``arg`` (or modifier ``arg``), e.g. ["full", 0, 1, 3]

        Returns:
            True if execution succeeded, False otherwise
        """
        pass

    @abstractmethod
    def can_handle(self, action_type: str) -> bool:
        """
        Check if this command can handle the given action type.

        Args:
            action_type: First element of the action argument

        Returns:
            True if this command can handle the action type
        """
        pass
