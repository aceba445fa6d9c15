"""Command to flush the tab cache."""

import logging
from typing import Any, List

from ..cache import StaticCache
from ..results import FLUSH_CACHE_ARG
from .base import Command

logger = logging.getLogger(__name__)


class FlushCacheCommand(Command):
    """Command to delete the static record snapshot."""

    def __init__(self, cache: StaticCache):
        self.cache = cache

    def can_handle(self, action_type: str) -> bool:
        """Check if this command can handle the action type."""
        return action_type == FLUSH_CACHE_ARG[0]

    def execute(self, action: List[Any]) -> bool:
        """Execute the flush command. Flushing a missing cache succeeds."""
        if self.cache.flush():
            logger.info("Flushed tab cache %s", self.cache.path)
        return True
