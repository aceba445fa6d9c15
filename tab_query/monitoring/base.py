"""Base class for live tab sources."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class TabSource(ABC):
    """
    Abstract view of a running browser application.

    Window, space and tab indices are 0-based positions as reported by the
    application at the time of the call.
    """

    #: Application name, used in messages
    app_name: str = ""

    @abstractmethod
    def is_installed(self) -> bool:
        """Check if the application is installed."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if the application is running."""
        pass

    @abstractmethod
    def launch(self) -> None:
        """Launch the application without bringing it to the front."""
        pass

    @abstractmethod
    def list_windows(self) -> List[Dict[str, Any]]:
        """
        Get the open windows.

        Returns:
            One dict per window with keys:
                - index: window index
                - active_space: title of the focused space ("" if untitled)
        """
        pass

    @abstractmethod
    def list_tabs(self, window_index: int) -> List[Dict[str, Any]]:
        """
        Get the tabs of a window.

        Returns:
            List of tab dicts with keys:
                - location: 'topApp', 'pinned' or 'unpinned'
                - title: tab title
                - url: tab URL
                - tab_index: index in the window (topApp) or in its space
                - space_index, space_title: owning space (pinned/unpinned only)
        """
        pass

    @abstractmethod
    def list_spaces(self, window_index: int) -> List[Dict[str, Any]]:
        """
        Get the spaces of a window.

        Returns:
            List of dicts with 'index' and 'title'
        """
        pass
