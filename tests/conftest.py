"""Shared fixtures for tab query tests."""

from typing import Any, Dict, List, Optional

import pytest

from tab_query.config import Config
from tab_query.monitoring.base import TabSource


class FakeTabSource(TabSource):
    """In-memory tab source mirroring the same spaces and tabs in every window."""

    def __init__(
        self,
        active_spaces: Optional[List[str]] = None,
        spaces: Optional[List[str]] = None,
        tabs: Optional[List[Dict[str, Any]]] = None,
        installed: bool = True,
        running: bool = True,
        app_name: str = "Arc",
    ):
        self.app_name = app_name
        self.active_spaces = list(active_spaces or [])
        self.spaces = list(spaces or [])
        self.tabs = list(tabs or [])
        self.installed = installed
        self.running = running
        self.launched = False
        self.calls: List[str] = []

    def is_installed(self) -> bool:
        return self.installed

    def is_running(self) -> bool:
        return self.running

    def launch(self) -> None:
        self.launched = True
        self.running = True

    def list_windows(self) -> List[Dict[str, Any]]:
        self.calls.append("list_windows")
        return [{"index": i, "active_space": title} for i, title in enumerate(self.active_spaces)]

    def list_tabs(self, window_index: int) -> List[Dict[str, Any]]:
        self.calls.append(f"list_tabs:{window_index}")
        return [dict(tab) for tab in self.tabs]

    def list_spaces(self, window_index: int) -> List[Dict[str, Any]]:
        self.calls.append(f"list_spaces:{window_index}")
        return [{"index": i, "title": title} for i, title in enumerate(self.spaces)]


def space_tab(location: str, title: str, url: str, space_index: int, space_title: str, tab_index: int) -> Dict[str, Any]:
    return {
        "location": location,
        "title": title,
        "url": url,
        "space_index": space_index,
        "space_title": space_title,
        "tab_index": tab_index,
    }


def top_app_tab(title: str, url: str, tab_index: int) -> Dict[str, Any]:
    return {"location": "topApp", "title": title, "url": url, "tab_index": tab_index}


@pytest.fixture
def source():
    """Two spaces, one window focused on Work."""
    return FakeTabSource(
        active_spaces=["Work"],
        spaces=["Work", "Personal"],
        tabs=[
            top_app_tab("Gmail", "https://mail.google.com", 0),
            space_tab("pinned", "GitHub PR #42", "https://github.com/org/repo/pull/42", 0, "Work", 0),
            space_tab("unpinned", "Unrelated", "https://example.com", 1, "Personal", 0),
        ],
    )


@pytest.fixture
def config(tmp_path):
    return Config(cache_dir=str(tmp_path / "cache"), icon_dir="icons")
