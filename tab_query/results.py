"""Building display items from static records and live window state."""

import os
from typing import Dict, Iterable, List, Optional, Sequence

from .models import (
    Address,
    DynamicState,
    ModifierAction,
    PinnedTab,
    ResultItem,
    SpaceRecord,
    TabRecord,
    TopAppTab,
    UnpinnedTab,
)

CONTEXT_MARKER = "⭕️ "

TYPE_LABELS = {
    SpaceRecord.type: "Space",
    TopAppTab.type: "Top App Tab",
    PinnedTab.type: "Pinned Tab",
    UnpinnedTab.type: "Unpinned Tab",
}

TYPE_ICONS = {
    SpaceRecord.type: "iconSpace.png",
    TopAppTab.type: "iconTopApp.png",
    PinnedTab.type: "iconTabPinned.png",
    UnpinnedTab.type: "iconTabUnpinned.png",
}

ALERT_ICON = "iconAlert.png"

# Modifier keys
COPY_URL_KEY = "ctrl"
COPY_TITLE_KEY = "shift"
CLOSE_KEY = "cmd"
FLUSH_CACHE_KEY = "alt"

FLUSH_CACHE_ARG = ["flushCache"]
CLOSE_ACTION = "close"


class ResultBuilder:
    """Cross-products static records with per-window state."""

    def __init__(self, cache_enabled: bool = False, icon_dir: str = "./script-filter-item-icons"):
        self.cache_enabled = cache_enabled
        self.icon_dir = icon_dir

    def icon(self, name: str) -> str:
        return os.path.join(self.icon_dir, name)

    def build(self, records: Sequence[TabRecord], state: DynamicState) -> List[ResultItem]:
        """
        Build one item per (window, record) pair, grouped by window.

        Args:
            records: Static records
            state: Active space of each window

        Returns:
            Items in window-major, record order
        """
        items = []
        for window_index in range(state.number_of_windows):
            active_space = state.active_space(window_index)
            for record in records:
                items.append(self._item(record, window_index, active_space, state.number_of_windows))
        return items

    def _item(self, record: TabRecord, window_index: int, active_space: str, number_of_windows: int) -> ResultItem:
        if isinstance(record, SpaceRecord):
            is_context_match = active_space == record.title
            address = Address.space(window_index, record.space_index)
        elif isinstance(record, TopAppTab):
            is_context_match = False
            address = Address.top_tab(window_index, record.tab_index)
        else:
            is_context_match = active_space == record.space_title
            address = Address.full(window_index, record.space_index, record.tab_index)

        subtitle = self.subtitle(record, active_space if number_of_windows > 1 else None)
        title = CONTEXT_MARKER + record.title if is_context_match else record.title

        return ResultItem(
            title=title,
            subtitle=subtitle,
            arg=address,
            icon=self.icon(TYPE_ICONS[record.type]),
            modifier_actions=self._modifiers(record, address),
            is_context_match=is_context_match,
            record_title=record.title,
            window_index=window_index,
            is_space=isinstance(record, SpaceRecord),
        )

    def subtitle(self, record: TabRecord, window_space: Optional[str] = None) -> str:
        """
        Compose the subtitle of a record.

        Args:
            record: Static record
            window_space: Active space of the item's window, named only when
                more than one window is open

        Returns:
            Type label, window and space context, and URL
        """
        subtitle = TYPE_LABELS[record.type]
        if window_space is not None:
            subtitle += f" in window '{window_space}'"
        if isinstance(record, (PinnedTab, UnpinnedTab)):
            subtitle += f" in '{record.space_title}'"
        if not isinstance(record, SpaceRecord):
            subtitle += f": {record.url or '(no URL)'}"
        return subtitle

    def possible_subtitles(self, record: TabRecord, space_titles: Iterable[str]) -> List[str]:
        """List every subtitle the record can be built with, given the spaces a window may show."""
        subtitles = [self.subtitle(record)]
        subtitles.extend(self.subtitle(record, title) for title in space_titles)
        return subtitles

    def _modifiers(self, record: TabRecord, address: Address) -> Dict[str, ModifierAction]:
        is_space = isinstance(record, SpaceRecord)
        mods = {}
        if is_space:
            mods[COPY_URL_KEY] = ModifierAction(arg="", subtitle="Spaces have no URL", valid=False)
        else:
            mods[COPY_URL_KEY] = ModifierAction(arg=record.url, subtitle="Copy URL", valid=bool(record.url))
        mods[COPY_TITLE_KEY] = ModifierAction(arg=record.title, subtitle="Copy title")
        if is_space:
            mods[CLOSE_KEY] = ModifierAction(arg="", subtitle="Spaces cannot be closed", valid=False)
        else:
            mods[CLOSE_KEY] = ModifierAction(arg=[CLOSE_ACTION, *address.to_list()], subtitle="Close tab")
        if self.cache_enabled:
            mods[FLUSH_CACHE_KEY] = ModifierAction(arg=list(FLUSH_CACHE_ARG), subtitle="Flush the tab cache")
        return mods

    def no_results_item(self, query: str = "", app_name: str = "Arc") -> ResultItem:
        """Informational item shown when nothing matched."""
        title = "No tabs found"
        subtitle = f"No tabs are currently open in {app_name}."
        if query.strip():
            title += f' for "{query.strip()}"'
            subtitle = "Try a different search query."
        return self._error_item(title, subtitle)

    def source_unavailable_item(self, app_name: str = "Arc") -> ResultItem:
        return self._error_item(
            f"{app_name} application not found",
            f"Install the {app_name} application in order to use this workflow.",
        )

    def launch_timed_out_item(self, app_name: str = "Arc") -> ResultItem:
        return self._error_item(
            f"{app_name} did not open a window",
            "The application was launched but no window appeared in time.",
        )

    def source_error_item(self, app_name: str, message: str) -> ResultItem:
        return self._error_item(f"Could not read tabs from {app_name}", message)

    def config_error_item(self, message: str) -> ResultItem:
        return self._error_item("Invalid workflow configuration", message)

    def _error_item(self, title: str, subtitle: str) -> ResultItem:
        return ResultItem(title=title, subtitle=subtitle, arg=Address.error(), icon=self.icon(ALERT_ICON))


def render(items: Sequence[ResultItem]) -> Dict[str, List[Dict]]:
    """Serialize items into the launcher document."""
    return {"items": [item.to_dict() for item in items]}
