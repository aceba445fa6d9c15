"""Collection of static tab records and dynamic window state."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import AppleScriptError, LaunchTimedOutError, SourceUnavailableError
from ..models import (
    INCOGNITO_SPACE_TITLE,
    DynamicState,
    PinnedTab,
    SpaceRecord,
    TabRecord,
    TopAppTab,
    UnpinnedTab,
)
from .base import TabSource

logger = logging.getLogger(__name__)

# Every browser window shows the same spaces and tabs, so static data is read from the first one
CANONICAL_WINDOW = 0

POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class IncludeFlags:
    """Record types to collect."""
    top_app: bool = True
    pinned: bool = True
    unpinned: bool = True
    spaces: bool = True

    @classmethod
    def all(cls) -> "IncludeFlags":
        return cls()

    def allows(self, record: TabRecord) -> bool:
        return {
            TopAppTab.type: self.top_app,
            PinnedTab.type: self.pinned,
            UnpinnedTab.type: self.unpinned,
            SpaceRecord.type: self.spaces,
        }[record.type]

    @property
    def any_tabs(self) -> bool:
        return self.top_app or self.pinned or self.unpinned

    def apply(self, records: List[TabRecord]) -> List[TabRecord]:
        return [r for r in records if self.allows(r)]


def _space_title(title: Any) -> str:
    return title if isinstance(title, str) and title else INCOGNITO_SPACE_TITLE


def _tab_record(raw: Dict[str, Any]) -> TabRecord:
    location = raw["location"]
    title = raw.get("title") or ""
    url = raw.get("url") or ""
    tab_index = int(raw["tab_index"])

    if location == TopAppTab.type:
        return TopAppTab(title=title, url=url, tab_index=tab_index)
    if location == PinnedTab.type:
        record_type = PinnedTab
    elif location == UnpinnedTab.type:
        record_type = UnpinnedTab
    else:
        raise ValueError(f"unknown tab location {location!r}")
    return record_type(
        title=title,
        url=url,
        space_index=int(raw["space_index"]),
        space_title=_space_title(raw.get("space_title")),
        tab_index=tab_index,
    )


class Collector:
    """Gathers records from a live tab source."""

    def __init__(
        self,
        source: TabSource,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        poll_interval: float = POLL_INTERVAL,
        launch_timeout: Optional[float] = None,
    ):
        """
        Initialize the collector.

        Args:
            source: Live tab source
            sleep: Sleep function used while waiting for the source
            clock: Monotonic clock used for the launch timeout
            poll_interval: Seconds between window checks after launch
            launch_timeout: Seconds to wait for a first window; None waits forever
        """
        self.source = source
        self._sleep = sleep
        self._clock = clock
        self.poll_interval = poll_interval
        self.launch_timeout = launch_timeout

    def ensure_ready(self) -> bool:
        """
        Make sure the source is running and has a window.

        Returns:
            True if the application had to be launched

        Raises:
            SourceUnavailableError: If the application is not installed
            LaunchTimedOutError: If no window appeared within launch_timeout
        """
        if self.check_source():
            return False
        self.launch_and_wait()
        return True

    def check_source(self) -> bool:
        """
        Check that the application is installed.

        Returns:
            True if it is already running

        Raises:
            SourceUnavailableError: If the application is not installed or cannot be queried
        """
        app_name = self.source.app_name
        try:
            if not self.source.is_installed():
                raise SourceUnavailableError(app_name)
            return self.source.is_running()
        except AppleScriptError as e:
            raise SourceUnavailableError(app_name, str(e)) from e

    def launch_and_wait(self) -> None:
        """
        Launch the application and poll until it has a window.

        Raises:
            SourceUnavailableError: If the launch fails
            LaunchTimedOutError: If no window appeared within launch_timeout
        """
        app_name = self.source.app_name
        logger.info("Launching %s", app_name)
        try:
            self.source.launch()
        except AppleScriptError as e:
            raise SourceUnavailableError(app_name, str(e)) from e

        deadline = None if self.launch_timeout is None else self._clock() + self.launch_timeout
        while not self._window_count():
            if deadline is not None and self._clock() >= deadline:
                raise LaunchTimedOutError(app_name, self.launch_timeout)
            self._sleep(self.poll_interval)

    def _window_count(self) -> int:
        try:
            return len(self.source.list_windows())
        except AppleScriptError as e:
            # Windows are not scriptable until the app has finished launching
            logger.debug("Waiting for %s windows: %s", self.source.app_name, e)
            return 0

    def collect_static(self, include: IncludeFlags = IncludeFlags()) -> List[TabRecord]:
        """
        Collect the static records of the canonical window.

        Args:
            include: Record types to keep

        Returns:
            Tab records first, in source order, followed by space records
        """
        if not self.source.list_windows():
            return []

        records: List[TabRecord] = []
        if include.any_tabs:
            for raw in self.source.list_tabs(CANONICAL_WINDOW):
                try:
                    record = _tab_record(raw)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping malformed tab %r: %s", raw, e)
                    continue
                if include.allows(record):
                    records.append(record)

        if include.spaces:
            records.extend(self._spaces())
        return records

    def collect_spaces_only(self) -> List[TabRecord]:
        """Collect only the space records of the canonical window."""
        if not self.source.list_windows():
            return []
        return self._spaces()

    def _spaces(self) -> List[TabRecord]:
        spaces: List[TabRecord] = []
        for raw in self.source.list_spaces(CANONICAL_WINDOW):
            try:
                spaces.append(SpaceRecord(title=_space_title(raw.get("title")), space_index=int(raw["index"])))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed space %r: %s", raw, e)
        return spaces

    def collect_dynamic(self) -> DynamicState:
        """Collect the active space of every window."""
        windows = self.source.list_windows()
        active_spaces = {}
        for position, window in enumerate(windows):
            index = window.get("index", position)
            active_spaces[index] = _space_title(window.get("active_space"))
        return DynamicState(number_of_windows=len(windows), window_active_spaces=active_spaces)


__all__ = ["Collector", "IncludeFlags", "CANONICAL_WINDOW"]
