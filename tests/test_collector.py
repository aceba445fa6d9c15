"""Tests for record collection from a tab source."""

import pytest

from tab_query.exceptions import AppleScriptError, LaunchTimedOutError, SourceUnavailableError
from tab_query.models import DynamicState, PinnedTab, SpaceRecord, TopAppTab, UnpinnedTab
from tab_query.monitoring import Collector, IncludeFlags

from .conftest import FakeTabSource, space_tab, top_app_tab


class TestCollectStatic:
    """Tests for static record collection."""

    def test_all_types(self, source):
        """Test collecting every record type from window 0."""
        records = Collector(source).collect_static(IncludeFlags.all())
        assert records == [
            TopAppTab(title="Gmail", url="https://mail.google.com", tab_index=0),
            PinnedTab(title="GitHub PR #42", url="https://github.com/org/repo/pull/42",
                      space_index=0, space_title="Work", tab_index=0),
            UnpinnedTab(title="Unrelated", url="https://example.com",
                        space_index=1, space_title="Personal", tab_index=0),
            SpaceRecord(title="Work", space_index=0),
            SpaceRecord(title="Personal", space_index=1),
        ]

    def test_reads_canonical_window_only(self, source):
        """Test that static data comes from the first window even with several open."""
        source.active_spaces = ["Work", "Personal", "Work"]
        Collector(source).collect_static(IncludeFlags.all())
        assert "list_tabs:0" in source.calls
        assert not [c for c in source.calls if c.startswith("list_tabs:") and c != "list_tabs:0"]

    @pytest.mark.parametrize("flags,expected", [
        (IncludeFlags(top_app=False, pinned=False, unpinned=False, spaces=True), {"space"}),
        (IncludeFlags(top_app=True, pinned=False, unpinned=False, spaces=False), {"topApp"}),
        (IncludeFlags(top_app=False, pinned=True, unpinned=True, spaces=False), {"pinned", "unpinned"}),
    ])
    def test_include_flags(self, source, flags, expected):
        """Test that inclusion flags select record types."""
        records = Collector(source).collect_static(flags)
        assert {r.type for r in records} == expected

    def test_tabs_not_listed_when_excluded(self, source):
        """Test that the tab listing is skipped when only spaces are wanted."""
        Collector(source).collect_static(IncludeFlags(top_app=False, pinned=False, unpinned=False))
        assert "list_tabs:0" not in source.calls

    def test_zero_windows(self):
        """Test that a source without windows yields no records."""
        source = FakeTabSource(active_spaces=[], spaces=["Work"], tabs=[top_app_tab("a", "b", 0)])
        assert Collector(source).collect_static(IncludeFlags.all()) == []

    def test_empty_space_titles_become_incognito(self):
        """Test the sentinel label for untitled spaces."""
        source = FakeTabSource(
            active_spaces=[""],
            spaces=[""],
            tabs=[space_tab("unpinned", "Secret", "https://secret", 0, "", 0)],
        )
        records = Collector(source).collect_static(IncludeFlags.all())
        assert records[0].space_title == "Incognito"
        assert records[1] == SpaceRecord(title="Incognito", space_index=0)

    def test_malformed_tab_skipped(self, source):
        """Test that malformed raw tabs are skipped."""
        source.tabs.append({"location": "sidebar", "title": "x", "tab_index": 9})
        source.tabs.append({"location": "pinned", "title": "no space"})
        records = Collector(source).collect_static(IncludeFlags(spaces=False))
        assert len(records) == 3


class TestCollectSpacesOnly:
    """Tests for the empty-query fast path."""

    def test_only_spaces(self, source):
        """Test that only space records are returned and tabs are never listed."""
        records = Collector(source).collect_spaces_only()
        assert records == [SpaceRecord(title="Work", space_index=0), SpaceRecord(title="Personal", space_index=1)]
        assert not [c for c in source.calls if c.startswith("list_tabs")]


class TestCollectDynamic:
    """Tests for live window state."""

    def test_every_window(self, source):
        """Test that each window reports its own active space."""
        source.active_spaces = ["Work", "Personal", ""]
        state = Collector(source).collect_dynamic()
        assert state == DynamicState(
            number_of_windows=3,
            window_active_spaces={0: "Work", 1: "Personal", 2: "Incognito"},
        )

    def test_no_windows(self):
        """Test the state of a source without windows."""
        assert Collector(FakeTabSource()).collect_dynamic().number_of_windows == 0


class SlowSource(FakeTabSource):
    """Source whose first window appears after a number of polls."""

    def __init__(self, polls_until_window, **kwargs):
        super().__init__(running=False, **kwargs)
        self.polls_until_window = polls_until_window

    def list_windows(self):
        if self.polls_until_window > 0:
            self.polls_until_window -= 1
            raise AppleScriptError("not ready")
        return [{"index": 0, "active_space": "Work"}]


class TestEnsureReady:
    """Tests for the source check and launch wait."""

    def test_not_installed(self):
        """Test that a missing application raises SourceUnavailableError."""
        with pytest.raises(SourceUnavailableError):
            Collector(FakeTabSource(installed=False)).ensure_ready()

    def test_running(self, source):
        """Test that a running application is not launched."""
        assert Collector(source).ensure_ready() is False
        assert not source.launched

    def test_launch_and_wait(self):
        """Test that a stopped application is launched and polled until a window exists."""
        source = SlowSource(3)
        sleeps = []
        assert Collector(source, sleep=sleeps.append).ensure_ready() is True
        assert source.launched
        assert sleeps == [0.1, 0.1, 0.1]

    def test_launch_timeout(self):
        """Test that a configured timeout ends the wait."""
        now = [0.0]

        def sleep(seconds):
            now[0] += seconds

        collector = Collector(SlowSource(1000), sleep=sleep, clock=lambda: now[0], launch_timeout=1.0)
        with pytest.raises(LaunchTimedOutError):
            collector.ensure_ready()
        assert 1.0 <= now[0] < 1.2

    def test_script_failure_is_unavailable(self):
        """Test that a failing installation probe reads as unavailable."""

        class BrokenSource(FakeTabSource):
            def is_installed(self):
                raise AppleScriptError("osascript missing")

        with pytest.raises(SourceUnavailableError):
            Collector(BrokenSource()).ensure_ready()

    def test_check_source_reports_running(self, source):
        """Test that the source check does not launch anything."""
        assert Collector(source).check_source() is True
        stopped = FakeTabSource(running=False)
        assert Collector(stopped).check_source() is False
        assert not stopped.launched

    def test_launch_failure_is_unavailable(self):
        """Test that a failing launch reads as unavailable."""

        class UnlaunchableSource(FakeTabSource):
            def launch(self):
                raise AppleScriptError("launch refused")

        with pytest.raises(SourceUnavailableError):
            Collector(UnlaunchableSource(running=False)).launch_and_wait()
