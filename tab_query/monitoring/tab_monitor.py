"""Tab monitoring for Arc using JavaScript for Automation."""

import logging
from typing import Any, Dict, List, Optional

from ..exceptions import AppleScriptError, SourceUnavailableError
from ..utils import AppleScriptExecutor, escape_script_string
from .base import TabSource

logger = logging.getLogger(__name__)


class ArcTabSource(TabSource):
    """Reads windows, spaces and tabs of a running Arc-style browser."""

    def __init__(self, app_name: str = "Arc", executor: Optional[AppleScriptExecutor] = None):
        """
        Initialize the source.

        Args:
            app_name: Application name as known to System Events
            executor: Script executor (defaults to a JavaScript osascript executor)
        """
        self.app_name = app_name
        self._executor = executor or AppleScriptExecutor(language="JavaScript")

    def _script(self, body: str) -> str:
        # Wrap in an IIFE so osascript prints the returned value
        app = escape_script_string(self.app_name)
        return f'(function() {{ var app = Application("{app}"); {body} }})()'

    def _query(self, body: str) -> Any:
        return self._executor.execute_json(self._script(body))

    def is_installed(self) -> bool:
        try:
            return bool(self._query(
                'try { app.id(); return JSON.stringify(true); } '
                'catch (e) { return JSON.stringify(false); }'
            ))
        except AppleScriptError as e:
            logger.warning("Could not look up %s: %s", self.app_name, e)
            return False

    def is_running(self) -> bool:
        return bool(self._query("return JSON.stringify(app.running());"))

    def launch(self) -> None:
        success, _, stderr = self._executor.execute(self._script("app.launch(); return '';"))
        if not success:
            raise SourceUnavailableError(self.app_name, stderr or "launch failed")

    def list_windows(self) -> List[Dict[str, Any]]:
        return self._query('''
            var windows = app.windows;
            var out = [];
            for (var i = 0; i < windows.length; i++) {
                var active = "";
                try { active = windows[i].activeSpace.title() || ""; } catch (e) {}
                out.push({index: i, active_space: active});
            }
            return JSON.stringify(out);
        ''') or []

    def list_tabs(self, window_index: int) -> List[Dict[str, Any]]:
        return self._query(f'''
            var win = app.windows[{int(window_index)}];
            var out = [];
            var titles = win.tabs.title(), urls = win.tabs.url(), locations = win.tabs.location();
            for (var k = 0; k < titles.length; k++) {{
                if (locations[k] === "topApp") {{
                    out.push({{location: "topApp", title: titles[k], url: urls[k], tab_index: k}});
                }}
            }}
            var spaces = win.spaces;
            for (var j = 0; j < spaces.length; j++) {{
                var spaceTitle = spaces[j].title() || "";
                var tabs = spaces[j].tabs;
                var sTitles = tabs.title(), sUrls = tabs.url(), sLocations = tabs.location();
                for (var t = 0; t < sTitles.length; t++) {{
                    if (sLocations[t] === "topApp") continue;
                    out.push({{location: sLocations[t], title: sTitles[t], url: sUrls[t],
                              space_index: j, space_title: spaceTitle, tab_index: t}});
                }}
            }}
            return JSON.stringify(out);
        ''') or []

    def list_spaces(self, window_index: int) -> List[Dict[str, Any]]:
        return self._query(f'''
            var titles = app.windows[{int(window_index)}].spaces.title();
            var out = [];
            for (var j = 0; j < titles.length; j++) {{
                out.push({{index: j, title: titles[j] || ""}});
            }}
            return JSON.stringify(out);
        ''') or []
