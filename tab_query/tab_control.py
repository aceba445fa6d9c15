"""Space and tab control for Arc using JavaScript for Automation."""

import logging
from typing import Optional

from .models import Address
from .utils import AppleScriptExecutor, escape_script_string

logger = logging.getLogger(__name__)

# Create a module-level executor instance
_executor = AppleScriptExecutor(language="JavaScript")


def _target(address: Address) -> Optional[str]:
    """
    JXA expression for the object an address points at.

    Returns:
        Expression relative to ``app``, or None for error addresses
    """
    if address.kind == Address.SPACE:
        window_index, space_index = address.coordinates
        return f"app.windows[{window_index}].spaces[{space_index}]"
    if address.kind == Address.TOP_TAB:
        window_index, tab_index = address.coordinates
        return f"app.windows[{window_index}].tabs[{tab_index}]"
    if address.kind == Address.FULL:
        window_index, space_index, tab_index = address.coordinates
        return f"app.windows[{window_index}].spaces[{space_index}].tabs[{tab_index}]"
    return None


def _run(app_name: str, body: str) -> bool:
    app = escape_script_string(app_name)
    script = f'(function() {{ var app = Application("{app}"); {body} return ""; }})()'
    success, _, stderr = _executor.execute(script)
    if not success:
        logger.error("%s script failed: %s", app_name, stderr)
    return success


def focus(app_name: str, address: Address) -> bool:
    """
    Bring the addressed space or tab to the front.

    Args:
        app_name: Browser application name
        address: Space, top-app tab or space tab address

    Returns:
        True if successful, False otherwise
    """
    target = _target(address)
    if target is None:
        logger.error("Cannot focus %s address", address.kind)
        return False

    if address.kind == Address.SPACE:
        action = f"{target}.focus();"
    elif address.kind == Address.FULL:
        # The owning space has to be shown before one of its tabs can be selected
        action = f"app.windows[{address.window_index}].spaces[{address.coordinates[1]}].focus(); {target}.select();"
    else:
        action = f"{target}.select();"
    # Index specifiers shift when windows reorder; raise by id
    return _run(
        app_name,
        f"var windowId = app.windows[{address.window_index}].id(); {action} "
        f"app.windows.byId(windowId).index = 1; app.activate();"
    )


def close_tab(app_name: str, address: Address) -> bool:
    """
    Close the addressed tab.

    Args:
        app_name: Browser application name
        address: Top-app tab or space tab address

    Returns:
        True if successful, False otherwise
    """
    if address.kind not in (Address.TOP_TAB, Address.FULL):
        logger.error("Cannot close %s address", address.kind)
        return False
    return _run(app_name, f"{_target(address)}.close();")
