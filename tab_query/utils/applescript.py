"""osascript execution utilities."""

import json
import subprocess
from typing import Any, Optional, Tuple

from ..exceptions import AppleScriptError


def escape_script_string(text: str) -> str:
    """
    Escape special characters for a double-quoted script string literal.

    The escaping rules are shared by AppleScript and JavaScript literals.

    Args:
        text: String to escape

    Returns:
        Escaped string safe for use inside double quotes
    """
    # Escape backslashes first (must be first)
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", "\\n")
    text = text.replace("\r", "\\r")
    text = text.replace("\t", "\\t")
    return text


class AppleScriptExecutor:
    """Centralized osascript execution with standardized error handling."""

    def __init__(self, language: str = "JavaScript"):
        """
        Initialize the executor.

        Args:
            language: OSA language passed to ``osascript -l`` ("JavaScript" or "AppleScript")
        """
        self.language = language

    def execute(self, script: str, check: bool = False) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Execute a script with osascript.

        Args:
            script: Script source to execute
            check: If True, raise CalledProcessError on non-zero exit code

        Returns:
            Tuple of (success, stdout, stderr)
            - success: True if return code is 0, False otherwise
            - stdout: Standard output (None if empty)
            - stderr: Standard error (None if empty)
        """
        try:
            result = subprocess.run(
                ["osascript", "-l", self.language, "-e", script],
                capture_output=True,
                text=True,
                check=check
            )

            success = result.returncode == 0
            stdout = result.stdout.strip() if result.stdout.strip() else None
            stderr = result.stderr.strip() if result.stderr.strip() else None

            return success, stdout, stderr
        except subprocess.CalledProcessError as e:
            return False, e.stdout.strip() if e.stdout else None, e.stderr.strip() if e.stderr else None
        except OSError as e:
            return False, None, str(e)

    def execute_json(self, script: str) -> Any:
        """
        Execute a script whose result is a JSON document.

        Args:
            script: Script source; it must return ``JSON.stringify(...)``

        Returns:
            Decoded JSON value (None when the script printed nothing)

        Raises:
            AppleScriptError: If osascript fails or prints invalid JSON
        """
        success, stdout, stderr = self.execute(script)
        if not success:
            raise AppleScriptError(stderr or "osascript failed")
        if stdout is None:
            return None
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise AppleScriptError(f"Invalid JSON from osascript: {e}") from e
