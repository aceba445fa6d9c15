"""Custom exception classes for the tab query engine."""


class TabQueryError(Exception):
    """Base exception for tab query errors."""
    pass


class ConfigError(TabQueryError, ValueError):
    """Exception raised when a configuration value is invalid."""
    pass


class SourceError(TabQueryError):
    """Exception raised for errors talking to the browser application."""
    pass


class SourceUnavailableError(SourceError):
    """Exception raised when the browser application is not installed or reachable."""

    def __init__(self, app_name: str, detail: str = ""):
        self.app_name = app_name
        message = f"{app_name} application not found"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class LaunchTimedOutError(SourceError):
    """Exception raised when the browser application opens no window before the launch timeout."""

    def __init__(self, app_name: str, timeout: float):
        self.app_name = app_name
        self.timeout = timeout
        super().__init__(f"{app_name} did not open a window within {timeout:g}s")


class AppleScriptError(SourceError):
    """Exception raised for osascript execution errors."""
    pass


class CacheError(TabQueryError):
    """Exception raised for tab cache errors."""
    pass


class CacheCorruptError(CacheError):
    """Exception raised when a cache snapshot cannot be parsed."""
    pass
