"""Configuration for the tab query engine."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError

SEARCH_METHODS = ("substring", "tokenized")
DISPLAY_ORDERS = ("", "sorted_alphabetically")

DEFAULT_CACHE_DIR = os.path.expanduser("~/.cache/tab-query")
DEFAULT_ICON_DIR = "./script-filter-item-icons"
CACHE_FILE_NAME = "tabs.cache"


def _flag(env: Mapping[str, str], name: str, default: str) -> bool:
    value = env.get(name, default).strip()
    if value not in ("0", "1"):
        raise ConfigError(f"Invalid value '{value}' for {name}. Must be 0 or 1")
    return value == "1"


def _number(env: Mapping[str, str], name: str, default: str) -> float:
    value = env.get(name, default).strip()
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"Invalid value '{value}' for {name}. Must be a number") from None


@dataclass(frozen=True)
class Config:
    """Immutable configuration, built once per invocation."""

    search_method: str = "tokenized"
    include_top_tabs: bool = True
    include_pinned_tabs: bool = True
    include_unpinned_tabs: bool = True
    include_spaces: bool = True
    display_order: str = ""
    use_cache: bool = False
    cache_dir: str = DEFAULT_CACHE_DIR
    # Cache lifetime in minutes
    cache_life: float = 10.0
    source_app: str = "Arc"
    # Seconds to wait for a launched app to open a window; None waits forever
    launch_timeout: Optional[float] = None
    icon_dir: str = DEFAULT_ICON_DIR
    debug: bool = False

    def __post_init__(self):
        self._validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Config":
        """
        Build the configuration from workflow environment variables.

        Args:
            environ: Variables to read (defaults to os.environ)
            dotenv: Whether to load a .env file into os.environ first

        Returns:
            Validated Config

        Raises:
            ConfigError: If a variable has an invalid value
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        launch_timeout = environ.get("launch_timeout", "").strip()
        return cls(
            search_method=environ.get("search_method", "tokenized").strip().lower(),
            include_top_tabs=_flag(environ, "includeTopTabs", "1"),
            include_pinned_tabs=_flag(environ, "includePinnedTabs", "1"),
            include_unpinned_tabs=_flag(environ, "includeUnpinnedTabs", "1"),
            include_spaces=_flag(environ, "includeSpaces", "1"),
            display_order=environ.get("displayOrder", "").strip(),
            use_cache=_flag(environ, "use_cache", "0"),
            cache_dir=os.path.expanduser(environ.get("alfred_workflow_cache") or DEFAULT_CACHE_DIR),
            cache_life=_number(environ, "cache_life", "10"),
            source_app=environ.get("source_app", "").strip() or "Arc",
            launch_timeout=_number(environ, "launch_timeout", "0") if launch_timeout else None,
            icon_dir=environ.get("icon_dir") or DEFAULT_ICON_DIR,
            debug=_flag(environ, "debug", "0"),
        )

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir) / CACHE_FILE_NAME

    @property
    def cache_ttl(self) -> float:
        """Cache lifetime in seconds."""
        return self.cache_life * 60

    def _validate(self):
        """Validate configuration values."""
        if self.search_method not in SEARCH_METHODS:
            raise ConfigError(
                f"Invalid search method '{self.search_method}'. "
                f"Must be one of: {', '.join(SEARCH_METHODS)}"
            )

        if self.display_order not in DISPLAY_ORDERS:
            raise ConfigError(
                f"Invalid display order '{self.display_order}'. "
                f"Must be empty or 'sorted_alphabetically'"
            )

        if self.cache_life < 0:
            raise ConfigError(f"Cache life must not be negative, got {self.cache_life}")

        if self.launch_timeout is not None and self.launch_timeout <= 0:
            raise ConfigError(f"Launch timeout must be positive, got {self.launch_timeout}")


__all__ = ["Config", "SEARCH_METHODS", "DISPLAY_ORDERS", "CACHE_FILE_NAME"]
