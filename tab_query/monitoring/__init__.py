"""Live browser monitoring: tab sources and record collection."""

from .base import TabSource
from .collector import CANONICAL_WINDOW, Collector, IncludeFlags
from .tab_monitor import ArcTabSource

__all__ = [
    'TabSource',
    'ArcTabSource',
    'Collector',
    'IncludeFlags',
    'CANONICAL_WINDOW',
]
