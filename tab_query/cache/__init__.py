"""Cache package for static tab records."""

from .cache import (
    CacheSnapshot,
    StaticCache,
    flush,
    is_valid,
    read,
    write,
)

__all__ = [
    'CacheSnapshot',
    'StaticCache',
    'flush',
    'is_valid',
    'read',
    'write',
]
