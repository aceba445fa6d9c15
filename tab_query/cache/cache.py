"""Expiring on-disk snapshot of static tab records."""

import json
import logging
import math
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..exceptions import CacheCorruptError
from ..models import TabRecord, record_from_dict

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CacheSnapshot:
    """Records collected at ``timestamp`` (epoch seconds)."""
    records: List[TabRecord]
    timestamp: float


def parse_snapshot(text: str) -> CacheSnapshot:
    """
    Parse cache file content.

    All lines but the last hold the JSON record array, the last line holds
    the epoch timestamp.

    Raises:
        CacheCorruptError: If any part of the content cannot be parsed
    """
    lines = text.rstrip("\n").split("\n")
    if len(lines) < 2:
        raise CacheCorruptError("Cache has no timestamp line")

    try:
        timestamp = float(lines[-1])
    except ValueError:
        raise CacheCorruptError(f"Malformed cache timestamp: {lines[-1]!r}") from None
    if not math.isfinite(timestamp):
        raise CacheCorruptError(f"Cache timestamp is not finite: {lines[-1]!r}")

    try:
        raw_records = json.loads("\n".join(lines[:-1]))
    except json.JSONDecodeError as e:
        raise CacheCorruptError(f"Malformed cache records: {e}") from e
    if not isinstance(raw_records, list):
        raise CacheCorruptError("Cache records are not a list")

    return CacheSnapshot(records=[record_from_dict(r) for r in raw_records], timestamp=timestamp)


def read(path: PathLike) -> Optional[CacheSnapshot]:
    """
    Read a cache snapshot.

    Args:
        path: Cache file path

    Returns:
        The snapshot, or None if the file is missing or cannot be parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        logger.debug("No tab cache at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Unreadable tab cache %s: %s", path, e)
        return None

    try:
        return parse_snapshot(text)
    except CacheCorruptError as e:
        logger.debug("Ignoring corrupt tab cache %s: %s", path, e)
        return None


def write(path: PathLike, records: Sequence[TabRecord], timestamp: Optional[float] = None) -> None:
    """
    Replace the cache snapshot with ``records``.

    The content is written to a temporary file next to the target and moved
    over it, so readers never see a partial file. Failures are logged.

    Args:
        path: Cache file path
        records: Records to store
        timestamp: Snapshot time (defaults to now)
    """
    if timestamp is None:
        timestamp = time.time()
    content = json.dumps([r.to_dict() for r in records], ensure_ascii=False) + "\n" + repr(float(timestamp)) + "\n"

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
    except (OSError, ValueError) as e:
        # ValueError covers titles that cannot be encoded, such as lone surrogates
        logger.warning("Failed to write tab cache to %s: %s", path, e)


def is_valid(snapshot: CacheSnapshot, ttl_seconds: float, now: Optional[float] = None) -> bool:
    """Check whether the snapshot is at most ``ttl_seconds`` old (inclusive)."""
    if now is None:
        now = time.time()
    return now - snapshot.timestamp <= ttl_seconds


def flush(path: PathLike) -> bool:
    """
    Delete the cache snapshot.

    Returns:
        True if a snapshot was removed
    """
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False


class StaticCache:
    """Cache of the slow-changing tab records for one workflow instance."""

    def __init__(self, path: PathLike, ttl_seconds: float, clock=time.time):
        """
        Initialize the cache.

        Args:
            path: Cache file path
            ttl_seconds: Snapshot lifetime in seconds
            clock: Callable returning the current epoch time
        """
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def load(self) -> Optional[List[TabRecord]]:
        """
        Get the cached records.

        Returns:
            Records of a fresh snapshot, or None on a miss or expiry
        """
        snapshot = read(self.path)
        if snapshot is None:
            return None
        if not is_valid(snapshot, self.ttl_seconds, now=self._clock()):
            logger.debug("Tab cache expired (written at %s)", snapshot.timestamp)
            return None
        return snapshot.records

    def store(self, records: Sequence[TabRecord]) -> None:
        """Overwrite the snapshot with ``records``."""
        write(self.path, records, timestamp=self._clock())

    def flush(self) -> bool:
        """Delete the snapshot."""
        return flush(self.path)


__all__ = [
    'CacheSnapshot',
    'StaticCache',
    'parse_snapshot',
    'read',
    'write',
    'is_valid',
    'flush',
]
