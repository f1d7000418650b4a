"""File-based JSON response cache with TTL freshness.

Each cache entry is one pretty-printed JSON file under the cache directory.
Freshness is decided from the file's modification time alone; no expiry
metadata is stored. Stale entries are ignored by get() and overwritten by the
next put() for the same key.

This module provides:
- Deterministic cache keys for trade and municipality queries
- TTL-checked reads that never raise
- Optional pruning of stale entry files
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Optional

from ..config import Settings

logger = logging.getLogger(__name__)

# Default cache directory (relative to the working directory)
DEFAULT_CACHE_DIR = Path(".cache") / "reinfo"

# Default TTL (7 days)
DEFAULT_TTL_DAYS = 7

SECONDS_PER_DAY = 24 * 60 * 60


def trade_cache_key(city: str, year: str, quarter: Optional[str] = None) -> str:
    """Cache key for a trade query.

    A missing quarter gets no suffix, so it never collides with "_q<n>".
    An empty quarter string means "no quarter", the same as None, matching
    ReinfolibClient which omits the quarter parameter for both.
    """
    suffix = f"_q{quarter}" if quarter else ""
    return f"trades_{city}_{year}{suffix}"


def city_cache_key(area: str) -> str:
    """Cache key for a municipality list query."""
    return f"cities_{area}"


class ResponseCache:
    """JSON file cache for API responses.

    Example:
        cache = ResponseCache(cache_dir=Path(".cache/reinfo"), ttl_days=7)

        key = trade_cache_key("13101", "2024")
        payload = cache.get(key)
        if payload is None:
            payload = fetch_somehow()
            cache.put(key, payload)

        # Remove stale files left behind by earlier runs
        deleted = cache.prune_expired()
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        ttl_days: float = DEFAULT_TTL_DAYS,
    ):
        """Initialize the response cache.

        Args:
            cache_dir: Directory holding the entry files.
                      Defaults to ./.cache/reinfo. Created lazily on first put().
            ttl_days: Maximum entry age in days (default 7)
        """
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.ttl_days = ttl_days

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResponseCache":
        return cls(cache_dir=settings.cache_dir, ttl_days=settings.cache_ttl_days)

    @property
    def ttl_seconds(self) -> float:
        return self.ttl_days * SECONDS_PER_DAY

    def path_for(self, key: str) -> Path:
        """Location of the entry file for a key."""
        return self.cache_dir / f"{key}.json"

    def _age_seconds(self, path: Path) -> float:
        return time.time() - path.stat().st_mtime

    def get(self, key: str) -> Optional[Any]:
        """Read a fresh entry.

        Args:
            key: Cache key (see trade_cache_key / city_cache_key)

        Returns:
            The deserialized payload, or None if the entry is missing,
            stale, unreadable or not valid JSON
        """
        path = self.path_for(key)
        try:
            age = self._age_seconds(path)
            if age > self.ttl_seconds:
                logger.debug(f"Cache stale for {key} (age {age:.0f}s)")
                return None
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Cache miss for {key}")
            return None
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable cache entry {path}: {e}")
            return None

        logger.debug(f"Cache hit for {key}")
        return payload

    def put(self, key: str, payload: Any) -> Path:
        """Write an entry, replacing any existing file for the key.

        Args:
            key: Cache key
            payload: JSON-serializable data

        Returns:
            Path of the written file

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
        path.write_text(f"{text}\n", encoding="utf-8")
        logger.info(f"Cached {key} -> {path}")
        return path

    def _entry_files(self) -> list[Path]:
        if not self.cache_dir.is_dir():
            return []
        return sorted(self.cache_dir.glob("*.json"))

    def prune_expired(self) -> int:
        """Delete entry files older than the TTL.

        Never called implicitly; stale entries are otherwise left in place.

        Returns:
            Number of files deleted
        """
        deleted = 0
        for path in self._entry_files():
            try:
                if self._age_seconds(path) > self.ttl_seconds:
                    path.unlink()
                    deleted += 1
            except FileNotFoundError:
                continue

        if deleted > 0:
            logger.info(f"Pruned {deleted} expired cache entries")
        return deleted

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dict with entry counts and storage size
        """
        total = 0
        active = 0
        size_bytes = 0
        for path in self._entry_files():
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            total += 1
            size_bytes += stat.st_size
            if time.time() - stat.st_mtime <= self.ttl_seconds:
                active += 1

        return {
            "cache_dir": str(self.cache_dir),
            "total_entries": total,
            "active_entries": active,
            "expired_entries": total - active,
            "storage_bytes": size_bytes,
            "storage_mb": round(size_bytes / (1024 * 1024), 2),
        }
