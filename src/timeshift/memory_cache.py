"""In-memory cache of parsed shift patterns."""

import threading
from dataclasses import dataclass
from typing import Callable, NamedTuple

from timeshift.logging import get_logger
from timeshift.spec import ShiftSpec


class CacheKey(NamedTuple):
    """Cache key: trimmed pattern text plus the unit set it was parsed with."""

    pattern: str
    subsecond: bool

    @classmethod
    def make(cls, pattern: str, subsecond: bool = True) -> "CacheKey":
        return cls(pattern=pattern.strip(), subsecond=subsecond)


@dataclass
class CacheConfig:
    enabled: bool = True
    track_stats: bool = True


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    stores: int = 0
    current_entries: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


class ShiftCache:
    """Thread-safe memo of pattern -> ShiftSpec.

    Lookups never take a lock. Stores are serialized by a single write
    lock and publish only fully built specs, so each key is built at most
    once and failed builds are never stored. Entries live as long as the
    cache object; there is no eviction.
    """

    def __init__(self, config: CacheConfig | None = None):
        self._config = config or CacheConfig()
        self._cache: dict[CacheKey, ShiftSpec] = {}
        self._stats = CacheStats()
        self._write_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._log = get_logger(__name__)

    def _count(self, name: str) -> None:
        if not self._config.track_stats:
            return
        with self._stats_lock:
            setattr(self._stats, name, getattr(self._stats, name) + 1)

    def get(self, pattern: str, subsecond: bool = True) -> ShiftSpec | None:
        if not self._config.enabled:
            return None
        key = CacheKey.make(pattern, subsecond)
        spec = self._cache.get(key)
        if spec is None:
            self._count("misses")
            return None
        self._count("hits")
        return spec

    def put(self, pattern: str, spec: ShiftSpec, subsecond: bool = True) -> ShiftSpec:
        """Store a spec unless the key is already present.

        Returns the spec now published under the key, which is the earlier
        one if another caller stored first.
        """
        if not self._config.enabled:
            return spec
        key = CacheKey.make(pattern, subsecond)
        with self._write_lock:
            existing = self._cache.get(key)
            if existing is not None:
                return existing
            self._cache[key] = spec
        self._count("stores")
        self._log.debug("shift_cache_store", pattern=key.pattern)
        return spec

    def get_or_build(
        self,
        pattern: str,
        build: Callable[[str], ShiftSpec],
        subsecond: bool = True,
    ) -> ShiftSpec:
        """Return the cached spec for a pattern, building it on a miss.

        Args:
            pattern: Pattern text; surrounding whitespace is ignored.
            build: Called with the trimmed pattern on a miss. Exceptions
                propagate and leave the cache untouched.
            subsecond: Part of the key, see ``CacheKey``.
        """
        if not self._config.enabled:
            return build(pattern.strip())
        key = CacheKey.make(pattern, subsecond)

        spec = self._cache.get(key)
        if spec is not None:
            self._count("hits")
            self._log.debug("shift_cache_hit", pattern=key.pattern)
            return spec

        with self._write_lock:
            # Another writer may have published while we waited
            spec = self._cache.get(key)
            if spec is None:
                self._count("misses")
                self._log.debug("shift_cache_miss", pattern=key.pattern)
                spec = build(key.pattern)
                self._cache[key] = spec
                self._count("stores")
                self._log.debug("shift_cache_store", pattern=key.pattern)
                return spec

        self._count("hits")
        return spec

    def __contains__(self, pattern: object) -> bool:
        if not isinstance(pattern, str):
            return False
        return any(key.pattern == pattern.strip() for key in list(self._cache))

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> int:
        with self._write_lock:
            count = len(self._cache)
            self._cache.clear()
        self._log.debug("shift_cache_cleared", entries=count)
        return count

    def reset(self) -> None:
        """Reset cache to initial state including stats."""
        with self._write_lock:
            self._cache.clear()
            with self._stats_lock:
                self._stats = CacheStats()

    def get_stats(self) -> CacheStats:
        with self._stats_lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                stores=self._stats.stores,
                current_entries=len(self._cache),
            )

    def configure(self, **kwargs) -> None:
        with self._write_lock:
            for k, value in kwargs.items():
                if hasattr(self._config, k):
                    setattr(self._config, k, value)
