"""In-memory memoization of formatted calendar labels."""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, NamedTuple

from datepicker.logging import get_logger


class LabelKey(NamedTuple):
    """Cache key: locale, requested fields, and only the date parts they use."""

    locale: str
    options: tuple[tuple[str, str], ...]
    fields: tuple[int, ...]

    @classmethod
    def make(
        cls,
        locale: str,
        options: dict[str, str | None],
        year: int,
        month: int,
        day: int,
        weekday: int,
    ) -> "LabelKey":
        present = tuple(sorted((k, v) for k, v in options.items() if v is not None))
        names = {k for k, _ in present}
        if "weekday" in names and "day" in names:
            # The weekday of a specific day depends on the whole date.
            fields = (year, month, day, -1)
        else:
            fields = (
                year if "year" in names else -1,
                month if "month" in names else -1,
                day if "day" in names else -1,
                weekday if "weekday" in names else -1,
            )
        return cls(locale=locale, options=present, fields=fields)


@dataclass
class CacheConfig:
    enabled: bool = True
    max_entries: int = 2048  # 0 = unlimited
    track_stats: bool = True


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    current_entries: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0


class LabelCache:
    """Thread-safe LRU cache of formatter output.

    Keys drop the date parts a label does not show, so a day-number label is
    formatted once per (locale, day) no matter how many months display it.
    """

    def __init__(self, config: CacheConfig | None = None):
        self._config = config or CacheConfig()
        self._cache: OrderedDict[LabelKey, str] = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.Lock()
        self._log = get_logger(__name__)

    def _evict_if_needed(self) -> None:
        """Evict oldest entries if the limit is exceeded. Must hold _lock."""
        while self._config.max_entries > 0 and len(self._cache) > self._config.max_entries:
            self._cache.popitem(last=False)
            self._stats.evictions += 1
            self._stats.current_entries -= 1

    def get_or_format(self, key: LabelKey, format_fn: Callable[[], str]) -> str:
        if not self._config.enabled:
            return format_fn()
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                if self._config.track_stats:
                    self._stats.hits += 1
                return self._cache[key]
            if self._config.track_stats:
                self._stats.misses += 1

        # Format outside the lock; a concurrent duplicate just overwrites.
        label = format_fn()
        with self._lock:
            if key not in self._cache:
                self._stats.current_entries += 1
            self._cache[key] = label
            self._evict_if_needed()
        return label

    def clear(self) -> int:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._stats.current_entries = 0
            return count

    def reset(self) -> None:
        """Reset cache to initial state including stats."""
        with self._lock:
            self._cache.clear()
            self._stats = CacheStats()

    def get_stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                current_entries=self._stats.current_entries,
            )

    def configure(self, **kwargs) -> None:
        with self._lock:
            for k, value in kwargs.items():
                if hasattr(self._config, k):
                    setattr(self._config, k, value)
                else:
                    self._log.warning("unknown_label_cache_option", option=k)
            self._evict_if_needed()


# Module-level singleton
_label_cache: LabelCache | None = None
_cache_lock = threading.Lock()


def get_label_cache() -> LabelCache:
    global _label_cache
    if _label_cache is None:
        with _cache_lock:
            if _label_cache is None:
                _label_cache = LabelCache()
    return _label_cache


def configure_label_cache(**kwargs) -> None:
    get_label_cache().configure(**kwargs)


def clear_label_cache() -> int:
    return get_label_cache().clear()


def reset_label_cache() -> None:
    """Reset the label cache to initial state including stats."""
    get_label_cache().reset()


def get_label_cache_stats() -> CacheStats:
    return get_label_cache().get_stats()
