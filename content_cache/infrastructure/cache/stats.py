"""
Cache hit/miss accounting.

The collector is owned by one TTLCache and incremented on every lookup.
Counters only go back to zero through reset(); expiry and flush leave them
untouched.
"""

from typing import Any


class CacheStatsCollector:
    """
    Two monotonically increasing counters and the derived hit rate.

    Usage:
        stats = CacheStatsCollector()
        stats.record_miss()
        stats.record_hit()
        stats.hit_rate()  # 0.5
    """

    def __init__(self):
        self._hits = 0
        self._misses = 0

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def record_hit(self) -> None:
        self._hits += 1

    def record_miss(self) -> None:
        self._misses += 1

    def hit_rate(self) -> float:
        """hits / (hits + misses); 0.0 before any lookup."""
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total

    def reset(self) -> None:
        """Zero both counters (management operation only)."""
        self._hits = 0
        self._misses = 0

    def snapshot(self) -> dict[str, Any]:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self.hit_rate(),
        }
