"""
Image Cache

In-memory registry of remote image URIs that have already been
prefetched or displayed, so callers can skip redundant prefetch work.

Features:
- Bounded size with FIFO eviction (oldest inserted entry goes first)
- Async prefetch-and-register through an injected ImagePrefetcher
- Batch preloading with partial progress retained on failure
"""

import asyncio
import itertools
import logging
from typing import Dict, Iterable, List

from .prefetcher import ImagePrefetcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 50


class ImageCache:
    """
    Bounded FIFO cache of image URIs.

    Re-adding a URI that is already tracked does not move it to the back
    of the eviction queue. Entries leave only through eviction or
    clear_cache(); there is no expiry.

    Usage:
        cache = ImageCache(prefetcher, max_size=50)
        await cache.preload_images(urls)
    """

    def __init__(self, prefetcher: ImagePrefetcher, max_size: int = DEFAULT_MAX_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")

        self._prefetcher = prefetcher
        self._max_size = max_size
        # uri -> logical insertion order (dict keeps insertion order)
        self._entries: Dict[str, int] = {}
        self._order = itertools.count()

    @property
    def max_size(self) -> int:
        return self._max_size

    def __contains__(self, uri: str) -> bool:
        return uri in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def has(self, uri: str) -> bool:
        """Check whether a URI is tracked."""
        return uri in self._entries

    def uris(self) -> List[str]:
        """Tracked URIs, oldest first."""
        return list(self._entries)

    def add_to_cache(self, uri: str) -> None:
        """
        Record a URI as loaded.

        A URI that is already present is left where it is. Otherwise it
        is appended, and if that pushes the cache over max_size the
        oldest entry is evicted.
        """
        if uri in self._entries:
            return

        self._entries[uri] = next(self._order)

        if len(self._entries) > self._max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"[ImageCache] Evicted: {oldest[:50]}...")

    async def preload_image(self, uri: str) -> None:
        """
        Prefetch a single image and register it on success.

        Tracked URIs return immediately without touching the prefetcher.
        Prefetch failures propagate unchanged and leave the cache as it was.
        """
        if uri in self._entries:
            logger.debug(f"[ImageCache] Already cached: {uri[:50]}...")
            return

        await self._prefetcher.prefetch(uri)
        self.add_to_cache(uri)

    async def preload_images(self, uris: Iterable[str]) -> None:
        """
        Prefetch several images concurrently.

        Fails fast: the first prefetch to fail is raised as soon as it
        completes. Sibling prefetches keep running in the background and
        still register their URIs when they succeed.
        """
        uris = list(uris)
        if not uris:
            return

        try:
            await asyncio.gather(*(self.preload_image(uri) for uri in uris))
        except Exception as e:
            logger.error(f"[ImageCache] Batch preload of {len(uris)} images failed: {e}")
            raise

        logger.info(f"[ImageCache] Preloaded {len(uris)} images")

    def clear_cache(self) -> None:
        """Remove every entry. Capacity is unchanged."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"[ImageCache] Cleared {count} entries")

    def get_cache_size(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics."""
        total = len(self._entries)
        return {
            "total_entries": total,
            "max_entries": self._max_size,
            "usage_percent": round(total / self._max_size * 100, 1),
        }
