"""
Image Cache Module

Keeps track of remote images that are already warm so UI callers can
skip redundant prefetches.

Features:
- Bounded in-memory cache with FIFO eviction
- Async HTTP prefetching with image decode verification
- REST endpoints for preload, register, stats and clear
"""

from .cache import ImageCache, DEFAULT_MAX_SIZE
from .config import ImageCacheSettings
from .prefetcher import HttpImagePrefetcher, ImagePrefetcher, PrefetchConfig, PrefetchError
from .routes_fastapi import router, get_image_cache

__all__ = [
    "ImageCache",
    "DEFAULT_MAX_SIZE",
    "ImageCacheSettings",
    "HttpImagePrefetcher",
    "ImagePrefetcher",
    "PrefetchConfig",
    "PrefetchError",
    "router",
    "get_image_cache",
]
