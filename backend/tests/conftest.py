"""
Image cache test configuration

Shared fixtures:
- prefetcher: in-memory ImagePrefetcher double that records calls
- cache / small_cache: ImageCache instances wired to that double
- png_bytes: a tiny valid PNG payload
"""

import asyncio
import sys
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Set

import pytest
from PIL import Image

# Add backend directory to the Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from image_cache import ImageCache, PrefetchError


# ============================================
# Test doubles
# ============================================

class RecordingPrefetcher:
    """
    ImagePrefetcher double.

    URIs in `failing` raise PrefetchError; every call is recorded.
    `delays` lets a URI finish later than its siblings.
    """

    def __init__(self, failing: Optional[Set[str]] = None, delays: Optional[dict] = None):
        self.failing = set(failing or ())
        self.delays = delays or {}
        self.calls: List[str] = []

    async def prefetch(self, uri: str) -> None:
        self.calls.append(uri)
        delay = self.delays.get(uri)
        if delay:
            await asyncio.sleep(delay)
        if uri in self.failing:
            raise PrefetchError(uri, "HTTP 404")

    def call_count(self, uri: str) -> int:
        return self.calls.count(uri)


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def prefetcher():
    return RecordingPrefetcher()


@pytest.fixture
def cache(prefetcher):
    """Cache with the default capacity."""
    return ImageCache(prefetcher)


@pytest.fixture
def small_cache(prefetcher):
    """Cache with capacity 2, handy for eviction tests."""
    return ImageCache(prefetcher, max_size=2)


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


# ============================================
# Helper Functions
# ============================================

async def drain_pending_tasks():
    """Wait for tasks still running after a batch preload failed fast."""
    pending = asyncio.all_tasks() - {asyncio.current_task()}
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)


def assert_cached(cache, *uris):
    for uri in uris:
        assert uri in cache, f"Expected {uri!r} to be cached, have {cache.uris()}"


def assert_not_cached(cache, *uris):
    for uri in uris:
        assert uri not in cache, f"Expected {uri!r} to be absent, have {cache.uris()}"
