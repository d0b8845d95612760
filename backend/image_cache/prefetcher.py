"""
Image Prefetcher

Warms remote images ahead of display:
- Downloads the image over HTTP
- Verifies the payload decodes as an image (SVG passes through)
- Reports any failure as PrefetchError
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Protocol
from urllib.parse import urlparse

import httpx
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class PrefetchError(Exception):
    """Raised when an image could not be prefetched."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to prefetch {uri}: {reason}")


class ImagePrefetcher(Protocol):
    """Anything that can warm an image given its URI."""

    async def prefetch(self, uri: str) -> None:
        ...


@dataclass
class PrefetchConfig:
    """Configuration for HTTP image prefetching."""
    timeout: float = 15.0           # Download timeout in seconds
    max_image_size_mb: int = 10     # Larger bodies are rejected
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024


class HttpImagePrefetcher:
    """
    Prefetches images with a shared httpx.AsyncClient.

    Usage:
        prefetcher = HttpImagePrefetcher(config)
        await prefetcher.prefetch("https://example.com/a.jpg")
        await prefetcher.close()
    """

    def __init__(
        self,
        config: Optional[PrefetchConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or PrefetchConfig()
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "image/avif,image/webp,image/apng,image/svg+xml,image/*,*/*;q=0.8",
            },
        )

    async def close(self):
        """Close HTTP client if this prefetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()

    @staticmethod
    def _is_svg(uri: str, data: bytes) -> bool:
        """Detect SVG by URL extension or content signature."""
        if urlparse(uri).path.lower().endswith(".svg"):
            return True
        header = data[:500].strip()
        return header.startswith((b"<svg", b"<?xml")) or b"<svg" in header

    def _verify_image(self, uri: str, data: bytes) -> None:
        if self._is_svg(uri, data):
            logger.debug(f"[ImagePrefetcher] SVG detected, skipping decode: {uri[:60]}...")
            return

        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except Image.DecompressionBombError as e:
            logger.warning(f"[ImagePrefetcher] Decompression bomb rejected: {uri[:60]}...")
            raise PrefetchError(uri, f"Image dimensions too large: {e}") from e
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise PrefetchError(uri, f"Undecodable image data: {e}") from e

    async def prefetch(self, uri: str) -> None:
        parsed = urlparse(uri)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise PrefetchError(uri, f"Invalid URL: {uri[:60]}")

        logger.info(f"[ImagePrefetcher] Fetching: {uri[:80]}...")

        try:
            response = await self.http_client.get(uri)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"[ImagePrefetcher] Timeout: {uri[:60]}...")
            raise PrefetchError(uri, "Download timeout") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"[ImagePrefetcher] HTTP error {e.response.status_code}: {uri[:60]}...")
            raise PrefetchError(uri, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"[ImagePrefetcher] Fetch error: {e}")
            raise PrefetchError(uri, str(e) or type(e).__name__) from e

        data = response.content
        if len(data) > self.config.max_image_size_bytes:
            logger.warning(f"[ImagePrefetcher] Image too large ({len(data)} bytes): {uri[:50]}...")
            raise PrefetchError(
                uri, f"Image too large (max {self.config.max_image_size_mb}MB)"
            )

        self._verify_image(uri, data)
        logger.info(f"[ImagePrefetcher] Prefetched: {uri[:60]}... ({len(data)} bytes)")
