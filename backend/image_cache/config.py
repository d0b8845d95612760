"""
Image Cache Configuration

Settings are read from environment variables:
- IMAGE_CACHE_MAX_ENTRIES  cache capacity (default 50)
- IMAGE_PREFETCH_TIMEOUT   HTTP timeout in seconds (default 15)
- IMAGE_MAX_SIZE_MB        max prefetched image size (default 10)
- LOG_LEVEL                logging level (default INFO)
"""

import os
from dataclasses import dataclass

from .cache import DEFAULT_MAX_SIZE
from .prefetcher import PrefetchConfig


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class ImageCacheSettings:
    """Runtime settings for the image cache service."""
    max_entries: int = DEFAULT_MAX_SIZE
    prefetch_timeout: float = 15.0
    max_image_size_mb: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ImageCacheSettings":
        return cls(
            max_entries=_int_env("IMAGE_CACHE_MAX_ENTRIES", DEFAULT_MAX_SIZE),
            prefetch_timeout=_float_env("IMAGE_PREFETCH_TIMEOUT", 15.0),
            max_image_size_mb=_int_env("IMAGE_MAX_SIZE_MB", 10),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def prefetch_config(self) -> PrefetchConfig:
        return PrefetchConfig(
            timeout=self.prefetch_timeout,
            max_image_size_mb=self.max_image_size_mb,
        )
