"""
Performance Utilities Module

Rate limiting, short-lived memoization and image sizing helpers.
"""

from .performance import (
    DEFAULT_SCREEN_WIDTH,
    ImageSize,
    debounce,
    get_optimal_image_size,
    memoize_with_expiry,
    throttle,
)

__all__ = [
    "DEFAULT_SCREEN_WIDTH",
    "ImageSize",
    "debounce",
    "get_optimal_image_size",
    "memoize_with_expiry",
    "throttle",
]
