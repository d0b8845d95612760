"""
Performance Helpers

Small utilities used around image-heavy screens:
- debounce / throttle for bursty UI events (search input, scrolling)
- memoize_with_expiry for short-lived result caching
- get_optimal_image_size for fitting images to a target width
"""

import asyncio
import functools
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_SCREEN_WIDTH = 1200
DEFAULT_MEMO_TTL_SECONDS = 300.0    # 5 minutes
MEMO_CLEANUP_THRESHOLD = 100


def debounce(func: Callable[..., Any], wait: float) -> Callable[..., None]:
    """
    Delay calls to func until `wait` seconds pass without another call.

    Only the arguments of the last call are used. Must be called from
    within a running asyncio event loop. The returned wrapper has a
    cancel() method that drops a pending call.
    """
    handle: Optional[asyncio.TimerHandle] = None

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> None:
        nonlocal handle
        if handle is not None:
            handle.cancel()
        loop = asyncio.get_running_loop()
        handle = loop.call_later(wait, functools.partial(func, *args, **kwargs))

    def cancel() -> None:
        nonlocal handle
        if handle is not None:
            handle.cancel()
            handle = None

    wrapper.cancel = cancel
    return wrapper


def throttle(
    func: Callable[..., Any],
    limit: float,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[..., Any]:
    """
    Run func at most once per `limit` seconds.

    The first call runs immediately; calls inside the window are dropped
    and return None.
    """
    last_run: Optional[float] = None

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        nonlocal last_run
        now = clock()
        if last_run is not None and now - last_run < limit:
            return None
        last_run = now
        return func(*args, **kwargs)

    return wrapper


def memoize_with_expiry(
    func: Callable[..., Any],
    ttl: float = DEFAULT_MEMO_TTL_SECONDS,
    clock: Callable[[], float] = time.monotonic,
    max_entries: int = MEMO_CLEANUP_THRESHOLD,
) -> Callable[..., Any]:
    """
    Cache func results for `ttl` seconds, keyed by the JSON-encoded arguments.

    Once more than `max_entries` results are held, expired ones are purged.
    Arguments must be JSON serializable.
    """
    memo: Dict[str, Tuple[Any, float]] = {}

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        key = json.dumps([args, kwargs], sort_keys=True)
        now = clock()

        cached = memo.get(key)
        if cached is not None and now - cached[1] < ttl:
            return cached[0]

        result = func(*args, **kwargs)
        memo[key] = (result, now)

        if len(memo) > max_entries:
            expired = [k for k, (_, stamp) in memo.items() if now - stamp >= ttl]
            for k in expired:
                del memo[k]

        return result

    wrapper.cache_clear = memo.clear
    wrapper.cache_size = lambda: len(memo)
    return wrapper


@dataclass(frozen=True)
class ImageSize:
    width: float
    height: float


def get_optimal_image_size(
    original_width: float,
    original_height: float,
    max_width: Optional[float] = None,
    screen_width: float = DEFAULT_SCREEN_WIDTH,
) -> ImageSize:
    """
    Fit an image to a target width, preserving aspect ratio.

    The target is max_width when given, otherwise the screen width.
    Images already narrower than the target keep their size.
    """
    if original_width <= 0 or original_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {original_width}x{original_height}"
        )

    target_width = max_width or screen_width
    if original_width <= target_width:
        return ImageSize(original_width, original_height)

    ratio = original_height / original_width
    return ImageSize(target_width, target_width * ratio)
