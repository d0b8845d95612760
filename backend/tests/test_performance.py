"""
Performance helper tests
"""

import asyncio

import pytest

from perf_utils import (
    ImageSize,
    debounce,
    get_optimal_image_size,
    memoize_with_expiry,
    throttle,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


# ============================================
# debounce
# ============================================

class TestDebounce:

    @pytest.mark.asyncio
    async def test_burst_runs_once_with_last_args(self):
        calls = []
        search = debounce(calls.append, 0.02)

        search("c")
        search("ca")
        search("cat")
        assert calls == []

        await asyncio.sleep(0.06)
        assert calls == ["cat"]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self):
        calls = []
        search = debounce(calls.append, 0.02)

        search("cat")
        search.cancel()

        await asyncio.sleep(0.05)
        assert calls == []


# ============================================
# throttle
# ============================================

class TestThrottle:

    def test_suppresses_calls_inside_window(self):
        clock = FakeClock()
        calls = []
        on_scroll = throttle(lambda y: calls.append(y) or y, 1.0, clock=clock)

        assert on_scroll(1) == 1
        clock.advance(0.5)
        assert on_scroll(2) is None
        clock.advance(0.5)
        assert on_scroll(3) == 3

        assert calls == [1, 3]


# ============================================
# memoize_with_expiry
# ============================================

class TestMemoizeWithExpiry:

    def test_returns_cached_result_until_expiry(self):
        clock = FakeClock()
        calls = []

        def square(x):
            calls.append(x)
            return x * x

        memo = memoize_with_expiry(square, ttl=10, clock=clock)

        assert memo(3) == 9
        clock.advance(5)
        assert memo(3) == 9
        assert calls == [3]

        clock.advance(5)
        assert memo(3) == 9
        assert calls == [3, 3]

    def test_purges_expired_entries_past_threshold(self):
        clock = FakeClock()
        memo = memoize_with_expiry(lambda x: x, ttl=10, clock=clock, max_entries=3)

        for i in range(3):
            memo(i)
        clock.advance(10)
        memo(99)

        assert memo.cache_size() == 1

    def test_cache_clear(self):
        memo = memoize_with_expiry(lambda x: x)
        memo(1)
        memo.cache_clear()

        assert memo.cache_size() == 0


# ============================================
# get_optimal_image_size
# ============================================

class TestGetOptimalImageSize:

    def test_small_image_keeps_size(self):
        assert get_optimal_image_size(300, 200, screen_width=400) == ImageSize(300, 200)

    def test_scales_to_screen_width(self):
        assert get_optimal_image_size(800, 600, screen_width=400) == ImageSize(400, 300)

    def test_max_width_overrides_screen(self):
        assert get_optimal_image_size(800, 400, max_width=200, screen_width=400) == ImageSize(200, 100)

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            get_optimal_image_size(0, 100)
