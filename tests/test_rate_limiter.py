"""
Tests for the rate limiter
"""
import pytest
from app.utils.rate_limiter import RateLimiter


def test_get_limiter_is_shared():
    """Test limiters are shared per service"""
    first = RateLimiter.get_limiter("test-service", 5)
    second = RateLimiter.get_limiter("test-service", 5)

    assert first is second


def test_get_limiter_new_rate():
    """Test a different rate replaces the shared limiter"""
    first = RateLimiter.get_limiter("test-rate-change", 5)
    second = RateLimiter.get_limiter("test-rate-change", 10)

    assert first is not second
    assert second.rate == 10


@pytest.mark.asyncio
async def test_acquire_unlimited():
    """Test rate 0 never consumes tokens"""
    limiter = RateLimiter("unlimited", 0)

    for _ in range(100):
        await limiter.acquire()

    assert limiter.tokens == 0


@pytest.mark.asyncio
async def test_acquire_consumes_tokens():
    """Test each acquire takes one token"""
    limiter = RateLimiter("consume", 10)

    await limiter.acquire()
    await limiter.acquire()

    assert limiter.tokens < 9
