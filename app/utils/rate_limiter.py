"""
Rate Limiter Utility
Token bucket rate limiter for upstream metadata APIs
"""
import asyncio
import time
from typing import Dict


class RateLimiter:
    """Token bucket rate limiter shared per upstream service"""

    _instances: Dict[str, "RateLimiter"] = {}

    def __init__(self, service_name: str, rate: int):
        self.service_name = service_name
        self.rate = rate  # requests per second, 0 = unlimited
        self.tokens = float(rate)
        self.last_update = time.monotonic()
        self.lock = asyncio.Lock()

    @classmethod
    def get_limiter(cls, service_name: str, rate: int) -> "RateLimiter":
        """Get or create the shared limiter for a service"""
        limiter = cls._instances.get(service_name)
        if limiter is None or limiter.rate != rate:
            limiter = cls(service_name, rate)
            cls._instances[service_name] = limiter
        return limiter

    async def acquire(self):
        """Take a token, sleeping until one is available"""
        if self.rate <= 0:
            return

        async with self.lock:
            now = time.monotonic()
            self.tokens = min(self.rate, self.tokens + (now - self.last_update) * self.rate)
            self.last_update = now

            if self.tokens >= 1:
                self.tokens -= 1
                return

            await asyncio.sleep((1 - self.tokens) / self.rate)
            self.tokens = 0
            self.last_update = time.monotonic()
