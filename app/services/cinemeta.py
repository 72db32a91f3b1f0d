"""
Cinemeta Catalog Resolver
Resolves last-videos ids against the public Cinemeta addon instead of fixtures
"""
import asyncio
import aiohttp
import logging
from typing import List, Optional
from app.core.config import settings
from app.models.stremio import ContentType, MetaItem
from app.services.cache import CacheManager
from app.services.resolvers import CatalogResolver
from app.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class CinemetaCatalogResolver(CatalogResolver):
    """Catalog resolver fetching detailed metas from Cinemeta"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        cache: Optional[CacheManager] = None,
        content_type: ContentType = ContentType.SERIES,
        rate_limit: Optional[int] = None,
    ):
        self.base_url = (base_url or settings.CINEMETA_URL).rstrip("/")
        self.cache = cache or CacheManager()
        self.content_type = content_type
        self.rate_limiter = RateLimiter.get_limiter(
            "cinemeta",
            settings.CINEMETA_RATE_LIMIT if rate_limit is None else rate_limit,
        )
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.RESOLVER_TIMEOUT_SECONDS)
            )
        return self.session

    async def close(self):
        """Close aiohttp session and Redis connection"""
        if self.session and not self.session.closed:
            await self.session.close()
        await self.cache.close()

    async def fetch_meta(self, id: str) -> Optional[MetaItem]:
        """
        Fetch one meta by id

        Returns:
            MetaItem, or None when Cinemeta does not know the id

        Raises:
            aiohttp.ClientError: on transport errors and non-404 error statuses
        """
        cache_key = f"cinemeta:{self.content_type.value}:{id}"
        cached = await self.cache.get(cache_key)
        if cached:
            return MetaItem.model_validate(cached)

        await self.rate_limiter.acquire()

        url = f"{self.base_url}/meta/{self.content_type.value}/{id}.json"
        session = await self.get_session()
        async with session.get(url) as resp:
            if resp.status == 404:
                logger.debug(f"Cinemeta has no meta for {id}")
                return None
            resp.raise_for_status()
            data = await resp.json(content_type=None)

        meta = (data or {}).get("meta")
        if not meta:
            return None

        await self.cache.set(cache_key, meta, ttl=settings.CACHE_TTL_META)
        return MetaItem.model_validate(meta)

    async def resolve(self, ids: List[str]) -> List[MetaItem]:
        unique_ids = list(dict.fromkeys(ids))
        metas = await asyncio.gather(*(self.fetch_meta(id) for id in unique_ids))

        result = []
        for id, meta in zip(unique_ids, metas):
            if meta is None:
                logger.warning(f"Unmatched id: `{id}`")
                continue
            result.append(meta)

        logger.info(f"Cinemeta resolved {len(result)}/{len(unique_ids)} ids")
        return result
