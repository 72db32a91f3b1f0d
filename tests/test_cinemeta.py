"""
Tests for the Cinemeta catalog resolver
"""
import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock
from app.core.errors import ResolverFailure
from app.models.stremio import MetaItem
from app.services.cache import CacheManager
from app.services.cinemeta import CinemetaCatalogResolver
from app.services.dispatcher import ResourceDispatcher


def make_session(status=200, payload=None, error=None):
    """Build a fake aiohttp session whose get() yields one response"""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.raise_for_status = MagicMock(side_effect=error)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def resolver(fake_redis):
    return CinemetaCatalogResolver(
        base_url="https://cinemeta.test/",
        cache=CacheManager(client=fake_redis),
        rate_limit=0,
    )


@pytest.mark.asyncio
async def test_fetch_meta(resolver, sample_cinemeta_meta):
    """Test a meta is fetched from the series meta route"""
    resolver.session = make_session(payload={"meta": sample_cinemeta_meta})

    meta = await resolver.fetch_meta("tt0903747")

    assert meta.id == "tt0903747"
    assert meta.name == "Breaking Bad"
    resolver.session.get.assert_called_once_with("https://cinemeta.test/meta/series/tt0903747.json")


@pytest.mark.asyncio
async def test_fetch_meta_cached(resolver, sample_cinemeta_meta, fake_redis):
    """Test a second fetch is served from Redis"""
    resolver.session = make_session(payload={"meta": sample_cinemeta_meta})

    await resolver.fetch_meta("tt0903747")
    meta = await resolver.fetch_meta("tt0903747")

    assert meta.name == "Breaking Bad"
    assert resolver.session.get.call_count == 1
    assert await fake_redis.exists("cinemeta:series:tt0903747") == 1


@pytest.mark.asyncio
async def test_fetch_meta_not_found(resolver):
    """Test a 404 means the id is unknown"""
    resolver.session = make_session(status=404)

    assert await resolver.fetch_meta("tt0000001") is None


@pytest.mark.asyncio
async def test_fetch_meta_empty_payload(resolver):
    """Test an empty meta object means the id is unknown"""
    resolver.session = make_session(payload={"meta": {}})

    assert await resolver.fetch_meta("tt0000001") is None


@pytest.mark.asyncio
async def test_fetch_meta_server_error(resolver):
    """Test upstream errors are raised, not hidden"""
    error = aiohttp.ClientResponseError(request_info=MagicMock(), history=(), status=503)
    resolver.session = make_session(status=503, error=error)

    with pytest.raises(aiohttp.ClientResponseError):
        await resolver.fetch_meta("tt0903747")


@pytest.mark.asyncio
async def test_resolve_keeps_order_and_drops_unknown(resolver):
    """Test resolve follows input order and skips unknown ids"""
    metas = {
        "tt1": {"id": "tt1", "type": "series", "name": "One"},
        "tt3": {"id": "tt3", "type": "series", "name": "Three"},
    }

    async def fake_fetch(id):
        meta = metas.get(id)
        return None if meta is None else MetaItem.model_validate(meta)

    resolver.fetch_meta = AsyncMock(side_effect=fake_fetch)

    result = await resolver.resolve(["tt3", "tt2", "tt1", "tt3"])

    assert [meta.id for meta in result] == ["tt3", "tt1"]
    assert resolver.fetch_meta.await_count == 3


@pytest.mark.asyncio
async def test_dispatcher_wraps_cinemeta_errors(resolver, manifest, stream_resolver):
    """Test transport errors become a ResolverFailure at the dispatcher"""
    resolver.session = make_session()
    resolver.session.get.side_effect = aiohttp.ClientConnectionError("connection reset")
    dispatcher = ResourceDispatcher(manifest, resolver, stream_resolver, timeout=5.0)

    with pytest.raises(ResolverFailure):
        await dispatcher.catalog_last_videos("lastVideosIds=tt0903747.json")
