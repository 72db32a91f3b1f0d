"""
Test configuration and fixtures
"""
import pytest
import fakeredis
from httpx import ASGITransport, AsyncClient


@pytest.fixture
async def fake_redis():
    """Provide fake Redis client for testing"""
    redis_client = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


@pytest.fixture
def manifest():
    """The addon manifest as served in production"""
    from app.services.manifest import build_manifest

    return build_manifest()


@pytest.fixture
def catalog_resolver():
    """Fixture-backed catalog resolver"""
    from app.services.resolvers import FixtureCatalogResolver

    return FixtureCatalogResolver()


@pytest.fixture
def stream_resolver():
    """Fixture-backed stream resolver"""
    from app.services.resolvers import FixtureStreamResolver

    return FixtureStreamResolver()


@pytest.fixture
def dispatcher(manifest, catalog_resolver, stream_resolver):
    """Dispatcher wired with the fixture resolvers"""
    from app.services.dispatcher import ResourceDispatcher

    return ResourceDispatcher(
        manifest=manifest,
        catalog_resolver=catalog_resolver,
        stream_resolver=stream_resolver,
        timeout=5.0,
    )


@pytest.fixture
async def client(manifest, catalog_resolver, stream_resolver):
    """HTTP client talking to an app built with the fixture resolvers"""
    from app.core.app import create_app

    app = create_app(
        manifest=manifest,
        catalog_resolver=catalog_resolver,
        stream_resolver=stream_resolver,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def sample_cinemeta_meta():
    """Sample Cinemeta series meta (trimmed)"""
    return {
        "id": "tt0903747",
        "imdb_id": "tt0903747",
        "type": "series",
        "name": "Breaking Bad",
        "releaseInfo": "2008-2013",
        "poster": "https://images.metahub.space/poster/small/tt0903747/img",
        "videos": [
            {"id": "tt0903747:1:1", "name": "Pilot", "season": 1, "episode": 1},
        ],
    }
