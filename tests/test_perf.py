"""
Performance smoke tests (skipped by default).
Run with RUN_PERF_TESTS=1 to enable.
"""
import asyncio
import os
import time

import pytest

from app.services.resolvers import FixtureStreamResolver


@pytest.mark.asyncio
@pytest.mark.perf
async def test_concurrent_requests_smoke(client):
    if not os.getenv("RUN_PERF_TESTS"):
        pytest.skip("RUN_PERF_TESTS not set")

    paths = [
        "/manifest.json",
        "/catalog/series/last-videos/lastVideosIds=tt7772588,kitsu:44081,zzz-unknown.json",
        "/stream/movie/tt1254207.json",
        "/stream/series/unknown.json",
    ] * 50

    start = time.perf_counter()
    responses = await asyncio.gather(*(client.get(path) for path in paths))
    elapsed = time.perf_counter() - start

    assert all(response.status_code == 200 for response in responses)
    # Stateless handlers: identical requests give identical bodies
    assert len({responses[1].text, responses[5].text, responses[9].text}) == 1
    assert elapsed < 10.0


@pytest.mark.asyncio
@pytest.mark.perf
async def test_stream_lookup_smoke():
    if not os.getenv("RUN_PERF_TESTS"):
        pytest.skip("RUN_PERF_TESTS not set")

    from app.models.stremio import ContentType

    resolver = FixtureStreamResolver()

    start = time.perf_counter()
    for _ in range(10_000):
        await resolver.resolve(ContentType.MOVIE, "tt1254207.json")
    elapsed = time.perf_counter() - start

    assert elapsed < 5.0
