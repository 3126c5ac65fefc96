"""Shared pytest fixtures for the post service and view tests."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
import pytest_asyncio

from blogclient.config import get_settings
from blogclient.services.posts import PostService

BASE_URL = "http://blog.test"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_service(requests_seen):
    clients: list[httpx.AsyncClient] = []

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> PostService:
        def _recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(_recording))
        clients.append(client)
        return PostService(client)

    try:
        yield _factory
    finally:
        for client in clients:
            await client.aclose()
