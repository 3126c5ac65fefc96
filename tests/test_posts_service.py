"""Tests for PostService request shaping and failure mapping."""

from __future__ import annotations

import json

import httpx
import pytest

from blogclient.config import ApiSettings
from blogclient.logging import configure_logging
from blogclient.services.exceptions import ServerFailure, TransportFailure
from blogclient.services.posts import PostService, create_http_client


def page_payload(items=None, page=1, total=0):
    return {"items": items or [], "pageNumber": page, "totalPages": total}


@pytest.mark.asyncio
async def test_list_requests_page_and_normalizes_body(make_service, requests_seen):
    posts = [{"id": 7, "title": "Hello", "content": "<p>hi</p>"}]
    service = make_service(lambda request: httpx.Response(200, json=page_payload(posts, 2, 5)))

    result = await service.list(2)

    assert requests_seen[0].url.path == "/v1/post"
    assert requests_seen[0].url.params["page"] == "2"
    assert result.page_number == 2
    assert result.total_pages == 5
    assert [item.to_payload() for item in result.items] == posts


@pytest.mark.asyncio
async def test_list_defaults_to_first_page(make_service, requests_seen):
    service = make_service(lambda request: httpx.Response(200, json=page_payload()))

    await service.list()

    assert requests_seen[0].url.params["page"] == "1"


@pytest.mark.asyncio
async def test_list_by_keyword_encodes_path_segment(make_service, requests_seen):
    service = make_service(lambda request: httpx.Response(200, json=page_payload()))

    await service.list_by_keyword("c++/rust")

    assert requests_seen[0].url.raw_path == b"/v1/post/keyword/c%2B%2B%2Frust"


@pytest.mark.asyncio
async def test_search_by_title_forwards_blank_query(make_service, requests_seen):
    service = make_service(lambda request: httpx.Response(200, json=page_payload()))

    result = await service.search_by_title("  ")

    assert requests_seen[0].url.path == "/v1/post/title"
    assert requests_seen[0].url.params["q"] == "  "
    assert result.items == ()
    assert result.total_pages == 0


@pytest.mark.asyncio
async def test_snake_case_payload_is_accepted(make_service):
    service = make_service(
        lambda request: httpx.Response(
            200, json={"items": [{"id": "a"}], "page_number": 3, "total_pages": 4}
        )
    )

    result = await service.list(3)

    assert result.page_number == 3
    assert result.total_pages == 4


@pytest.mark.asyncio
async def test_non_success_status_raises_server_failure(make_service):
    service = make_service(lambda request: httpx.Response(503, text="maintenance"))

    with pytest.raises(ServerFailure) as excinfo:
        await service.list(1)

    assert excinfo.value.status_code == 503
    assert excinfo.value.detail == "maintenance"
    assert excinfo.value.endpoint == "/v1/post"
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_transport_error_raises_transport_failure(make_service):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)

    with pytest.raises(TransportFailure) as excinfo:
        await service.search_by_title("python")

    assert excinfo.value.endpoint == "/v1/post/title"


@pytest.mark.asyncio
async def test_unusable_body_raises_server_failure(make_service):
    service = make_service(lambda request: httpx.Response(200, json={"pageNumber": 0}))

    with pytest.raises(ServerFailure):
        await service.list(1)


@pytest.mark.asyncio
async def test_failures_are_not_retried(make_service, requests_seen):
    service = make_service(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(ServerFailure):
        await service.list_by_keyword("python")

    assert len(requests_seen) == 1


@pytest.mark.asyncio
async def test_create_http_client_applies_settings():
    settings = ApiSettings(base_url="https://api.blog.example/", request_timeout_seconds=3)
    async with create_http_client(settings) as client:
        assert str(client.base_url) == "https://api.blog.example/"
        assert client.timeout.read == 3
        assert client.headers["User-Agent"] == settings.user_agent
        assert isinstance(PostService(client), PostService)


@pytest.mark.asyncio
@pytest.mark.parametrize("post_id", [1.5, {"$oid": "abc"}, ["a", 1]])
async def test_post_ids_of_any_shape_pass_through(make_service, post_id):
    posts = [{"id": post_id, "t": "x"}, {"_id": "mongo", "title": "no id"}]
    service = make_service(lambda request: httpx.Response(200, json=page_payload(posts, 1, 1)))

    result = await service.list(1)

    assert [item.to_payload() for item in result.items] == posts


@pytest.mark.asyncio
async def test_server_failure_detail_is_truncated_and_logged(make_service, capsys):
    configure_logging()
    body = "e" * 800
    service = make_service(lambda request: httpx.Response(500, text=body))

    with pytest.raises(ServerFailure) as excinfo:
        await service.list(1)

    assert excinfo.value.detail == "e" * 500
    assert str(excinfo.value) == f"Post request failed (500): {'e' * 500}"

    lines = capsys.readouterr().out.strip().splitlines()
    events = [json.loads(line) for line in lines if line.startswith("{")]
    failed = [e for e in events if e["event"] == "posts_request_failed"]
    assert failed[0]["kind"] == "server"
    assert failed[0]["status_code"] == 500
    assert len(failed[0]["error"]) == 500
