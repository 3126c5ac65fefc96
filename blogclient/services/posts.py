"""Read access to the remote post listing and search endpoints."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from blogclient.config import ApiSettings
from blogclient.domain.models import ResultPage
from blogclient.logging import logger
from blogclient.services.exceptions import ServerFailure, TransportFailure

DETAIL_CHAR_LIMIT = 500


def create_http_client(settings: ApiSettings | None = None, **kwargs: Any) -> httpx.AsyncClient:
    """Build the shared client used by every service in the process."""

    settings = settings or ApiSettings()
    return httpx.AsyncClient(
        base_url=str(settings.base_url),
        timeout=settings.request_timeout_seconds,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        **kwargs,
    )


class PostService:
    """Fetches pages of post summaries and normalizes them into ``ResultPage``.

    No caching and no retries: every call is one GET, and any failure is
    raised to the caller as ``TransportFailure`` or ``ServerFailure``.
    """

    LIST_PATH = "/v1/post"
    KEYWORD_PATH = "/v1/post/keyword/{keyword}"
    TITLE_PATH = "/v1/post/title"

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def list(self, page: int = 1) -> ResultPage:
        return await self._fetch(self.LIST_PATH, params={"page": page})

    async def list_by_keyword(self, keyword: str) -> ResultPage:
        path = self.KEYWORD_PATH.format(keyword=quote(keyword, safe=""))
        return await self._fetch(path)

    async def search_by_title(self, query: str) -> ResultPage:
        return await self._fetch(self.TITLE_PATH, params={"q": query})

    async def _fetch(self, endpoint: str, params: dict[str, Any] | None = None) -> ResultPage:
        logger.debug("posts_request", endpoint=endpoint, params=params)
        try:
            response = await self._client.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            detail = exc.response.text[:DETAIL_CHAR_LIMIT]
            logger.warning(
                "posts_request_failed",
                endpoint=endpoint,
                kind="server",
                status_code=status_code,
                error=detail,
            )
            raise ServerFailure(
                f"Post request failed ({status_code}): {detail}",
                endpoint=endpoint,
                status_code=status_code,
                detail=detail,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "posts_request_failed", endpoint=endpoint, kind="transport", error=str(exc)
            )
            raise TransportFailure(f"Post request failed: {exc}", endpoint=endpoint) from exc

        try:
            return ResultPage.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "posts_request_failed", endpoint=endpoint, kind="payload", error=str(exc)
            )
            raise ServerFailure(
                f"Unexpected post payload: {exc}",
                endpoint=endpoint,
                status_code=response.status_code,
                detail=response.text[:DETAIL_CHAR_LIMIT],
            ) from exc


__all__ = ["PostService", "create_http_client"]
