"""Debounced free-text search."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from blogclient.domain.models import ResultPage
from blogclient.logging import logger

DEFAULT_QUIET_PERIOD = 0.35

SearchFetch = Callable[[str], Awaitable[ResultPage]]
ResultCallback = Callable[[ResultPage], None]


class DebouncedSearch:
    """Collapse bursts of ``search`` calls into one request per quiet period.

    At most one timer is scheduled at a time. A new call cancels it before it
    fires and re-arms the quiet period with the new query. Once a timer has
    fired, the request it started runs to completion and is never cancelled.
    """

    def __init__(
        self,
        fetch: SearchFetch,
        on_result: ResultCallback,
        *,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
    ) -> None:
        self._fetch = fetch
        self._on_result = on_result
        self.quiet_period = quiet_period
        self._timer: asyncio.TimerHandle | None = None
        self._requests: set[asyncio.Task[ResultPage]] = set()
        self._pending_query: str | None = None
        self.last_failure: BaseException | None = None

    @property
    def pending(self) -> bool:
        """True while a scheduled timer has not fired yet."""

        return self._timer is not None

    @property
    def in_flight(self) -> int:
        return len(self._requests)

    def search(self, query: str) -> None:
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
            logger.debug("search_superseded", query=self._pending_query)
        self._pending_query = query
        self._timer = loop.call_later(self.quiet_period, self._fire, query)
        logger.debug("search_scheduled", query=query, quiet_period=self.quiet_period)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._pending_query = None

    async def drain(self) -> None:
        """Wait for the pending timer and every fired request to settle.

        Re-raises the most recent failure not yet reported, including one from
        a request that settled before this call. Only the latest failure is
        kept; older ones were already logged.
        """

        loop = asyncio.get_running_loop()
        while self._timer is not None or self._requests:
            if self._requests:
                await asyncio.gather(*self._requests, return_exceptions=True)
                continue
            await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))
        if self.last_failure is not None:
            failure, self.last_failure = self.last_failure, None
            raise failure

    def _fire(self, query: str) -> None:
        self._timer = None
        self._pending_query = None
        task = asyncio.get_running_loop().create_task(self._run(query))
        self._requests.add(task)
        task.add_done_callback(self._request_done)

    async def _run(self, query: str) -> ResultPage:
        page = await self._fetch(query)
        self._on_result(page)
        return page

    def _request_done(self, task: asyncio.Task[ResultPage]) -> None:
        self._requests.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.last_failure = exc
            logger.error(
                "debounced_search_failed",
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )


__all__ = ["DebouncedSearch", "DEFAULT_QUIET_PERIOD"]
