"""List/detail view state for blog posts."""

from __future__ import annotations

from dataclasses import dataclass

from blogclient.domain.models import PostSummary, ResultPage
from blogclient.logging import logger
from blogclient.services.debounce import DEFAULT_QUIET_PERIOD, DebouncedSearch
from blogclient.services.posts import PostService


@dataclass(frozen=True, slots=True)
class ViewState:
    items: tuple[PostSummary, ...]
    page_number: int
    can_show_pagination: bool
    page_numbers: tuple[int, ...]

    @classmethod
    def from_page(cls, page: ResultPage) -> "ViewState":
        return cls(
            items=page.items,
            page_number=page.page_number,
            can_show_pagination=page.total_pages > 1,
            page_numbers=tuple(range(1, page.total_pages + 1)),
        )


async def resolve_initial_page(
    service: PostService, *, page: int = 1, keyword: str | None = None
) -> ResultPage:
    """Load the page a route starts on: a keyword listing or a plain page."""

    if keyword:
        return await service.list_by_keyword(keyword)
    return await service.list(page)


class PostListController:
    """Holds the page of posts a renderer displays.

    Every refresh goes through ``apply``, which swaps the whole ``ViewState``
    in one assignment, so a reader never sees fields from two different
    pages. Responses are applied in completion order: when a slow ``list``
    resolves after a newer search, the older response wins.
    """

    def __init__(
        self,
        service: PostService,
        initial: ResultPage,
        *,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
    ) -> None:
        self._service = service
        self._search = DebouncedSearch(
            service.search_by_title, self.apply, quiet_period=quiet_period
        )
        self.state = ViewState.from_page(initial)

    @property
    def items(self) -> tuple[PostSummary, ...]:
        return self.state.items

    @property
    def page_number(self) -> int:
        return self.state.page_number

    @property
    def can_show_pagination(self) -> bool:
        return self.state.can_show_pagination

    @property
    def page_numbers(self) -> tuple[int, ...]:
        return self.state.page_numbers

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def apply(self, page: ResultPage) -> None:
        self.state = ViewState.from_page(page)
        logger.debug(
            "view_state_replaced",
            page_number=page.page_number,
            total_pages=page.total_pages,
            item_count=len(page.items),
        )

    async def list(self, page: int = 1) -> ResultPage:
        result = await self._service.list(page)
        self.apply(result)
        return result

    async def list_by_keyword(self, keyword: str) -> ResultPage:
        result = await self._service.list_by_keyword(keyword)
        self.apply(result)
        return result

    def search(self, query: str) -> None:
        self._search.search(query)

    def cancel_search(self) -> None:
        self._search.cancel()

    async def drain(self) -> None:
        await self._search.drain()


__all__ = ["PostListController", "ViewState", "resolve_initial_page"]
