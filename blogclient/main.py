"""Application entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Sequence

from blogclient.config import get_settings
from blogclient.logging import bind_context, configure_logging, logger
from blogclient.services.exceptions import FetchError
from blogclient.services.posts import PostService, create_http_client
from blogclient.views.post_list import PostListController, resolve_initial_page


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogclient", description="Fetch a page of blog posts and print the view state."
    )
    parser.add_argument("--page", type=int, default=1, help="Listing page to load.")
    parser.add_argument("--keyword", help="Load the keyword listing instead of a plain page.")
    parser.add_argument(
        "--search",
        action="append",
        default=[],
        help="Title search to type into the view; repeat to simulate a burst.",
    )
    return parser


def render_state(controller: PostListController) -> str:
    return json.dumps(
        {
            "items": [item.to_payload() for item in controller.items],
            "pageNumber": controller.page_number,
            "canShowPagination": controller.can_show_pagination,
            "pageNumbers": list(controller.page_numbers),
        },
        ensure_ascii=False,
    )


async def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level_value, json_output=settings.log_json)
    bind_context(environment=settings.environment)

    async with create_http_client(settings.api) as client:
        service = PostService(client)
        try:
            initial = await resolve_initial_page(service, page=args.page, keyword=args.keyword)
            controller = PostListController(
                service, initial, quiet_period=settings.search.quiet_period_seconds
            )
            for query in args.search:
                controller.search(query)
            await controller.drain()
        except FetchError as exc:
            logger.error("blogclient_failed", endpoint=exc.endpoint, error=str(exc))
            return 1

    logger.info("blogclient_done", item_count=len(controller.items))
    print(render_state(controller))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
