"""CLI job to search for businesses that lack a proper website."""

import argparse
import asyncio
import json
import logging
from typing import List, Optional

from opportunity_finder.core.config import ConfigError, get_settings
from opportunity_finder.core.models import SearchParameters, SearchResult, WebsiteType
from opportunity_finder.jobs.search import search_businesses
from opportunity_finder.vendors.google_places import GooglePlacesClient

logger = logging.getLogger(__name__)


async def run_search_job(params: SearchParameters) -> SearchResult:
    settings = get_settings()
    api_key = settings.google_api_key
    if not api_key:
        raise ConfigError("GOOGLE_API_KEY is required")

    logger.info("Running business search for location=%s radius=%d", params.location, params.radius)
    async with GooglePlacesClient(api_key, timeout=settings.request_timeout) as client:
        result = await search_businesses(params, client, settings.defaults)

    logger.info(
        "Completed search: returned=%d total_unique=%d has_more=%s",
        len(result.businesses),
        result.total_count,
        result.has_more,
    )
    return result


def build_parser() -> argparse.ArgumentParser:
    defaults = get_settings().defaults
    website_types = [website_type.value for website_type in WebsiteType]

    parser = argparse.ArgumentParser(description="Find businesses without a proper website")
    parser.add_argument("--location", dest="location", required=True, help="Address or area to search around")
    parser.add_argument("--radius", dest="radius", type=int, default=defaults.radius, help="Search radius in meters")
    parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=[],
        help="Place type to search for; repeat for a keyword search over several",
    )
    parser.add_argument("--website-type", dest="website_type", choices=website_types, help="Only keep this website type")
    parser.add_argument(
        "--exclude",
        dest="exclude_website_types",
        action="append",
        choices=website_types,
        default=[],
        help="Drop businesses with this website type; repeatable",
    )
    parser.add_argument("--limit", dest="limit", type=int, default=defaults.limit, help="Page size")
    parser.add_argument("--skip", dest="skip", type=int, default=0, help="Results to skip for pagination")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        params = SearchParameters(
            location=args.location,
            radius=args.radius,
            categories=tuple(args.categories),
            website_type=WebsiteType(args.website_type) if args.website_type else None,
            exclude_website_types=tuple(WebsiteType(value) for value in args.exclude_website_types),
            limit=args.limit,
            skip=args.skip,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        result = asyncio.run(run_search_job(params))
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # noqa: BLE001
        logger.error("Business search failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
