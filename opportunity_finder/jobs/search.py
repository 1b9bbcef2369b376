"""Multi-radius business search over the Google Places API."""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from opportunity_finder.core.config import SearchDefaults
from opportunity_finder.core.models import (
    Business,
    BusinessStatus,
    SearchParameters,
    SearchResult,
)
from opportunity_finder.etl.classify import map_place_to_business
from opportunity_finder.vendors.google_places import GooglePlacesClient

logger = logging.getLogger(__name__)


def search_radii(radius: float) -> List[float]:
    """Widening radii for one search.

    Nearby Search returns at most 60 places whatever the radius, so larger
    areas are covered by merging several progressively wider searches.
    """
    if radius <= 2000:
        return [radius]
    if radius <= 10000:
        return [min(2000, radius / 2), radius]
    return [2000, 5000, 10000, radius]


async def _search_tier(
    client: GooglePlacesClient,
    location: Tuple[float, float],
    radius: float,
    categories: Tuple[str, ...],
    max_pages: int,
    page_token_delay: float,
) -> List[Dict[str, Any]]:
    type_ = categories[0] if len(categories) == 1 else None
    keyword = " ".join(categories) if len(categories) > 1 else None

    # A failing first page fails the tier; later pages only cut it short.
    payload = await client.nearby_search(location, radius, type_=type_, keyword=keyword)
    places: List[Dict[str, Any]] = list(payload.get("results") or [])
    page_token = payload.get("next_page_token")
    for page in range(2, max_pages + 1):
        if not page_token:
            break
        await asyncio.sleep(page_token_delay)
        try:
            payload = await client.nearby_search(location, radius, pagetoken=page_token)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Nearby search page %d failed at radius %gm: %s", page, radius, exc)
            break
        places.extend(payload.get("results") or [])
        page_token = payload.get("next_page_token")
    return places


def _passes_filters(business: Business, params: SearchParameters) -> bool:
    if business.business_status is BusinessStatus.PERMANENTLY_CLOSED:
        return False
    if params.website_type is not None:
        return business.website_type is params.website_type
    if params.exclude_website_types:
        return business.website_type not in params.exclude_website_types
    return True


async def search_businesses(
    params: SearchParameters,
    client: GooglePlacesClient,
    defaults: Optional[SearchDefaults] = None,
) -> SearchResult:
    defaults = defaults or SearchDefaults()
    target = params.limit * defaults.oversample_factor

    location = await client.geocode(params.location)

    radii = search_radii(params.radius)
    logger.info("Searching %s with radii: %s meters", params.location, ", ".join(f"{r:g}" for r in radii))

    unique_places: Dict[str, Dict[str, Any]] = {}
    for radius in radii:
        if len(unique_places) >= target:
            break
        try:
            results = await _search_tier(
                client,
                location,
                radius,
                params.categories,
                defaults.max_pages,
                defaults.page_token_delay,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Nearby search failed at radius %gm: %s", radius, exc)
            continue

        for place in results:
            place_id = place.get("place_id")
            if place_id and place_id not in unique_places:
                unique_places[place_id] = place
        logger.info("Found %d places at radius %gm", len(results), radius)

    logger.info("Total unique places found: %d", len(unique_places))

    detailed: List[Dict[str, Any]] = []
    for place_id in unique_places:
        if len(detailed) >= target:
            break
        try:
            detailed.append(await client.place_details(place_id))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch details for %s: %s", place_id, exc)

    businesses = [
        business
        for business in (map_place_to_business(place, params.location) for place in detailed)
        if _passes_filters(business, params)
    ]

    end = params.skip + params.limit
    return SearchResult(
        businesses=businesses[params.skip:end],
        total_count=len(unique_places),
        has_more=len(businesses) > end,
    )


async def analyze_business(place_id: str, client: GooglePlacesClient) -> Business:
    """Fetch and classify a single place; Places failures propagate."""
    if not place_id:
        raise ValueError("place_id is required")
    place = await client.place_details(place_id)
    return map_place_to_business(place, "")

