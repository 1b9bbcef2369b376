"""Utilities for turning Google Places responses into classified businesses."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse

from opportunity_finder.core.models import (
    Business,
    BusinessStatus,
    ImprovementFlags,
    Location,
    SocialProfiles,
    WebsiteType,
)
from opportunity_finder.etl.platforms import (
    FACEBOOK_DOMAINS,
    GENERIC_CATEGORIES,
    INSTAGRAM_DOMAINS,
    PLATFORM_DOMAINS,
    YELP_DOMAINS,
    host_matches,
)

logger = logging.getLogger(__name__)

MIN_PHOTOS = 3


class MalformedPlaceError(ValueError):
    """Raised when a Places record lacks a field every business must have."""


def _hostname(url: str) -> Optional[str]:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    return hostname.lower() if hostname else None


def determine_website_type(url: Optional[str]) -> WebsiteType:
    if not url:
        return WebsiteType.NONE

    hostname = _hostname(url)
    if not hostname:
        return WebsiteType.NONE
    if host_matches(hostname, FACEBOOK_DOMAINS):
        return WebsiteType.FACEBOOK
    if host_matches(hostname, YELP_DOMAINS):
        return WebsiteType.YELP
    if host_matches(hostname, PLATFORM_DOMAINS):
        return WebsiteType.OTHER
    # Not a known platform, so assume the business owns the site.
    return WebsiteType.LEGITIMATE


def extract_social_profiles(urls: Iterable[str]) -> SocialProfiles:
    profiles: Dict[str, Optional[str]] = {"facebook": None, "yelp": None, "instagram": None}
    other: List[str] = []
    for url in urls or []:
        hostname = _hostname(url)
        if not hostname:
            continue
        if host_matches(hostname, FACEBOOK_DOMAINS):
            profiles["facebook"] = url
        elif host_matches(hostname, YELP_DOMAINS):
            profiles["yelp"] = url
        elif host_matches(hostname, INSTAGRAM_DOMAINS):
            profiles["instagram"] = url
        else:
            other.append(url)
    return SocialProfiles(other=tuple(other), **profiles)


def compute_improvements(place: Dict[str, Any], website_type: WebsiteType) -> ImprovementFlags:
    photos = place.get("photos")
    return ImprovementFlags(
        needs_phone=not place.get("formatted_phone_number"),
        needs_photos=not photos or len(photos) < MIN_PHOTOS,
        # Places does not expose social links reliably, so this flag stays off.
        needs_social_media=False,
        needs_website=website_type is not WebsiteType.LEGITIMATE,
    )


def filter_categories(types: Iterable[str]) -> List[str]:
    return [type_name for type_name in types or [] if type_name not in GENERIC_CATEGORIES]


def _require(place: Dict[str, Any], key: str) -> Any:
    value = place.get(key)
    if value is None or value == "":
        raise MalformedPlaceError(f"Place record is missing required field {key!r}: {place.get('place_id')}")
    return value


def _location(place: Dict[str, Any]) -> Location:
    coords = (place.get("geometry") or {}).get("location") or {}
    try:
        return Location(lat=float(coords["lat"]), lng=float(coords["lng"]))
    except (KeyError, TypeError, ValueError):
        raise MalformedPlaceError(f"Place record has no usable geometry.location: {place.get('place_id')}") from None


def map_place_to_business(place: Dict[str, Any], search_query: str) -> Business:
    place_id = _require(place, "place_id")
    name = _require(place, "name")
    address = _require(place, "formatted_address")
    location = _location(place)

    website = place.get("website") or None
    website_type = determine_website_type(website)
    listing_url = place.get("url")

    types = place.get("types") or []
    category = filter_categories(types)
    if len(category) != len(types):
        logger.debug(
            "Filtered generic categories for %s: %s",
            name,
            [type_name for type_name in types if type_name in GENERIC_CATEGORIES],
        )

    return Business(
        id=place_id,
        name=name,
        address=address,
        location=location,
        category=tuple(category),
        website_type=website_type,
        website_url=website,
        social_profiles=extract_social_profiles([listing_url] if listing_url else []),
        phone_number=place.get("formatted_phone_number"),
        business_status=BusinessStatus.parse(place.get("business_status")),
        improvements=compute_improvements(place, website_type),
        last_updated=datetime.now(timezone.utc),
        search_query=search_query,
    )
