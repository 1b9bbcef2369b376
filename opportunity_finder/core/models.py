"""Data models shared by the classifier, the search aggregator and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from opportunity_finder.core.config import SearchDefaults


class WebsiteType(str, Enum):
    NONE = "none"
    FACEBOOK = "facebook"
    YELP = "yelp"
    OTHER = "other"
    LEGITIMATE = "legitimate"


class BusinessStatus(str, Enum):
    """Google Places ``business_status`` values, plus ``unknown`` when it is missing."""

    OPERATIONAL = "OPERATIONAL"
    TEMPORARILY_CLOSED = "TEMPORARILY_CLOSED"
    PERMANENTLY_CLOSED = "PERMANENTLY_CLOSED"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BusinessStatus":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class Location:
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class SocialProfiles:
    facebook: Optional[str] = None
    yelp: Optional[str] = None
    instagram: Optional[str] = None
    other: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for platform in ("facebook", "yelp", "instagram"):
            url = getattr(self, platform)
            if url is not None:
                data[platform] = url
        if self.other:
            data["other"] = list(self.other)
        return data


@dataclass(frozen=True, slots=True)
class ImprovementFlags:
    needs_phone: bool
    needs_photos: bool
    needs_social_media: bool
    needs_website: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            "needsPhone": self.needs_phone,
            "needsPhotos": self.needs_photos,
            "needsSocialMedia": self.needs_social_media,
            "needsWebsite": self.needs_website,
        }


@dataclass(frozen=True, slots=True)
class Business:
    """Normalized, classified view of a Google Places record."""

    id: str
    name: str
    address: str
    location: Location
    category: Tuple[str, ...]
    website_type: WebsiteType
    social_profiles: SocialProfiles
    business_status: BusinessStatus
    improvements: ImprovementFlags
    last_updated: datetime
    search_query: str
    website_url: Optional[str] = None
    phone_number: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys the dashboard front end reads."""
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "location": self.location.to_dict(),
            "category": list(self.category),
            "websiteType": self.website_type.value,
            "websiteUrl": self.website_url,
            "socialProfiles": self.social_profiles.to_dict(),
            "phoneNumber": self.phone_number,
            "businessStatus": self.business_status.value,
            "improvements": self.improvements.to_dict(),
            "lastUpdated": self.last_updated.isoformat(),
            "searchQuery": self.search_query,
        }


def _split_list(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [item.strip() for item in raw if item and item.strip()]


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be numeric") from None


def _parse_website_type(raw: str, name: str) -> WebsiteType:
    try:
        return WebsiteType(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in WebsiteType)
        raise ValueError(f"{name} must be one of: {allowed}") from None


@dataclass(frozen=True)
class SearchParameters:
    location: str
    radius: int = SearchDefaults.radius
    categories: Tuple[str, ...] = ()
    website_type: Optional[WebsiteType] = None
    exclude_website_types: Tuple[WebsiteType, ...] = ()
    limit: int = SearchDefaults.limit
    skip: int = 0

    def __post_init__(self) -> None:
        if not self.location or not self.location.strip():
            raise ValueError("location is required")
        if self.radius <= 0:
            raise ValueError("radius must be positive")
        if self.limit < 0:
            raise ValueError("limit must not be negative")
        if self.skip < 0:
            raise ValueError("skip must not be negative")

    @classmethod
    def from_query(cls, query: Mapping[str, Any], defaults: Optional[SearchDefaults] = None) -> "SearchParameters":
        """Build parameters from loosely typed query values (HTTP query string, CLI).

        List values may be given as sequences or as comma separated strings.
        Raises ``ValueError`` with a human readable message on bad input.
        """
        defaults = defaults or SearchDefaults()

        website_type_raw = query.get("websiteType") or None
        website_type = _parse_website_type(website_type_raw, "websiteType") if website_type_raw else None
        excluded = tuple(
            _parse_website_type(value, "excludeWebsiteTypes")
            for value in _split_list(query.get("excludeWebsiteTypes"))
        )

        return cls(
            location=str(query.get("location") or "").strip(),
            radius=_parse_int(query.get("radius"), "radius", defaults.radius),
            categories=tuple(_split_list(query.get("categories"))),
            website_type=website_type,
            exclude_website_types=excluded,
            limit=_parse_int(query.get("limit"), "limit", defaults.limit),
            skip=_parse_int(query.get("skip"), "skip", 0),
        )


@dataclass(slots=True)
class SearchResult:
    businesses: List[Business] = field(default_factory=list)
    # Unique places found before any filtering, not len(businesses).
    total_count: int = 0
    has_more: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "businesses": [business.to_dict() for business in self.businesses],
            "totalCount": self.total_count,
            "hasMore": self.has_more,
        }
