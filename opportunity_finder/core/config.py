"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# The Places API never hands out more than three pages for one query.
MAX_NEARBY_PAGES = 3


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class SearchDefaults:
    """Search tuning handed to the aggregator; also fills values the caller leaves out."""

    radius: int = 5000
    limit: int = 20
    # Places fetched per requested result, to survive website-type filtering.
    oversample_factor: int = 3
    # Nearby Search pages followed per radius tier.
    max_pages: int = 1
    page_token_delay: float = 2.0


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 8080
    request_timeout: float = 10.0
    defaults: SearchDefaults = field(default_factory=SearchDefaults)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "")
    port = int(os.getenv("FINDER_PORT") or os.getenv("PORT") or "8080")
    request_timeout = float(os.getenv("FINDER_REQUEST_TIMEOUT", "10"))
    max_pages = int(os.getenv("FINDER_MAX_PAGES", "1"))
    page_token_delay = float(os.getenv("FINDER_PAGE_TOKEN_DELAY", "2.0"))

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; Google Places requests will fail.")
    if not 1 <= max_pages <= MAX_NEARBY_PAGES:
        logger.warning("FINDER_MAX_PAGES=%d is out of range; clamping to 1..%d.", max_pages, MAX_NEARBY_PAGES)
        max_pages = min(max(max_pages, 1), MAX_NEARBY_PAGES)

    return Settings(
        google_api_key=google_api_key,
        port=port,
        request_timeout=request_timeout,
        defaults=SearchDefaults(
            radius=int(os.getenv("FINDER_DEFAULT_RADIUS", "5000")),
            limit=int(os.getenv("FINDER_DEFAULT_LIMIT", "20")),
            oversample_factor=int(os.getenv("FINDER_OVERSAMPLE_FACTOR", "3")),
            max_pages=max_pages,
            page_token_delay=page_token_delay,
        ),
    )
