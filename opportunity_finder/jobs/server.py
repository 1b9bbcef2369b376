"""HTTP entrypoint exposing business search to the dashboard front end."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from flask import Flask, jsonify, request

from opportunity_finder.core.config import ConfigError, get_settings
from opportunity_finder.core.models import SearchParameters
from opportunity_finder.etl.classify import MalformedPlaceError
from opportunity_finder.jobs.search import analyze_business, search_businesses
from opportunity_finder.vendors.google_places import GeocodeError, GooglePlacesClient, GooglePlacesError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)


def build_client() -> GooglePlacesClient:
    settings = get_settings()
    return GooglePlacesClient(settings.google_api_key, timeout=settings.request_timeout)


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings without calling Google."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "api_key_configured": bool(settings.google_api_key),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/api/search")
async def search() -> Any:
    """
    Search for businesses around a location.
    Required query parameter: location
    Optional: radius, categories, websiteType, excludeWebsiteTypes, limit, skip
    """
    query = {key: request.args.get(key) for key in request.args}
    for key in ("categories", "excludeWebsiteTypes"):
        values = request.args.getlist(key)
        if len(values) > 1:
            query[key] = ",".join(values)

    try:
        params = SearchParameters.from_query(query, get_settings().defaults)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    logger.info("Search request: %s", params)
    try:
        async with build_client() as client:
            result = await search_businesses(params, client, get_settings().defaults)
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 503
    except GeocodeError as exc:
        return jsonify({"error": str(exc)}), 422
    except (GooglePlacesError, MalformedPlaceError, httpx.HTTPError) as exc:
        logger.exception("Search failed for %s: %s", params.location, exc)
        return jsonify({"error": f"search failed: {exc}"}), 502

    return jsonify({"data": result.to_dict()}), 200


@app.get("/api/businesses/<place_id>")
async def business_detail(place_id: str) -> Any:
    try:
        async with build_client() as client:
            business = await analyze_business(place_id, client)
    except ConfigError as exc:
        return jsonify({"error": str(exc)}), 503
    except (GooglePlacesError, MalformedPlaceError, httpx.HTTPError) as exc:
        logger.exception("Analysis failed for %s: %s", place_id, exc)
        return jsonify({"error": f"analysis failed: {exc}"}), 502

    return jsonify({"data": business.to_dict()}), 200


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
