import asyncio

import httpx
import pytest

from opportunity_finder.core.config import ConfigError
from opportunity_finder.vendors import google_places


class DummyTransport:
    """Serves canned JSON payloads and records the requests it sees."""

    def __init__(self, payload=None, status_code=200):
        self.payload = payload or {}
        self.status_code = status_code
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


def _call(transport, method, *args, **kwargs):
    async def run():
        async with google_places.GooglePlacesClient("key", transport=httpx.MockTransport(transport)) as client:
            return await getattr(client, method)(*args, **kwargs)

    return asyncio.run(run())


def test_client_requires_api_key():
    with pytest.raises(ConfigError):
        google_places.GooglePlacesClient("")


def test_geocode_success():
    transport = DummyTransport({"status": "OK", "results": [{"geometry": {"location": {"lat": 40.7, "lng": -74.0}}}]})

    assert _call(transport, "geocode", "New York") == (40.7, -74.0)
    request = transport.requests[0]
    assert "geocode" in request.url.path
    assert request.url.params["address"] == "New York"
    assert request.url.params["key"] == "key"


def test_geocode_error_status():
    transport = DummyTransport({"status": "ZERO_RESULTS", "results": []})

    with pytest.raises(google_places.GeocodeError) as excinfo:
        _call(transport, "geocode", "Nowhere")

    assert excinfo.value.status == "ZERO_RESULTS"
    assert "Nowhere" in str(excinfo.value)


def test_geocode_error_keeps_google_message():
    transport = DummyTransport({"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."})

    with pytest.raises(google_places.GeocodeError) as excinfo:
        _call(transport, "geocode", "Gotham")

    assert str(excinfo.value) == "Geocoding failed for 'Gotham': REQUEST_DENIED: The provided API key is invalid."
    assert excinfo.value.error_message == "The provided API key is invalid."


def test_nearby_search_with_type():
    transport = DummyTransport({"status": "OK", "results": [{"place_id": "a"}]})

    payload = _call(transport, "nearby_search", (1.5, 2.5), 2000, type_="bakery")

    assert payload["results"] == [{"place_id": "a"}]
    params = transport.requests[0].url.params
    assert "nearbysearch" in transport.requests[0].url.path
    assert params["location"] == "1.5000000,2.5000000"
    assert params["radius"] == "2000"
    assert params["type"] == "bakery"
    assert "keyword" not in params


def test_nearby_search_page_token_only():
    transport = DummyTransport({"status": "OK", "results": []})

    _call(transport, "nearby_search", (1.5, 2.5), 2000, keyword="a b", pagetoken="tok")

    params = transport.requests[0].url.params
    assert params["pagetoken"] == "tok"
    assert "location" not in params
    assert "keyword" not in params


def test_nearby_search_zero_results_is_not_an_error():
    transport = DummyTransport({"status": "ZERO_RESULTS", "results": []})

    payload = _call(transport, "nearby_search", (0, 0), 500)

    assert payload["status"] == "ZERO_RESULTS"


def test_nearby_search_error_status():
    transport = DummyTransport({"status": "OVER_QUERY_LIMIT", "error_message": "limit"})

    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        _call(transport, "nearby_search", (0, 0), 500)

    assert excinfo.value.status == "OVER_QUERY_LIMIT"
    assert excinfo.value.error_message == "limit"


def test_place_details_success():
    transport = DummyTransport({"status": "OK", "result": {"name": "Acme"}})

    result = _call(transport, "place_details", "pid")

    assert result["name"] == "Acme"
    params = transport.requests[0].url.params
    assert params["place_id"] == "pid"
    assert params["fields"].split(",") == list(google_places.DETAIL_FIELDS)


def test_place_details_error():
    transport = DummyTransport({"status": "NOT_FOUND"})

    with pytest.raises(google_places.GooglePlacesError):
        _call(transport, "place_details", "pid")


def test_http_error_is_raised():
    transport = DummyTransport({}, status_code=500)

    with pytest.raises(httpx.HTTPStatusError):
        _call(transport, "place_details", "pid")
