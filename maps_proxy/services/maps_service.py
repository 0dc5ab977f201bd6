from typing import Any, Dict, Optional

import httpx

from maps_proxy.config import (
    DEFAULT_CALLBACK,
    GEOCODE_URL,
    MAPS_SCRIPT_URL,
    PLACE_DETAILS_FIELDS,
    PLACE_DETAILS_URL,
    PLACES_OK_STATUSES,
    PLACES_TEXT_SEARCH_URL,
    UPSTREAM_LANGUAGE,
    Settings,
)
from maps_proxy.exceptions import (
    BadRequestError,
    UpstreamHTTPError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from maps_proxy.http_client import HttpClient
from maps_proxy.logging_config import log_structured
from maps_proxy.metrics import UPSTREAM_REQUEST_COUNT


class MapsService:
    """Forwards whitelisted calls to the maps provider.

    The front-end key is only ever used for the script endpoint, whose body is
    handed to the browser. Every JSON endpoint uses the server key.
    """

    def __init__(self, settings: Settings, http_client: HttpClient):
        self.settings = settings
        self.http_client = http_client

    async def _fetch(self, operation: str, url: str, params: Dict[str, Any], failure: str) -> httpx.Response:
        log_structured("Proxying maps request", operation=operation, upstream=url)
        try:
            response = await self.http_client.get(url, params=params)
        except Exception as e:
            UPSTREAM_REQUEST_COUNT.labels(operation=operation, outcome="transport_error").inc()
            log_structured("Maps request failed", level="error", operation=operation, error=str(e))
            raise UpstreamTransportError(failure, e)
        UPSTREAM_REQUEST_COUNT.labels(operation=operation, outcome=str(response.status_code)).inc()
        return response

    @staticmethod
    def _parse_json(response: httpx.Response, failure: str) -> Any:
        try:
            return response.json()
        except Exception as e:
            raise UpstreamTransportError(failure, e)

    async def load_script(self, callback: Optional[str] = None, libraries: Optional[str] = None) -> str:
        params = {
            "key": self.settings.maps_api_key,
            "callback": callback or DEFAULT_CALLBACK,
        }
        if libraries:
            params["libraries"] = libraries

        response = await self._fetch("script", MAPS_SCRIPT_URL, params, "Failed to fetch Google Maps API")
        return response.text

    async def geocode(self, address: Optional[str]) -> Any:
        if not address:
            raise BadRequestError("address parameter is required")

        params = {
            "address": address,
            "key": self.settings.server_key,
            "language": UPSTREAM_LANGUAGE,
        }
        failure = "Failed to geocode address"
        response = await self._fetch("geocode", GEOCODE_URL, params, failure)
        # Geocoding results are returned as-is, whatever their status field says.
        return self._parse_json(response, failure)

    async def search_places(self, query: Optional[str]) -> Any:
        if not query:
            raise BadRequestError("query parameter is required")

        params = {
            "query": query,
            "key": self.settings.server_key,
            "language": UPSTREAM_LANGUAGE,
        }
        return await self._fetch_places("place_search", PLACES_TEXT_SEARCH_URL, params, "Failed to search places")

    async def place_details(self, place_id: Optional[str]) -> Any:
        if not place_id:
            raise BadRequestError("place_id parameter is required")

        params = {
            "place_id": place_id,
            "fields": PLACE_DETAILS_FIELDS,
            "key": self.settings.server_key,
            "language": UPSTREAM_LANGUAGE,
        }
        return await self._fetch_places("place_details", PLACE_DETAILS_URL, params, "Failed to fetch place details")

    async def _fetch_places(self, operation: str, url: str, params: Dict[str, Any], failure: str) -> Any:
        response = await self._fetch(operation, url, params, failure)

        if not response.is_success:
            log_structured("Places API returned an error status", level="warning", operation=operation, status=response.status_code)
            raise UpstreamHTTPError(
                "Places API request failed",
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
            )

        payload = self._parse_json(response, failure)
        status = payload.get("status") if isinstance(payload, dict) else None
        if status and status not in PLACES_OK_STATUSES:
            message = payload.get("error_message") or f"Places API error: {status}"
            log_structured("Places API reported a failure", level="warning", operation=operation, status=status)
            raise UpstreamStatusError(message, status=status, response=payload)

        return payload
