"""Client utilities for the 2GIS Catalog API (geocoding and branch search)."""

import logging
import math
from typing import Any, Dict, List, Optional, Type, Union

import requests

from cityinfo.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://catalog.api.2gis.com/3.0"

DEALER_QUERY = "автосалон"
RESULT_TYPE = "branch"
PAGE_SIZE = 10
SEARCH_FIELDS = "items.point,items.name,items.address_name,items.rubrics,items.contacts,items.schedule"
_NOT_FOUND = 404


class DgisError(RuntimeError):
    """Raised when the 2GIS API returns a non-successful or unusable response."""


class GeocodeError(DgisError):
    """Raised when a place name cannot be resolved to a coordinate."""


class SearchError(DgisError):
    """Raised when the branch search request fails or returns a malformed body."""


def extract_items(payload: Dict[str, Any]) -> List[Any]:
    """Return catalog items from either the ``result.items`` or the flat ``items`` envelope."""
    result = payload.get("result")
    if isinstance(result, dict) and isinstance(result.get("items"), list):
        return result["items"]
    items = payload.get("items")
    if isinstance(items, list):
        return items
    return []


def radius_to_meters(radius_km: float) -> Union[int, float]:
    meters = radius_km * 1000
    if float(meters).is_integer():
        return int(meters)
    return meters


def _meta_error(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    meta = payload.get("meta")
    if not isinstance(meta, dict):
        return None
    code = meta.get("code")
    if isinstance(code, int) and code >= 400:
        error = meta.get("error") if isinstance(meta.get("error"), dict) else {}
        return {"code": code, "message": error.get("message") or error.get("type") or f"HTTP {code}"}
    return None


class DgisClient:
    """Stateless 2GIS client; holds only the API key, session and timeout."""

    def __init__(self, api_key: str, *, session: Optional[requests.Session] = None, timeout: float = 10) -> None:
        self.api_key = api_key
        self.session = session or _SESSION
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, Any], error_cls: Type[DgisError]) -> Dict[str, Any]:
        try:
            response = self.session.get(f"{_BASE_URL}/{path}", params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("2GIS %s request failed: %s", path, exc)
            raise error_cls(f"2GIS request failed: {exc}") from exc

        if not isinstance(payload, dict):
            logger.error("2GIS %s returned a non-object body: %r", path, str(payload)[:200])
            raise error_cls("2GIS returned a malformed response")
        return payload

    def geocode_city(self, city: str) -> Coordinate:
        """Resolve ``city`` to the coordinate of the provider's best match."""
        params = {"q": city, "key": self.api_key, "type": "city", "fields": "items.point"}
        logger.info("Geocoding city=%s", city)
        payload = self._get("geo/search", params, GeocodeError)

        result = payload.get("result")
        items = result.get("items") if isinstance(result, dict) else None
        if not isinstance(items, list) or not items:
            error = _meta_error(payload)
            if error and error["code"] != _NOT_FOUND:
                logger.error("geocode failed: code=%s, message=%s", error["code"], error["message"])
                raise GeocodeError(error["message"])
            raise GeocodeError(f"No geocoding results for '{city}'")

        first = items[0]
        point = first.get("point") if isinstance(first, dict) else None
        try:
            lat, lon = float(point["lat"]), float(point["lon"])
        except (TypeError, KeyError, ValueError) as exc:
            raise GeocodeError(f"Geocoding result for '{city}' has no usable point") from exc
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise GeocodeError(f"Geocoding result for '{city}' has no usable point")
        return Coordinate(latitude=lat, longitude=lon)

    def search_items(self, lat: float, lon: float, radius_km: float) -> List[Any]:
        """Return the first page of car dealership branches around ``(lat, lon)``."""
        params = {
            "key": self.api_key,
            "q": DEALER_QUERY,
            "point": f"{lon},{lat}",
            "radius": radius_to_meters(radius_km),
            "type": RESULT_TYPE,
            "fields": SEARCH_FIELDS,
            "page_size": PAGE_SIZE,
        }
        logger.info("Searching dealers point=%s radius=%s", params["point"], params["radius"])
        payload = self._get("items", params, SearchError)

        error = _meta_error(payload)
        if error:
            if error["code"] == _NOT_FOUND:
                logger.info("No dealers found around point=%s", params["point"])
                return []
            logger.error("search failed: code=%s, message=%s", error["code"], error["message"])
            raise SearchError(error["message"])

        items = extract_items(payload)
        logger.info("Fetched %d catalog items", len(items))
        return items
