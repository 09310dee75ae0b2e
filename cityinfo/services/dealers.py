"""Dealer search: geocode, catalog search and result formatting."""

import logging
from typing import List

from cityinfo.core.errors import UpstreamError
from cityinfo.etl.transform import format_dealers
from cityinfo.models import Coordinate, Dealer
from cityinfo.vendors.dgis import DgisClient, DgisError

logger = logging.getLogger(__name__)

CITY_RADIUS_KM = 10
DEFAULT_RADIUS_KM = 10


class DealerService:
    def __init__(self, client: DgisClient) -> None:
        self.client = client

    def _search(self, lat: float, lon: float, radius_km: float) -> List[Dealer]:
        items = self.client.search_items(lat, lon, radius_km)
        return format_dealers(items or [], Coordinate(latitude=lat, longitude=lon))

    def find_by_city(self, city: str) -> List[Dealer]:
        """Geocode ``city`` and return nearby dealers sorted by distance."""
        try:
            origin = self.client.geocode_city(city)
            return self._search(origin.latitude, origin.longitude, CITY_RADIUS_KM)
        except DgisError as exc:
            logger.warning("Dealer lookup for city=%s failed: %s", city, exc)
            raise UpstreamError(f"Failed to fetch dealers: {exc}") from exc

    def find_by_coordinates(self, lat: float, lon: float, radius_km: float = DEFAULT_RADIUS_KM) -> List[Dealer]:
        try:
            return self._search(lat, lon, radius_km)
        except DgisError as exc:
            logger.warning("Dealer lookup at %s,%s failed: %s", lat, lon, exc)
            raise UpstreamError(f"Failed to fetch dealers: {exc}") from exc
