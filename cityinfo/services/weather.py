"""Current weather lookups reshaped for the frontend."""

import logging
from typing import Any

from cityinfo.core.errors import UpstreamError
from cityinfo.etl.transform import to_weather
from cityinfo.models import Weather
from cityinfo.vendors.openweather import OpenWeatherClient, WeatherError

logger = logging.getLogger(__name__)


class WeatherService:
    def __init__(self, client: OpenWeatherClient) -> None:
        self.client = client

    def _fetch(self, **query: Any) -> Weather:
        try:
            return to_weather(self.client.current(**query))
        except (WeatherError, ValueError) as exc:
            logger.warning("Weather lookup %s failed: %s", query, exc)
            raise UpstreamError(f"Failed to fetch weather data: {exc}") from exc

    def by_city(self, city: str) -> Weather:
        return self._fetch(q=city)

    def by_coordinates(self, lat: float, lon: float) -> Weather:
        return self._fetch(lat=lat, lon=lon)
