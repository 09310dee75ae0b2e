"""Client utilities for the OpenWeather current weather API."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherError(RuntimeError):
    """Raised when OpenWeather returns a non-successful response."""


class OpenWeatherClient:
    def __init__(self, api_key: str, *, session: Optional[requests.Session] = None, timeout: float = 10) -> None:
        self.api_key = api_key
        self.session = session or _SESSION
        self.timeout = timeout

    def current(self, **query: Any) -> Dict[str, Any]:
        """Fetch current conditions for ``q=<city>`` or ``lat``/``lon`` in metric units."""
        params = {**query, "appid": self.api_key, "units": "metric"}
        logger.info("Fetching weather for %s", query)
        try:
            response = self.session.get(_BASE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("weather request failed: %s", exc)
            raise WeatherError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.error("weather failed: status=%s, message=%s", response.status_code, message)
            raise WeatherError(message or f"OpenWeather request failed with HTTP {response.status_code}")
        if not isinstance(payload, dict) or not payload:
            raise WeatherError("OpenWeather returned an empty payload")
        return payload
