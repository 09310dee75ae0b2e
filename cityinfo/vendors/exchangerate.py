"""Client utilities for the exchangerate-api.com v6 API."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://v6.exchangerate-api.com/v6"


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


class ExchangeRateError(RuntimeError):
    """Raised when exchangerate-api returns a non-successful response."""


class ExchangeRateClient:
    def __init__(self, api_key: str, *, session: Optional[requests.Session] = None, timeout: float = 10) -> None:
        self.api_key = api_key
        self.session = session or _SESSION
        self.timeout = timeout

    def _get(self, path: str) -> Dict[str, Any]:
        try:
            response = self.session.get(f"{_BASE_URL}/{self.api_key}/{path}", timeout=self.timeout)
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("exchange rate request %s failed: %s", path, exc)
            raise ExchangeRateError(str(exc)) from exc

        if not isinstance(payload, dict):
            raise ExchangeRateError("exchangerate-api returned a malformed response")
        if payload.get("result") == "error" or response.status_code >= 400:
            error_type = payload.get("error-type") or f"HTTP {response.status_code}"
            logger.error("exchange rate request %s failed: error_type=%s", path, error_type)
            raise ExchangeRateError(error_type)
        return payload

    def latest(self, base: str) -> Dict[str, Any]:
        logger.info("Fetching latest rates for base=%s", base)
        return self._get(f"latest/{base}")

    def pair(self, from_currency: str, to_currency: str, amount: float) -> Dict[str, Any]:
        logger.info("Converting %s %s to %s", amount, from_currency, to_currency)
        return self._get(f"pair/{from_currency}/{to_currency}/{_format_amount(amount)}")
