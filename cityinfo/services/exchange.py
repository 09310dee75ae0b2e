"""Exchange rate lookups and currency conversion."""

import logging

from cityinfo.core.errors import UpstreamError
from cityinfo.etl.transform import to_conversion, to_exchange_rates
from cityinfo.models import Conversion, ExchangeRates
from cityinfo.vendors.exchangerate import ExchangeRateClient, ExchangeRateError

logger = logging.getLogger(__name__)


class ExchangeService:
    def __init__(self, client: ExchangeRateClient) -> None:
        self.client = client

    def latest_rates(self, base_currency: str = "USD") -> ExchangeRates:
        try:
            return to_exchange_rates(self.client.latest(base_currency), base_currency)
        except ExchangeRateError as exc:
            logger.warning("Rate lookup for base=%s failed: %s", base_currency, exc)
            raise UpstreamError(f"Failed to fetch exchange rates: {exc}") from exc

    def convert(self, from_currency: str, to_currency: str, amount: float) -> Conversion:
        try:
            data = self.client.pair(from_currency, to_currency, amount)
        except ExchangeRateError as exc:
            logger.warning("Conversion %s->%s failed: %s", from_currency, to_currency, exc)
            raise UpstreamError(f"Failed to convert currency: {exc}") from exc
        return to_conversion(data, from_currency, to_currency, amount)
