"""Wire vendor clients into services from settings."""

from dataclasses import dataclass
from typing import Optional

from cityinfo.core.config import Settings, get_settings
from cityinfo.services.dealers import DealerService
from cityinfo.services.exchange import ExchangeService
from cityinfo.services.weather import WeatherService
from cityinfo.vendors.dgis import DgisClient
from cityinfo.vendors.exchangerate import ExchangeRateClient
from cityinfo.vendors.openweather import OpenWeatherClient


@dataclass(frozen=True)
class Services:
    weather: WeatherService
    exchange: ExchangeService
    dealers: DealerService


def build_services(settings: Optional[Settings] = None) -> Services:
    settings = settings or get_settings()
    timeout = settings.request_timeout
    return Services(
        weather=WeatherService(OpenWeatherClient(settings.openweather_api_key, timeout=timeout)),
        exchange=ExchangeService(ExchangeRateClient(settings.exchangerate_api_key, timeout=timeout)),
        dealers=DealerService(DgisClient(settings.dealer_api_key, timeout=timeout)),
    )
