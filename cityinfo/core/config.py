"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    openweather_api_key: str
    exchangerate_api_key: str
    dealer_api_key: str
    port: int = 3000
    request_timeout: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    openweather_api_key = os.getenv("OPENWEATHER_API_KEY", "")
    exchangerate_api_key = os.getenv("EXCHANGERATE_API_KEY", "")
    dealer_api_key = os.getenv("DEALER_API_KEY") or os.getenv("DGIS_API_KEY", "")
    port = int(os.getenv("PORT", "3000"))
    request_timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))

    if not openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not configured; weather requests will fail.")
    if not exchangerate_api_key:
        logger.warning("EXCHANGERATE_API_KEY is not configured; exchange rate requests will fail.")
    if not dealer_api_key:
        logger.warning("DEALER_API_KEY (or DGIS_API_KEY) is not configured; dealer searches will fail.")

    return Settings(
        openweather_api_key=openweather_api_key,
        exchangerate_api_key=exchangerate_api_key,
        dealer_api_key=dealer_api_key,
        port=port,
        request_timeout=request_timeout,
    )
