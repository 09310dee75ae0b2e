"""Utilities for transforming provider responses into the frontend's JSON shapes."""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from cityinfo.core.geo import haversine_km
from cityinfo.models import Conversion, Coordinate, Dealer, ExchangeRates, NormalizedListing, Weather

logger = logging.getLogger(__name__)

DEALER_KEYWORDS = ("авто", "car", "auto")
DEFAULT_NAME = "Car Dealership"
DEFAULT_ADDRESS = "Address not available"
DEFAULT_PHONE = "Phone not available"


def _safe_float(value: Any) -> float:
    try:
        if value is None:
            return 0.0
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _float_or_none(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _str_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def normalize_listing(raw: Dict[str, Any]) -> NormalizedListing:
    """Collapse an untrusted 2GIS item into a fully-defaulted listing."""
    rubrics = raw.get("rubrics")
    category_names = [
        str(rubric.get("name") or "") for rubric in (rubrics if isinstance(rubrics, list) else []) if isinstance(rubric, dict)
    ]
    point = raw.get("point") if isinstance(raw.get("point"), dict) else {}
    contacts = raw.get("contacts")

    return NormalizedListing(
        name=_str_or_none(raw.get("name")),
        category_names=category_names,
        address=_str_or_none(raw.get("address_name")),
        latitude=_safe_float(point.get("lat")),
        longitude=_safe_float(point.get("lon")),
        contacts=[c for c in contacts if isinstance(c, dict)] if isinstance(contacts, list) else [],
        id=_str_or_none(raw.get("id")),
    )


def is_dealer(listing: NormalizedListing) -> bool:
    """Keyword heuristic over name and rubric names, case-insensitive."""
    haystack = f"{listing.name or ''} {' '.join(listing.category_names)}".lower()
    return any(keyword in haystack for keyword in DEALER_KEYWORDS)


def resolve_phone(contacts: List[Dict[str, Any]]) -> str:
    """First phone-type contact, else the first contact of any type."""
    phone = next((c for c in contacts if c.get("type") == "phone"), {})
    value = phone.get("value") or (contacts[0].get("value") if contacts else None)
    return str(value) if value else DEFAULT_PHONE


def to_dealer(listing: NormalizedListing, origin: Coordinate) -> Dealer:
    distance = haversine_km(origin.latitude, origin.longitude, listing.latitude, listing.longitude)
    return Dealer(
        name=listing.name or DEFAULT_NAME,
        address=listing.address or DEFAULT_ADDRESS,
        distance_km=f"{distance:.1f}",
        coordinates=Coordinate(latitude=listing.latitude, longitude=listing.longitude),
        phone=resolve_phone(listing.contacts),
        id=listing.id,
    )


def format_dealers(items: Iterable[Any], origin: Coordinate) -> List[Dealer]:
    """Filter, map and sort raw catalog items by distance from ``origin``.

    The sort key is the rounded distance string, so dealers that round to the
    same value keep the order in which the provider returned them.
    """
    dealers: List[Dealer] = []
    for raw in items:
        if not isinstance(raw, dict):
            logger.debug("Skipping non-object catalog item: %r", raw)
            continue
        listing = normalize_listing(raw)
        if not is_dealer(listing):
            logger.debug("Skipping non-dealer listing: %s", listing.name)
            continue
        dealers.append(to_dealer(listing, origin))

    dealers.sort(key=lambda dealer: float(dealer.distance_km))
    return dealers


def _round_half_up(value: Any) -> int:
    return int(math.floor(float(value) + 0.5))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_weather(data: Dict[str, Any]) -> Weather:
    """Reshape an OpenWeather payload; raises ``ValueError`` when required fields are missing."""
    try:
        main = data["main"]
        condition = data["weather"][0]
        coord = data["coord"]
        sys_info = data.get("sys") or {}
        wind = data.get("wind") or {}
        rain = data.get("rain") or {}
        return Weather(
            temperature=_round_half_up(main["temp"]),
            description=condition.get("description"),
            coordinates=Coordinate(latitude=coord["lat"], longitude=coord["lon"]),
            feels_like=_round_half_up(main["feels_like"]),
            wind_speed=wind.get("speed") or 0,
            country_code=sys_info.get("country"),
            rain_volume=rain.get("3h") or None,
            city=data.get("name"),
            icon=condition.get("icon"),
        )
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed weather payload: missing {exc}") from exc


def to_exchange_rates(data: Dict[str, Any], base_currency: str) -> ExchangeRates:
    return ExchangeRates(
        base_currency=data.get("base_code") or base_currency,
        date=data.get("time_last_update_utc") or _now_iso(),
        rates=data.get("conversion_rates") or data.get("rates") or {},
    )


def to_conversion(data: Dict[str, Any], from_currency: str, to_currency: str, amount: float) -> Conversion:
    rate = _float_or_none(data.get("conversion_rate"))
    converted = _float_or_none(data.get("conversion_result"))
    if not converted and rate is not None:
        converted = amount * rate
    return Conversion(
        from_currency=from_currency,
        to_currency=to_currency,
        amount=amount,
        converted_amount=converted,
        rate=rate,
        date=data.get("time_last_update_utc") or _now_iso(),
    )
