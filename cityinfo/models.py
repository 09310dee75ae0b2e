"""Core data models returned by the aggregation services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

WORKING_HOURS_PLACEHOLDER = {"monday": "9:00 AM - 7:00 PM"}


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(slots=True)
class NormalizedListing:
    """Fully-defaulted view of one 2GIS catalog item, ready for filtering."""

    name: Optional[str] = None
    category_names: List[str] = field(default_factory=list)
    address: Optional[str] = None
    latitude: float = 0.0
    longitude: float = 0.0
    contacts: List[Dict[str, Any]] = field(default_factory=list)
    id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Dealer:
    """A car dealership as served to the frontend."""

    name: str
    address: str
    distance_km: str
    coordinates: Coordinate
    phone: str
    id: Optional[str] = None
    working_hours: Dict[str, str] = field(default_factory=lambda: dict(WORKING_HOURS_PLACEHOLDER))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "distance": self.distance_km,
            "workingHours": dict(self.working_hours),
            "coordinates": self.coordinates.to_dict(),
            "phone": self.phone,
            "id": self.id,
        }


@dataclass(frozen=True, slots=True)
class Weather:
    temperature: int
    description: Optional[str]
    coordinates: Coordinate
    feels_like: int
    wind_speed: float
    country_code: Optional[str]
    rain_volume: Optional[float]
    city: Optional[str]
    icon: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "description": self.description,
            "coordinates": self.coordinates.to_dict(),
            "feelsLike": self.feels_like,
            "windSpeed": self.wind_speed,
            "countryCode": self.country_code,
            "rainVolume": self.rain_volume,
            "city": self.city,
            "icon": self.icon,
        }


@dataclass(frozen=True, slots=True)
class ExchangeRates:
    base_currency: str
    date: str
    rates: Dict[str, float]
    source: str = "exchangerate-api.com"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseCurrency": self.base_currency,
            "date": self.date,
            "rates": self.rates,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class Conversion:
    from_currency: str
    to_currency: str
    amount: float
    converted_amount: Optional[float]
    rate: Optional[float]
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_currency,
            "to": self.to_currency,
            "amount": self.amount,
            "convertedAmount": self.converted_amount,
            "rate": self.rate,
            "date": self.date,
        }
