import pytest

from cityinfo.core.errors import UpstreamError
from cityinfo.jobs import server
from cityinfo.models import Conversion, Coordinate, Dealer, ExchangeRates, Weather
from cityinfo.services.factory import Services

DEALER = Dealer(
    name="Auto Center",
    address="Main St 1",
    distance_km="1.2",
    coordinates=Coordinate(55.75, 37.62),
    phone="123",
    id="1",
)
WEATHER = Weather(
    temperature=20,
    description="clear sky",
    coordinates=Coordinate(55.75, 37.62),
    feels_like=19,
    wind_speed=3,
    country_code="RU",
    rain_volume=None,
    city="Moscow",
    icon="01d",
)


class FakeDealers:
    def __init__(self):
        self.calls = []
        self.error = None

    def find_by_city(self, city):
        self.calls.append(("city", city))
        if self.error:
            raise self.error
        return [DEALER]

    def find_by_coordinates(self, lat, lon, radius_km=10):
        self.calls.append(("coordinates", lat, lon, radius_km))
        if self.error:
            raise self.error
        return []


class FakeWeather:
    def __init__(self):
        self.calls = []

    def by_city(self, city):
        self.calls.append(("city", city))
        return WEATHER

    def by_coordinates(self, lat, lon):
        self.calls.append(("coordinates", lat, lon))
        raise UpstreamError("Failed to fetch weather data: boom")


class FakeExchange:
    def __init__(self):
        self.calls = []

    def latest_rates(self, base_currency="USD"):
        self.calls.append(("latest", base_currency))
        return ExchangeRates(base_currency=base_currency, date="today", rates={"EUR": 0.9})

    def convert(self, from_currency, to_currency, amount):
        self.calls.append(("convert", from_currency, to_currency, amount))
        return Conversion(from_currency, to_currency, amount, amount * 0.9, 0.9, "today")


@pytest.fixture
def services():
    return Services(weather=FakeWeather(), exchange=FakeExchange(), dealers=FakeDealers())


@pytest.fixture
def client(services):
    return server.create_app(services).test_client()


def test_health_endpoint(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "message": "API is running"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_dealers_by_city_requires_city(client, services):
    response = client.get("/api/dealers/city")
    assert response.status_code == 400
    assert response.get_json()["error"] == "City parameter is required"
    assert services.dealers.calls == []


def test_dealers_by_city_envelope(client):
    response = client.get("/api/dealers/city", query_string={"city": "Moscow"})
    body = response.get_json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["count"] == 1
    assert body["data"][0]["distance"] == "1.2"
    assert body["data"][0]["coordinates"] == {"latitude": 55.75, "longitude": 37.62}


def test_dealers_by_city_upstream_failure(client, services):
    services.dealers.error = UpstreamError("Failed to fetch dealers: No geocoding results for 'X'")
    response = client.get("/api/dealers/city", query_string={"city": "X"})
    body = response.get_json()

    assert response.status_code == 500
    assert body["success"] is False
    assert body["error"] == "Failed to fetch dealer data"
    assert body["message"].startswith("Failed to fetch dealers:")


def test_dealers_by_coordinates_defaults_radius(client, services):
    response = client.get("/api/dealers/coordinates", query_string={"lat": "55.75", "lon": "37.62"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "data": [], "count": 0}
    assert services.dealers.calls == [("coordinates", 55.75, 37.62, 10.0)]


@pytest.mark.parametrize(
    "query",
    [{"lon": "37.62"}, {"lat": "abc", "lon": "37.62"}, {"lat": "1", "lon": "2", "radius": "nan"}],
)
def test_dealers_by_coordinates_validates_numbers(client, services, query):
    response = client.get("/api/dealers/coordinates", query_string=query)
    assert response.status_code == 400
    assert services.dealers.calls == []


def test_weather_by_city(client, services):
    response = client.get("/api/weather/city", query_string={"city": "Moscow"})
    assert response.get_json()["data"]["feelsLike"] == 19
    assert services.weather.calls == [("city", "Moscow")]


def test_weather_by_coordinates_failure(client):
    response = client.get("/api/weather/coordinates", query_string={"lat": "1", "lon": "2"})
    body = response.get_json()
    assert response.status_code == 500
    assert body["error"] == "Failed to fetch weather data"


def test_exchange_latest_uppercases_base(client, services):
    response = client.get("/api/exchange/latest", query_string={"base": "eur"})
    assert response.get_json()["data"]["baseCurrency"] == "EUR"

    client.get("/api/exchange/latest")
    assert services.exchange.calls == [("latest", "EUR"), ("latest", "USD")]


def test_exchange_convert(client, services):
    response = client.get("/api/exchange/convert", query_string={"from": "usd", "to": "eur", "amount": "10"})
    assert response.get_json()["data"]["convertedAmount"] == 9.0
    assert services.exchange.calls == [("convert", "USD", "EUR", 10.0)]


def test_exchange_convert_requires_currencies(client):
    assert client.get("/api/exchange/convert", query_string={"amount": "10"}).status_code == 400
