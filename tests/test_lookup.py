import json

import pytest

from cityinfo.core.errors import UpstreamError
from cityinfo.jobs import lookup
from cityinfo.services.factory import Services
from test_server import FakeDealers, FakeExchange, FakeWeather


@pytest.fixture
def services(monkeypatch):
    fakes = Services(weather=FakeWeather(), exchange=FakeExchange(), dealers=FakeDealers())
    monkeypatch.setattr(lookup, "build_services", lambda: fakes)
    return fakes


def test_build_parser_defaults():
    args = lookup.build_parser().parse_args(["dealers", "--lat", "1", "--lon", "2"])
    assert args.radius == 10.0
    assert (args.lat, args.lon) == (1.0, 2.0)


def test_dealers_by_city_prints_json(services, capsys):
    assert lookup.main(["dealers", "--city", "Moscow"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["name"] == "Auto Center"
    assert services.dealers.calls == [("city", "Moscow")]


def test_convert_uppercases_codes(services, capsys):
    assert lookup.main(["convert", "--from", "usd", "--to", "eur", "--amount", "10"]) == 0
    assert services.exchange.calls == [("convert", "USD", "EUR", 10.0)]


def test_upstream_error_exits_non_zero(services):
    services.dealers.error = UpstreamError("Failed to fetch dealers: boom")
    assert lookup.main(["dealers", "--city", "X"]) == 1


def test_dealers_requires_location(services):
    with pytest.raises(SystemExit):
        lookup.main(["dealers"])


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "abc"])
def test_non_finite_coordinates_are_rejected(services, value):
    with pytest.raises(SystemExit):
        lookup.main(["dealers", "--lat", value, "--lon", "1"])
    assert services.dealers.calls == []


def test_finite_float_accepts_numbers():
    assert lookup.finite_float("55.75") == 55.75
