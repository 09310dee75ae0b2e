"""CLI job to run a single weather, exchange rate or dealer lookup."""

import argparse
import json
import logging
import math
import sys
from typing import Any, List, Optional

from cityinfo.core.errors import UpstreamError
from cityinfo.services.factory import Services, build_services

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised when a subcommand is missing the arguments it needs."""


def finite_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{raw!r} is not a number") from exc
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"{raw!r} is not a finite number")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the aggregation services from the command line")
    commands = parser.add_subparsers(dest="command", required=True)

    dealers = commands.add_parser("dealers", help="Find car dealerships near a city or coordinate")
    dealers.add_argument("--city", help="City name to geocode")
    dealers.add_argument("--lat", type=finite_float, help="Latitude of the search center")
    dealers.add_argument("--lon", type=finite_float, help="Longitude of the search center")
    dealers.add_argument("--radius", type=finite_float, default=10.0, help="Search radius in km")

    weather = commands.add_parser("weather", help="Current weather for a city or coordinate")
    weather.add_argument("--city", help="City name")
    weather.add_argument("--lat", type=finite_float, help="Latitude")
    weather.add_argument("--lon", type=finite_float, help="Longitude")

    rates = commands.add_parser("rates", help="Latest exchange rates")
    rates.add_argument("--base", default="USD", help="Base currency code")

    convert = commands.add_parser("convert", help="Convert an amount between currencies")
    convert.add_argument("--from", dest="from_currency", required=True, help="Source currency code")
    convert.add_argument("--to", dest="to_currency", required=True, help="Target currency code")
    convert.add_argument("--amount", type=finite_float, required=True, help="Amount to convert")
    return parser


def _has_point(args: argparse.Namespace) -> bool:
    return args.lat is not None and args.lon is not None


def run_lookup(args: argparse.Namespace, services: Services) -> Any:
    """Dispatch parsed arguments to a service and return a JSON-serialisable payload."""
    if args.command == "dealers":
        if args.city:
            dealers = services.dealers.find_by_city(args.city)
        elif _has_point(args):
            dealers = services.dealers.find_by_coordinates(args.lat, args.lon, args.radius)
        else:
            raise UsageError("dealers requires --city or both --lat and --lon")
        return [dealer.to_dict() for dealer in dealers]

    if args.command == "weather":
        if args.city:
            return services.weather.by_city(args.city).to_dict()
        if _has_point(args):
            return services.weather.by_coordinates(args.lat, args.lon).to_dict()
        raise UsageError("weather requires --city or both --lat and --lon")

    if args.command == "rates":
        return services.exchange.latest_rates(args.base.upper()).to_dict()

    return services.exchange.convert(args.from_currency.upper(), args.to_currency.upper(), args.amount).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        payload = run_lookup(args, build_services())
    except UsageError as exc:
        parser.error(str(exc))
    except UpstreamError as exc:
        logger.error("%s", exc)
        return 1

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
