"""HTTP entrypoint serving weather, exchange rate and dealer lookups as JSON."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from cityinfo.core.config import get_settings
from cityinfo.core.errors import UpstreamError
from cityinfo.services.factory import Services, build_services

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


class InvalidParameter(ValueError):
    """Raised when a query parameter is missing or not numeric."""


def _services() -> Services:
    return current_app.extensions["cityinfo"]


def _float_arg(name: str, default: Optional[float] = None) -> float:
    raw = request.args.get(name, "").strip()
    if not raw:
        if default is None:
            raise InvalidParameter(f"{name} parameter is required")
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidParameter(f"{name} must be numeric") from exc
    if math.isnan(value) or math.isinf(value):
        raise InvalidParameter(f"{name} must be numeric")
    return value


def _city_required() -> Any:
    return (
        jsonify(
            {
                "error": "City parameter is required",
                "message": "Please provide a city name in the query parameter",
            }
        ),
        400,
    )


def _upstream_failure(error: str, exc: UpstreamError) -> Any:
    return jsonify({"success": False, "error": error, "message": str(exc)}), 500


@api.errorhandler(InvalidParameter)
def invalid_parameter(exc: InvalidParameter) -> Any:
    return jsonify({"error": "Invalid query parameter", "message": str(exc)}), 400


# ---------- Weather ----------


@api.get("/weather/city")
def weather_by_city() -> Any:
    city = request.args.get("city", "").strip()
    if not city:
        return _city_required()
    try:
        weather = _services().weather.by_city(city)
    except UpstreamError as exc:
        return _upstream_failure("Failed to fetch weather data", exc)
    return jsonify({"success": True, "data": weather.to_dict()})


@api.get("/weather/coordinates")
def weather_by_coordinates() -> Any:
    lat = _float_arg("lat")
    lon = _float_arg("lon")
    try:
        weather = _services().weather.by_coordinates(lat, lon)
    except UpstreamError as exc:
        return _upstream_failure("Failed to fetch weather data", exc)
    return jsonify({"success": True, "data": weather.to_dict()})


# ---------- Exchange rates ----------


@api.get("/exchange/latest")
def exchange_latest() -> Any:
    base = (request.args.get("base") or "USD").strip().upper()
    try:
        rates = _services().exchange.latest_rates(base)
    except UpstreamError as exc:
        return _upstream_failure("Failed to fetch exchange rates", exc)
    return jsonify({"success": True, "data": rates.to_dict()})


@api.get("/exchange/convert")
def exchange_convert() -> Any:
    from_currency = request.args.get("from", "").strip().upper()
    to_currency = request.args.get("to", "").strip().upper()
    if not from_currency or not to_currency:
        raise InvalidParameter("from and to parameters are required")
    amount = _float_arg("amount")
    try:
        conversion = _services().exchange.convert(from_currency, to_currency, amount)
    except UpstreamError as exc:
        return _upstream_failure("Failed to convert currency", exc)
    return jsonify({"success": True, "data": conversion.to_dict()})


# ---------- Dealers ----------


@api.get("/dealers/city")
def dealers_by_city() -> Any:
    city = request.args.get("city", "").strip()
    if not city:
        return _city_required()
    try:
        dealers = _services().dealers.find_by_city(city)
    except UpstreamError as exc:
        logger.error("Dealer lookup failed: %s", exc)
        return _upstream_failure("Failed to fetch dealer data", exc)
    return jsonify({"success": True, "data": [d.to_dict() for d in dealers], "count": len(dealers)})


@api.get("/dealers/coordinates")
def dealers_by_coordinates() -> Any:
    lat = _float_arg("lat")
    lon = _float_arg("lon")
    radius = _float_arg("radius", default=10.0)
    try:
        dealers = _services().dealers.find_by_coordinates(lat, lon, radius)
    except UpstreamError as exc:
        return _upstream_failure("Failed to fetch dealer data", exc)
    return jsonify({"success": True, "data": [d.to_dict() for d in dealers], "count": len(dealers)})


@api.get("/health")
def healthcheck() -> Any:
    return jsonify({"status": "ok", "message": "API is running"})


# ---------- App ----------


def create_app(services: Optional[Services] = None) -> Flask:
    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions["cityinfo"] = services or build_services()
    app.register_blueprint(api)

    @app.after_request
    def allow_cors(response: Any) -> Any:
        # The browser frontend is served from a different origin.
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    return app


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    create_app().run(host="0.0.0.0", port=port, threaded=True)


if __name__ == "__main__":
    main()
