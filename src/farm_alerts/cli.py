"""Command-line interface for farming alerts."""

import argparse
import asyncio
import sys
from datetime import date

from pydantic import ValidationError

from farm_alerts.api.dependencies import get_alert_engine, get_today
from farm_alerts.api.routes.alerts import AlertResponse
from farm_alerts.config import get_settings
from farm_alerts.exceptions import ConfigurationError, FarmAlertsError
from farm_alerts.log_config import setup_logging
from farm_alerts.models.location import FarmLocation
from farm_alerts.providers.weatherapi import WeatherApiProvider
from farm_alerts.service import FarmAlertService


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Farm Alerts - Prioritized farming alerts from weather and season"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: LOG_LEVEL setting)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    # Alerts command
    alerts_parser = subparsers.add_parser(
        "alerts", help="Generate farming alerts for a location"
    )
    alerts_parser.add_argument(
        "location",
        help="Place name used in alert messages",
    )
    alerts_parser.add_argument(
        "latitude",
        type=float,
        help="Latitude in decimal degrees (e.g. -1.2921)",
    )
    alerts_parser.add_argument(
        "longitude",
        type=float,
        help="Longitude in decimal degrees (e.g. 36.8219)",
    )
    alerts_parser.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Evaluation date YYYY-MM-DD (default: today)",
    )
    alerts_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full API response as JSON",
    )

    return parser


async def _generate(location: FarmLocation, on_date: date | None) -> AlertResponse:
    settings = get_settings()
    if not settings.weather_provider_configured:
        raise ConfigurationError("Weather API key not configured")

    if on_date is None:
        on_date = get_today(settings)

    async with WeatherApiProvider(
        api_key=settings.weatherapi_key,
        base_url=settings.weatherapi_base_url,
        timeout=settings.weather_request_timeout_seconds,
    ) as provider:
        service = FarmAlertService(
            provider,
            get_alert_engine(settings),
            forecast_days=settings.weather_forecast_days,
        )
        result = await service.generate(location, on_date=on_date)

    return AlertResponse.from_result(result)


def _print_alerts(response: AlertResponse) -> None:
    print(f"Farming alerts for {response.location}")
    if not response.alerts:
        print("  No alerts.")
    for alert in response.alerts:
        print(f"  [{alert.priority.value.upper():6}] {alert.title} ({alert.timing})")
        print(f"           {alert.message}")
        if alert.action:
            print(f"           -> {alert.action}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "serve":
        import uvicorn

        from farm_alerts.api import create_app

        uvicorn.run(
            create_app(),
            host=args.host or settings.host,
            port=args.port or settings.port,
        )
        return 0

    if args.command == "alerts":
        try:
            location = FarmLocation.from_coordinates(
                args.location, args.latitude, args.longitude
            )
        except ValidationError:
            parser.error(
                f"Invalid location '{args.location}' at {args.latitude},{args.longitude}"
            )

        try:
            response = asyncio.run(_generate(location, args.date))
        except FarmAlertsError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

        if args.json:
            print(response.model_dump_json(by_alias=True, exclude_none=True, indent=2))
        else:
            _print_alerts(response)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
