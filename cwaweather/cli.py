"""CLI entry point for the CWA weather proxy."""

import argparse
import json
import logging

import httpx

from cwaweather.config.defaults import VALID_LOCATIONS
from cwaweather.config.loader import load_config, redacted
from cwaweather.config.schema import ProxyConfig
from cwaweather.ingest.cwa_client import CwaApiError, CwaClient, MissingApiKeyError
from cwaweather.ingest.forecast_fetcher import ForecastFetcher
from cwaweather.ingest.forecast_transformer import ForecastNotFoundError
from cwaweather.ingest.location_resolver import resolve_location

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cwaweather",
        description="CWA one-week forecast proxy",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP proxy")
    serve_p.add_argument("--host", default=None, help="Bind address")
    serve_p.add_argument("--port", type=int, default=None, help="Listen port")

    # locations
    sub.add_parser("locations", help="List supported locations")

    # forecast
    fc_p = sub.add_parser("forecast", help="Fetch one forecast and print JSON")
    fc_p.add_argument("location", nargs="?", default=None, help="County/city name")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "locations":
        return _cmd_locations(config)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: ProxyConfig, args) -> int:
    import uvicorn

    from cwaweather.server import create_app

    update = {}
    if args.host:
        update["host"] = args.host
    if args.port:
        update["port"] = args.port
    if update:
        config = config.model_copy(
            update={"server": config.server.model_copy(update=update)}
        )

    if not config.cwa.api_key:
        logger.warning("CWA_API_KEY is not set; /api/weather will return 500")
    logger.info(
        "Serving on %s:%d (env=%s, default location=%s)",
        config.server.host, config.server.port,
        config.server.environment, config.default_location,
    )
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)
    return 0


def _cmd_locations(config: ProxyConfig) -> int:
    for name in VALID_LOCATIONS:
        marker = " (default)" if name == config.default_location else ""
        print(f"{name}{marker}")
    return 0


def _cmd_forecast(config: ProxyConfig, args) -> int:
    location_name = resolve_location(args.location, config.default_location)
    if args.location and location_name != args.location:
        logger.warning("Unknown location %r, using %s", args.location, location_name)

    fetcher = ForecastFetcher(
        CwaClient(
            api_key=config.cwa.api_key,
            base_url=config.cwa.base_url,
            timeout=config.cwa.timeout_seconds,
        )
    )
    try:
        result = fetcher.fetch(location_name)
    except MissingApiKeyError:
        print("Error: set CWA_API_KEY in the environment or .env")
        return 1
    except CwaApiError as e:
        print(f"Error: CWA API returned {e.status_code}: {e.message}")
        return 1
    except ForecastNotFoundError as e:
        print(f"Error: {e}")
        return 1
    except httpx.RequestError as e:
        print(f"Error: request failed: {e}")
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


def _cmd_config(config: ProxyConfig, args) -> int:
    if args.config_command == "show":
        print(redacted(config).model_dump_json(indent=2))
        return 0
    print("Use: config show")
    return 1
