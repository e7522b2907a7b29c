"""``stationcast`` console entrypoint: parse flags, load config, serve."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from stationcast.infrastructure.config import AppConfig, load_config
from stationcast.infrastructure.logging.setup import configure_logging
from stationcast.interfaces.main import build_app

log = structlog.get_logger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# argparse dest -> flat config key (see load_config)
_CONFIG_FLAGS: dict[str, str] = {
    "catalog_url": "catalog_url",
    "default_station": "catalog_default_station_id",
    "preload": "catalog_preload",
    "log_level": "log_level",
    "log_format": "log_format",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stationcast",
        description="Serve the station catalog over HTTP.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help=f"Bind host (env HOST, default {DEFAULT_HOST}).")
    server.add_argument(
        "--port", type=int, help=f"Bind port (env PORT, default {DEFAULT_PORT})."
    )

    sources = parser.add_argument_group("configuration sources")
    sources.add_argument("--config", type=Path, help="YAML config file.")
    sources.add_argument("--dotenv", type=Path, help=".env file with STATIONCAST_* vars.")

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument("--catalog-url", help="Station catalog URL.")
    overrides.add_argument(
        "--default-station", metavar="ID", help="Default station id."
    )
    overrides.add_argument(
        "--preload",
        action="store_true",
        default=None,
        help="Load the catalog in the background at startup.",
    )
    overrides.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    overrides.add_argument("--log-format", choices=["json", "console"])
    return parser


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Flat config overrides for every flag the user actually passed."""
    return {
        key: getattr(args, dest)
        for dest, key in _CONFIG_FLAGS.items()
        if getattr(args, dest) is not None
    }


def _bind_address(args: argparse.Namespace) -> tuple[str, int]:
    host = args.host or os.getenv("HOST") or DEFAULT_HOST
    port = args.port or int(os.getenv("PORT") or DEFAULT_PORT)
    return host, port


def _load(args: argparse.Namespace) -> AppConfig:
    return load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=_cli_overrides(args),
    )


def start(argv: Iterable[str] | None = None) -> None:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    host, port = _bind_address(args)

    config = _load(args)
    log_config = configure_logging(config)
    log.info(
        "server_starting",
        host=host,
        port=port,
        environment=config.environment,
        catalog_url=config.catalog.url,
        preload=config.catalog.preload,
    )

    uvicorn.run(build_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
