"""Command-line entry point for the realtime metric collector."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional

from pydantic import ValidationError

from collector.app.catalog import MetricCatalog
from collector.app.config import Settings, settings
from collector.app.core.errors import CollectorError
from collector.app.core.logging import configure_logging
from collector.app.services.pipeline import MetricsPipeline
from collector.app.services.transport import build_http_client


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fc-collector",
        description="Print realtime host metrics of one platform site as text lines",
    )
    parser.add_argument("--url", dest="base_url", help="Platform base URL, e.g. https://fc.example:7443")
    parser.add_argument("--user", help="Login user name")
    parser.add_argument("--password", help="Login password")
    parser.add_argument("--site", dest="site_id", help="Site identifier (default: 1)")
    parser.add_argument("--limit", dest="host_limit", type=int, help="Hosts per page (default: 100)")
    parser.add_argument("--offset", dest="host_offset", type=int, help="Host page offset (default: 0)")
    parser.add_argument(
        "--catalog",
        dest="metric_catalog",
        choices=[catalog.value for catalog in MetricCatalog],
        help="Metric catalog requested for every host (default: host)",
    )
    parser.add_argument("--timeout", dest="request_timeout_seconds", type=float, help="Per-request timeout in seconds")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification (self-signed platform certificates)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings) -> Settings:
    """Overlay command-line flags on top of environment settings."""
    overrides: dict[str, Any] = {
        key: value
        for key, value in vars(args).items()
        if key not in {"insecure", "debug"} and value is not None
    }
    if args.insecure:
        overrides["verify_tls"] = False
    if args.debug:
        overrides["debug"] = True
    # Re-run validators so flag values are normalized like env values.
    return Settings.model_validate({**base.model_dump(), **overrides})


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_settings(args, settings)
    except ValidationError as exc:
        parser.error(str(exc))
    configure_logging(debug=config.debug)

    missing = config.missing_credentials()
    if missing:
        logger.error("Missing required settings: %s", ", ".join(missing))
        return 2

    with build_http_client(config) as client:
        pipeline = MetricsPipeline(config, client)
        try:
            lines = pipeline.run()
        except CollectorError as exc:
            logger.error("Collection failed after stage %s: %s", pipeline.stage, exc)
            return 1

    for line in lines:
        sys.stdout.write(f"{line}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
