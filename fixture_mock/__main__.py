"""Command line entrypoint.

    python -m fixture_mock --static-mock ./mock-api --port 8080

Flags default to the ``MOCK_*`` environment variables (see ``config``).
The process exits with status 1 when the fixture root does not exist.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from .config import Settings
from .errors import ConfigurationError
from .scan import build_registrations
from .server import create_app


log = logging.getLogger("fixture_mock")


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixture-mock",
        description="Start a mock server with endpoints served from static JSON fixtures.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=defaults.verbose,
        help="Provide verbose information",
    )
    parser.add_argument(
        "-i",
        "--ip",
        default=defaults.host,
        help="IP address where the mock server will be hosted",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=defaults.port,
        help="Port where the mock server will listen",
    )
    parser.add_argument(
        "-M",
        "--static-mock",
        default=defaults.root,
        help="Path of the root directory where the static api mocks are placed",
    )
    parser.add_argument(
        "--mount-root",
        default=defaults.mount_root,
        help="URL prefix under which every mock is registered",
    )
    return parser


def parse_settings(argv: list[str] | None = None) -> Settings:
    args = build_parser(Settings.from_env()).parse_args(argv)
    return Settings(
        host=args.ip,
        port=args.port,
        root=args.static_mock,
        mount_root=args.mount_root,
        verbose=args.verbose,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    settings = parse_settings(argv)
    configure_logging(settings)

    try:
        registrations = build_registrations(settings.root, settings.mount_root)
    except ConfigurationError as exc:
        log.error("%s", exc)
        return 1

    app = create_app(registrations, settings=settings)
    log.info("Mock server starting on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        # Mocks are often reached through tunnels and reverse proxies.
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
