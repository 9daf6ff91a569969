"""CORS policy for browser clients.

The mock is permissive: the request ``Origin`` is echoed back, credentials
are allowed, and preflights accept a fixed list of custom headers.
"""

from __future__ import annotations

from typing import Any

ALLOW_HEADERS = (
    "Authorization",
    "cache-control",
    "Origin",
    "X-Requested-With",
    "Content-Type",
    "Accept",
    "x-messageId",
    "x-appCorrelationId",
    "x-brandId",
    "x-channelType",
)

ALLOW_METHODS = ("PUT", "POST", "GET", "DELETE", "OPTIONS")


def cors_options() -> dict[str, Any]:
    """Keyword arguments for starlette's ``CORSMiddleware``."""

    # A match-all regex (instead of "*") makes the middleware echo the origin.
    return {
        "allow_origin_regex": ".*",
        "allow_credentials": True,
        "allow_methods": list(ALLOW_METHODS),
        "allow_headers": list(ALLOW_HEADERS),
    }
