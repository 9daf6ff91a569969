"""HTTP layer: the FastAPI app serving fixture routes.

Routes come in as an explicit list of registrations (see ``scan``) and are
added by ``create_app``; nothing is registered at import time. Fixture read
and parse failures become a 500 JSON error envelope for that request only.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings
from .errors import FixtureError, error_from_exception
from .headers import cors_options
from .registry import register_fixture_routes
from .scan import RouteRegistration


log = logging.getLogger("fixture_mock.server")


def create_app(
    registrations: Iterable[RouteRegistration],
    *,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="Fixture Mock Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings  # type: ignore[attr-defined]

    @app.exception_handler(FixtureError)
    async def _fixture_error(request: Request, exc: FixtureError) -> JSONResponse:
        log.error("Failed to resolve %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(error_from_exception(exc), status_code=500)

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Turn anything the handlers did not expect into a 500 envelope."""

        try:
            response: Response = await call_next(request)
            return response
        except Exception as exc:  # noqa: BLE001
            log.exception("Unexpected error serving %s %s", request.method, request.url.path)
            return JSONResponse(error_from_exception(exc), status_code=500)

    # Added last so it wraps the guard and error responses get CORS headers too.
    app.add_middleware(CORSMiddleware, **cors_options())

    app.state.fixture_routes = register_fixture_routes(  # type: ignore[attr-defined]
        app,
        registrations,
        base_url=f"http://{settings.host}:{settings.port}",
    )
    return app
