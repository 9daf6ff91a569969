"""Registration of fixture routes on the FastAPI app.

Fixtures that share a (method, url template) pair are registered as one
route and dispatched by query string:

  - candidates are tried most specific first (most query pairs), ties in
    scan order; the first whose query pairs are all present answers
  - when no candidate's query matches, the first scanned fixture answers
  - exact duplicates (same query pairs too) are first-wins and warned about
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import QueryParams

from .fixtures import FixtureResponse, load_fixture
from .scan import RouteRegistration


log = logging.getLogger("fixture_mock.registry")

# Statuses that must not carry a body.
_BODYLESS = {204, 304}


def _query_key(registration: RouteRegistration) -> frozenset[tuple[str, str]]:
    return frozenset((q.name, q.value) for q in registration.descriptor.query_params)


def _query_matches(registration: RouteRegistration, query: QueryParams) -> bool:
    return all(q.value in query.getlist(q.name) for q in registration.descriptor.query_params)


def render_fixture(fixture: FixtureResponse) -> Response:
    if fixture.status in _BODYLESS or fixture.status < 200:
        return Response(status_code=fixture.status)
    return JSONResponse(fixture.body, status_code=fixture.status)


@dataclass(slots=True)
class FixtureRoute:
    """All fixtures answering one (method, url template) pair."""

    method: str
    router_path: str
    candidates: list[RouteRegistration] = field(default_factory=list)

    def add(self, registration: RouteRegistration) -> bool:
        """Add a candidate; returns False if an earlier one shadows it."""

        key = _query_key(registration)
        for existing in self.candidates:
            if _query_key(existing) == key:
                return False
        self.candidates.append(registration)
        return True

    def select(self, query: QueryParams) -> RouteRegistration:
        ranked = sorted(self.candidates, key=lambda r: -len(r.descriptor.query_params))
        for registration in ranked:
            if _query_matches(registration, query):
                return registration
        return self.candidates[0]

    async def handle(self, request: Request) -> Response:
        registration = self.select(request.query_params)
        log.debug("Resolving request for %s with %s", request.url, registration.fixture_file)
        fixture = await load_fixture(registration.fixture_file)
        await asyncio.sleep(fixture.delay_seconds)
        return render_fixture(fixture)


def group_registrations(registrations: Iterable[RouteRegistration]) -> list[FixtureRoute]:
    """Group registrations per (method, route shape), keeping first-seen order.

    Templates differing only in parameter names (``:id`` vs ``:userId``) share a shape.
    """

    routes: dict[tuple[str, str], FixtureRoute] = {}
    for registration in registrations:
        descriptor = registration.descriptor
        key = (descriptor.method, descriptor.route_shape)
        route = routes.get(key)
        if route is None:
            route = routes[key] = FixtureRoute(method=descriptor.method, router_path=descriptor.router_path)
        if not route.add(registration):
            log.warning(
                "%s %s from %s is shadowed by an earlier fixture and will never be served",
                descriptor.method,
                descriptor.display_url,
                registration.fixture_file,
            )
    return list(routes.values())


def register_fixture_routes(
    app: FastAPI,
    registrations: Iterable[RouteRegistration],
    *,
    base_url: str = "",
) -> list[FixtureRoute]:
    registered: list[FixtureRoute] = []
    for route in group_registrations(registrations):
        try:
            app.add_route(route.router_path, route.handle, methods=[route.method])
        except (AssertionError, ValueError) as exc:
            # starlette rejects e.g. duplicated parameter names when compiling the path.
            log.warning("Skipping %s %s: %s", route.method, route.router_path, exc)
            continue
        for registration in route.candidates:
            log.info(
                "Mapping listener on %s%s -> %s",
                base_url,
                registration.descriptor.display_url,
                registration.fixture_file,
            )
        registered.append(route)
    return registered

