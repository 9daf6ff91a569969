"""Route derivation: fixture path -> HTTP route descriptor.

A fixture's relative path encodes its route:

    users/{userId}/get.json              GET    /users/:userId
    users/post.json                      POST   /users
    items/[status]/active/get.json       GET    /items?status=active
    health.json                          GET    /health
    profile.default.json                 GET    /profile

The derivation is a fixed pipeline of pure stages over an immutable
``RouteDraft``; ``PIPELINE`` lists them in order. Query parameters are
extracted before braces are rewritten, and that order must not change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable

DEFAULT_METHOD = "GET"

_FIXTURE_SUFFIXES = (".default.json", ".json")
_METHOD_TOKEN = re.compile(r"^(get|post|put|delete)(?:\.|$)")
_QUERY_PAIR = re.compile(r"/\[([^/]+)\]/([^/]+)")
_PATH_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True, slots=True)
class QueryParam:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """HTTP route derived from one fixture path."""

    method: str
    url_template: str
    query_params: tuple[QueryParam, ...] = ()

    @property
    def query_string(self) -> str:
        return "&".join(f"{q.name}={q.value}" for q in self.query_params)

    @property
    def display_url(self) -> str:
        if not self.query_params:
            return self.url_template
        return f"{self.url_template}?{self.query_string}"

    @property
    def router_path(self) -> str:
        """The template in Starlette path syntax (``:id`` -> ``{id}``)."""
        return _PATH_PARAM.sub(r"{\1}", self.url_template)

    @property
    def route_shape(self) -> str:
        """The template with parameter names blanked; equal shapes match the same URLs."""
        return _PATH_PARAM.sub(":", self.url_template)


@dataclass(frozen=True, slots=True)
class RouteDraft:
    """Intermediate state threaded through the pipeline stages."""

    mount_root: str
    directories: tuple[str, ...]
    basename: str
    method: str = DEFAULT_METHOD
    url: str = ""
    query_params: tuple[QueryParam, ...] = ()


Stage = Callable[[RouteDraft], RouteDraft]


def normalize_mount_root(mount_root: str) -> str:
    return "/" + mount_root.strip("/")


def _strip_fixture_suffix(filename: str) -> str:
    for suffix in _FIXTURE_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return filename


def start_draft(fixture_path: str, mount_root: str = "/") -> RouteDraft:
    parts = [p for p in fixture_path.replace("\\", "/").split("/") if p]
    filename = parts[-1] if parts else ""
    return RouteDraft(
        mount_root=normalize_mount_root(mount_root),
        directories=tuple(parts[:-1]),
        basename=_strip_fixture_suffix(filename),
    )


def extract_method(draft: RouteDraft) -> RouteDraft:
    """Take the method token off the front of the basename, if there is one."""

    match = _METHOD_TOKEN.match(draft.basename)
    if match is None:
        return replace(draft, method=DEFAULT_METHOD)
    return replace(
        draft,
        method=match.group(1).upper(),
        basename=draft.basename[match.end():],
    )


def assemble_url(draft: RouteDraft) -> RouteDraft:
    pieces = [p for p in (*draft.directories, draft.basename) if p]
    prefix = draft.mount_root.rstrip("/")
    url = prefix + "/" + "/".join(pieces) if pieces else draft.mount_root
    return replace(draft, url=url)


def extract_query_params(draft: RouteDraft) -> RouteDraft:
    """Move every ``/[name]/value`` pair from the URL into the query list."""

    found = tuple(QueryParam(name, value) for name, value in _QUERY_PAIR.findall(draft.url))
    if not found:
        return draft
    url = _QUERY_PAIR.sub("", draft.url) or draft.mount_root
    return replace(draft, url=url, query_params=draft.query_params + found)


def substitute_path_params(draft: RouteDraft) -> RouteDraft:
    # Unbalanced braces are passed through as-is.
    return replace(draft, url=draft.url.replace("{", ":").replace("}", ""))


PIPELINE: tuple[Stage, ...] = (
    extract_method,
    assemble_url,
    extract_query_params,
    substitute_path_params,
)


def build_route_descriptor(fixture_path: str, mount_root: str = "/") -> RouteDescriptor:
    """Derive the route for a fixture path relative to the mock root."""

    draft = start_draft(fixture_path, mount_root)
    for stage in PIPELINE:
        draft = stage(draft)
    return RouteDescriptor(
        method=draft.method,
        url_template=draft.url,
        query_params=draft.query_params,
    )
