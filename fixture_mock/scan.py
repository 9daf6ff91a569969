"""Fixture discovery: mock root -> route registrations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .errors import ConfigurationError
from .routes import RouteDescriptor, build_route_descriptor


log = logging.getLogger("fixture_mock.scan")


@dataclass(frozen=True, slots=True)
class RouteRegistration:
    """A derived route together with the fixture file that answers it."""

    descriptor: RouteDescriptor
    fixture_file: Path


def verify_root(root: Path | str) -> Path:
    path = Path(root)
    if not path.exists():
        raise ConfigurationError(
            f"Static mocks were not found on {path}. Make sure the directory exists."
        )
    if not path.is_dir():
        raise ConfigurationError(f"Static mock root {path} is not a directory.")
    return path


def iter_fixture_paths(root: Path | str) -> Iterator[str]:
    """Yield every ``*.json`` below ``root`` as a sorted, '/'-separated relative path.

    Dotfiles and anything inside dot-directories are skipped. Each call starts
    a fresh scan.
    """

    base = Path(root)
    relative = (p.relative_to(base) for p in base.rglob("*.json") if p.is_file())
    yield from sorted(
        rel.as_posix() for rel in relative if not any(part.startswith(".") for part in rel.parts)
    )


def build_registrations(root: Path | str, mount_root: str = "/") -> list[RouteRegistration]:
    base = verify_root(root)
    registrations = [
        RouteRegistration(
            descriptor=build_route_descriptor(rel, mount_root),
            fixture_file=base / rel,
        )
        for rel in iter_fixture_paths(base)
    ]

    if registrations:
        log.info("Found %d api mocks at %s", len(registrations), base)
        for reg in registrations:
            log.debug("\t%s", reg.fixture_file)
    else:
        log.warning("No api mocks found at %s", base)
    return registrations
