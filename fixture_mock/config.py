"""Runtime settings.

Every setting has a ``MOCK_*`` environment variable; command line flags are
layered on top of these by the CLI.

    MOCK_HOST        bind address (default 0.0.0.0)
    MOCK_PORT        bind port (default 8080)
    MOCK_ROOT        fixture directory (default ./mock-api)
    MOCK_MOUNT_ROOT  URL prefix for every route (default /)
    MOCK_VERBOSE     debug logging when truthy
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_ROOT = "./mock-api"
DEFAULT_MOUNT_ROOT = "/"


def truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    root: str = DEFAULT_ROOT
    mount_root: str = DEFAULT_MOUNT_ROOT
    verbose: bool = False

    @property
    def log_level(self) -> str:
        return "debug" if self.verbose else "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("MOCK_HOST", DEFAULT_HOST),
            port=int(env.get("MOCK_PORT", DEFAULT_PORT)),
            root=env.get("MOCK_ROOT", DEFAULT_ROOT),
            mount_root=env.get("MOCK_MOUNT_ROOT", DEFAULT_MOUNT_ROOT),
            verbose=truthy(env.get("MOCK_VERBOSE")),
        )
