"""Fixture-driven mock API server.

Scans a directory of JSON fixtures and serves each one on a route derived
from its relative path (method from the filename, ``{param}`` directories as
path parameters, ``[name]/value`` directory pairs as query parameters).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
