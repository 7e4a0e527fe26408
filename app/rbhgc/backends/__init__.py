"""Robinhood backends.

This module exports the backend interface, the concrete backends and
URI-based backend construction.
"""

from rbhgc.backends.base import Backend, BackendOption, FilterOptions, Projection
from rbhgc.backends.jsonl import JsonlBackend, JsonlEntryIterator
from rbhgc.backends.uri import BACKEND_TYPES, backend_from_uri, parse_backend_uri

__all__ = [
    "BACKEND_TYPES",
    "Backend",
    "BackendOption",
    "FilterOptions",
    "JsonlBackend",
    "JsonlEntryIterator",
    "Projection",
    "backend_from_uri",
    "parse_backend_uri",
]
