"""Backend URI parsing.

Backends are described by URIs of the form ``rbh:<type>:<name>``, where
``<type>`` selects the backend implementation and ``<name>`` is
interpreted by it (for the jsonl backend, a path to the store file).
"""

import errno
import logging
from collections.abc import Callable
from pathlib import Path

from rbhgc.backends.base import Backend
from rbhgc.backends.jsonl import JsonlBackend
from rbhgc.errors import BackendError

logger = logging.getLogger(__name__)

URI_SCHEME = "rbh"

# Backend type name -> factory taking the URI's name component
BACKEND_TYPES: dict[str, Callable[[str], Backend]] = {
    "jsonl": lambda name: JsonlBackend(Path(name).expanduser()),
}


def parse_backend_uri(uri: str) -> tuple[str, str]:
    """Split a backend URI into its type and name.

    Args:
        uri: URI of the form ``rbh:<type>:<name>``.

    Returns:
        Tuple of (backend_type, name).

    Raises:
        BackendError: If the URI is malformed.
    """
    parts = uri.split(":", 2)
    if len(parts) != 3:
        raise BackendError(
            "rbh_backend_from_uri", errno.EINVAL, f"{uri}: expected rbh:<type>:<name>"
        )

    scheme, backend_type, name = parts
    if scheme != URI_SCHEME:
        raise BackendError(
            "rbh_backend_from_uri", errno.EINVAL, f"{uri}: unsupported scheme '{scheme}'"
        )
    if not backend_type:
        raise BackendError("rbh_backend_from_uri", errno.EINVAL, f"{uri}: missing backend type")
    if not name:
        raise BackendError("rbh_backend_from_uri", errno.EINVAL, f"{uri}: missing backend name")

    return backend_type, name


def backend_from_uri(uri: str) -> Backend:
    """Open the backend a URI describes.

    Args:
        uri: URI of the form ``rbh:<type>:<name>``.

    Returns:
        Opened backend. The caller must close it.

    Raises:
        BackendError: If the URI is malformed, names an unknown backend
            type, or the backend cannot be opened.
    """
    backend_type, name = parse_backend_uri(uri)

    factory = BACKEND_TYPES.get(backend_type)
    if factory is None:
        available = ", ".join(sorted(BACKEND_TYPES))
        raise BackendError(
            "rbh_backend_from_uri",
            errno.EINVAL,
            f"{uri}: unknown backend type '{backend_type}' (available: {available})",
        )

    logger.debug("Opening %s backend '%s'", backend_type, name)
    return factory(name)
