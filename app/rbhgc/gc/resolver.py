"""Resolution of identities into filesystem handles.

Turning a backend identity into an open handle is a capability of the
host filesystem, not of rbhgc. Hosts provide it by implementing
:class:`HandleResolver` and naming the implementation in the
configuration file::

    resolver = "mysite.handles:OpenByHandleResolver"

Without one, :class:`UnsupportedResolver` is used and any run with at
least one candidate fails before deleting anything.
"""

import errno
import importlib
import logging
import os
from abc import ABC, abstractmethod

from rbhgc.core.config import ConfigError
from rbhgc.models.entry import Identity

logger = logging.getLogger(__name__)

# Read-only, never follow a trailing symlink, path-only (inert) handle
PROBE_FLAGS: int = os.O_RDONLY | os.O_NOFOLLOW | os.O_PATH


class HandleResolver(ABC):
    """Abstract base class for identity resolvers.

    Implementations must not follow symbolic links and must behave as a
    point-in-time probe: the filesystem may change concurrently.
    """

    @abstractmethod
    def open(self, mount_fd: int, identity: Identity, flags: int) -> int:
        """Open the filesystem object an identity names.

        Args:
            mount_fd: Descriptor of the mount the identity belongs to.
            identity: Identity of the object.
            flags: ``os.open`` flags for the returned descriptor.

        Returns:
            An open descriptor the caller must close.

        Raises:
            OSError: With errno ENOENT if the object does not exist,
                ESTALE if the identity is stale, any other errno if the
                object could not be opened for another reason.
        """


class UnsupportedResolver(HandleResolver):
    """Resolver for hosts that provide no resolution mechanism."""

    def open(self, mount_fd: int, identity: Identity, flags: int) -> int:
        raise OSError(errno.ENOSYS, os.strerror(errno.ENOSYS))


def load_resolver(reference: str | None) -> HandleResolver:
    """Load the resolver a configuration reference names.

    The reference has the form ``package.module:attribute``. The
    attribute may be a HandleResolver subclass (instantiated without
    arguments), a HandleResolver instance, or a callable returning one.

    Args:
        reference: Resolver reference, or None for the unsupported
            resolver.

    Returns:
        HandleResolver instance.

    Raises:
        ConfigError: If the reference cannot be loaded or does not name
            a resolver.
    """
    if reference is None:
        return UnsupportedResolver()

    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Invalid resolver reference '{reference}': expected module:attribute")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import resolver module '{module_name}': {e}") from e
    except Exception as e:
        raise ConfigError(f"Error loading resolver module '{module_name}': {e!r}") from e

    try:
        target = getattr(module, attr)
    except AttributeError as e:
        raise ConfigError(f"Module '{module_name}' has no attribute '{attr}'") from e

    if callable(target):
        try:
            resolver = target()
        except TypeError as e:
            raise ConfigError(f"Cannot instantiate resolver '{reference}': {e}") from e
    else:
        resolver = target

    if not isinstance(resolver, HandleResolver):
        raise ConfigError(f"'{reference}' does not provide a HandleResolver")

    logger.debug("Loaded resolver %s", reference)
    return resolver
