"""Filesystem existence probe.

An entry may only be garbage collected if the filesystem affirmatively
says it is gone. Failing to open an object for any other reason
(permissions, descriptor exhaustion, I/O errors, ...) says nothing about
its existence, so it aborts the run instead.
"""

import errno
import logging
import os
from enum import Enum

from rbhgc.errors import ProbeError
from rbhgc.gc.resolver import PROBE_FLAGS, HandleResolver
from rbhgc.models.entry import Identity

logger = logging.getLogger(__name__)

# Errors meaning the object is gone (or its handle expired)
ABSENT_ERRNOS: frozenset[int] = frozenset({errno.ENOENT, errno.ESTALE})


class ProbeOutcome(str, Enum):
    """Outcome of an existence probe.

    Attributes:
        PRESENT: The object still exists in the filesystem.
        ABSENT: The filesystem confirmed the object no longer exists.
    """

    PRESENT = "present"
    ABSENT = "absent"


def probe_entry(resolver: HandleResolver, mount_fd: int, identity: Identity) -> ProbeOutcome:
    """Check whether the object an identity names still exists.

    Any descriptor obtained is closed before returning.

    Args:
        resolver: Identity resolution capability of the host.
        mount_fd: Descriptor of the mirrored filesystem's mount.
        identity: Identity of the object to look for.

    Returns:
        ProbeOutcome.PRESENT or ProbeOutcome.ABSENT.

    Raises:
        ProbeError: If existence cannot be determined, or if closing the
            probe descriptor fails.
    """
    try:
        fd = resolver.open(mount_fd, identity, PROBE_FLAGS)
    except OSError as e:
        if e.errno in ABSENT_ERRNOS:
            logger.debug("%s: absent (%s)", identity, errno.errorcode.get(e.errno, e.errno))
            return ProbeOutcome.ABSENT
        raise ProbeError("open_by_handle_at", e.errno, e.strerror) from e

    try:
        os.close(fd)
    except OSError as e:
        # Closing a descriptor we just opened should never fail
        raise ProbeError("unexpected error on close", e.errno, e.strerror) from e

    logger.debug("%s: present", identity)
    return ProbeOutcome.PRESENT
