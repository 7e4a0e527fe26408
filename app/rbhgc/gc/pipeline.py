"""Garbage collection driver."""

import logging

from rbhgc.backends.base import Backend, BackendOption, FilterOptions, Projection
from rbhgc.gc.deletes import DeleteIterator, GCStats
from rbhgc.gc.resolver import HandleResolver
from rbhgc.iterators.constify import ConstifyIterator
from rbhgc.models.entry import FsEntryProperty

logger = logging.getLogger(__name__)

GC_FILTER_OPTIONS = FilterOptions(projection=Projection(fsentry_mask=FsEntryProperty.ID))


def collect_garbage(backend: Backend, mount_fd: int, resolver: HandleResolver) -> GCStats:
    """Delete the backend records of entries gone from the filesystem.

    Switches the backend into garbage collection mode, streams its
    candidates through the existence probe, and hands the surviving
    deletion records to the backend in a single update. The stream is
    closed once, whether the update succeeds or not.

    Args:
        backend: Backend to collect.
        mount_fd: Descriptor of the mirrored filesystem's mount.
        resolver: Identity resolution capability of the host.

    Returns:
        Counters of the run.

    Raises:
        BackendError: If the backend rejects the GC option, the query or
            the update.
        ProbeError: If the existence of a candidate cannot be determined.
    """
    backend.set_option(BackendOption.GC, True)

    fsentries = backend.filter(None, GC_FILTER_OPTIONS)
    deletes = DeleteIterator(ConstifyIterator(fsentries), mount_fd, resolver)
    with deletes:
        backend.update(deletes)

    stats = deletes.stats
    logger.info(
        "Examined %d candidate(s): %d still present, %d deleted",
        stats.examined,
        stats.present,
        stats.deleted,
    )
    return stats
