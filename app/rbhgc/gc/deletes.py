"""Conversion of GC candidates into deletion records.

A candidate becomes a deletion record if and only if the filesystem
confirms the object it names no longer exists.
"""

import logging
from dataclasses import dataclass

from rbhgc.gc.probe import ProbeOutcome, probe_entry
from rbhgc.gc.resolver import HandleResolver
from rbhgc.iterators.base import EntryIterator
from rbhgc.models.entry import DeleteRecord, FsEntry, FsEntryProperty

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GCStats:
    """Counters of a garbage collection run.

    Attributes:
        examined: Candidates probed.
        present: Candidates still present in the filesystem.
        deleted: Deletion records emitted.
    """

    examined: int = 0
    present: int = 0
    deleted: int = 0


class DeleteIterator(EntryIterator[DeleteRecord]):
    """Filters a stream of candidates down to deletion records.

    Each candidate is probed once. Candidates still present in the
    filesystem are skipped; candidates confirmed absent are emitted as
    a DeleteRecord carrying the same identity. Any other probe result
    raises and ends the stream.

    Args:
        fsentries: Borrowing stream of candidates, projected to at
            least their identity. The iterator takes ownership of it.
        mount_fd: Descriptor of the mirrored filesystem's mount.
        resolver: Identity resolution capability of the host.
    """

    def __init__(
        self,
        fsentries: EntryIterator[FsEntry],
        mount_fd: int,
        resolver: HandleResolver,
    ) -> None:
        self._fsentries = fsentries
        self._mount_fd = mount_fd
        self._resolver = resolver
        self._closed = False
        self.stats = GCStats()

    def __next__(self) -> DeleteRecord:
        while True:
            fsentry = next(self._fsentries)
            if fsentry.id is None or FsEntryProperty.ID not in fsentry.mask:
                msg = f"Candidate entry carries no identity: {fsentry!r}"
                raise ValueError(msg)

            self.stats.examined += 1
            outcome = probe_entry(self._resolver, self._mount_fd, fsentry.id)
            if outcome == ProbeOutcome.PRESENT:
                # Still linked somewhere in the filesystem, keep it
                self.stats.present += 1
                continue

            self.stats.deleted += 1
            return DeleteRecord(id=fsentry.id)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._fsentries.close()
