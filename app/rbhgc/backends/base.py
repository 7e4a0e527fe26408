"""Abstract base class for robinhood backends.

A backend stores records mirroring the objects of a filesystem. The
garbage collector only needs three operations from it: switching it
into garbage collection mode, querying its candidate entries and
committing deletions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from types import TracebackType

from rbhgc.iterators.base import OwningIterator
from rbhgc.models.entry import DeleteRecord, FsEntry, FsEntryProperty


class BackendOption(str, Enum):
    """Options a backend may expose through :meth:`Backend.set_option`.

    Attributes:
        GC: When true, queries only return entries flagged for garbage
            collection.
    """

    GC = "gc"


@dataclass(frozen=True, slots=True)
class Projection:
    """Fields to populate in returned entries.

    Attributes:
        fsentry_mask: Entry fields the backend must populate.
    """

    fsentry_mask: FsEntryProperty = FsEntryProperty.ID


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Options applied to a backend query.

    Attributes:
        projection: Fields to populate in returned entries.
    """

    projection: Projection = field(default_factory=Projection)


class Backend(ABC):
    """Abstract base class for all backends.

    Backends are context managers: leaving the ``with`` block closes the
    connection to the underlying store.

    Example:
        >>> with backend_from_uri("rbh:jsonl:/var/lib/rbh/fs.jsonl") as backend:
        ...     backend.set_option(BackendOption.GC, True)
        ...     with backend.filter(None, FilterOptions()) as entries:
        ...         for entry in entries:
        ...             print(entry.id)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend type name (e.g. ``"jsonl"``)."""

    @abstractmethod
    def set_option(self, option: BackendOption, value: object) -> None:
        """Set a backend option.

        Args:
            option: Option to set.
            value: New value of the option.

        Raises:
            BackendError: If the option is unknown or the value invalid.
        """

    @abstractmethod
    def filter(self, filter_: object | None, options: FilterOptions) -> OwningIterator[FsEntry]:
        """Query the entries of the backend.

        Args:
            filter_: Backend-specific predicate, or None to return every
                entry the current options select.
            options: Projection and query options.

        Returns:
            Owning stream of projected entries.

        Raises:
            BackendError: If the query cannot be run.
        """

    @abstractmethod
    def update(self, records: Iterator[DeleteRecord]) -> int:
        """Apply a stream of deletions to the backend.

        The stream is consumed to exhaustion before anything is
        committed. If consuming it raises, nothing is committed.

        Args:
            records: Deletion records. Each record may only be valid
                until the next one is pulled.

        Returns:
            Number of records processed.

        Raises:
            BackendError: If the deletions cannot be committed.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the connection to the underlying store."""

    def __enter__(self) -> Backend:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
