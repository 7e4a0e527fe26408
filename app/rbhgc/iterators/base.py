"""Abstract base classes for lazy entry streams.

Two ownership contracts coexist:

- An owning stream (:class:`OwningIterator`) hands out elements the
  consumer must give back through :meth:`OwningIterator.release`.
- A borrowing stream (:class:`EntryIterator`) hands out elements that
  stay valid until the next advance or until the stream is closed; the
  stream releases them itself.

Both are iterators and context managers. Leaving the ``with`` block
closes the stream and everything it wraps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Generic, Self, TypeVar

T = TypeVar("T")


class _ClosingIterator(ABC, Generic[T]):
    """Shared iterator and context manager plumbing."""

    @abstractmethod
    def __next__(self) -> T:
        """Advance the stream and return the next element.

        Raises:
            StopIteration: When the stream is exhausted.
        """

    @abstractmethod
    def close(self) -> None:
        """Release every resource held by the stream.

        Closing an already closed stream does nothing.
        """

    def __iter__(self) -> Self:
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class EntryIterator(_ClosingIterator[T]):
    """Borrowing stream.

    An element returned by ``next()`` is owned by the stream and is only
    valid until the following ``next()`` or ``close()``. Consumers that
    need an element longer must copy what they need out of it.
    """


class OwningIterator(_ClosingIterator[T]):
    """Owning stream.

    Every element returned by ``next()`` belongs to the consumer, which
    must hand it back with :meth:`release` once done with it.
    """

    def release(self, element: T) -> None:
        """Give an element back to the stream.

        Elements holding no external resource need no release, so the
        default implementation does nothing.

        Args:
            element: An element previously returned by ``next()``.
        """
        _ = element
