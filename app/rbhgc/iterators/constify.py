"""Conversion of owning streams into borrowing streams."""

from typing import TypeVar

from rbhgc.iterators.base import EntryIterator, OwningIterator

T = TypeVar("T")


class ConstifyIterator(EntryIterator[T]):
    """Borrowing view over an owning stream.

    Holds at most one element of the wrapped stream at any time: the
    element returned by the last ``next()`` call. That element is
    released right before the next one is pulled, and on close.

    Args:
        source: Owning stream to wrap. The iterator takes ownership of
            it and closes it on :meth:`close`.
    """

    def __init__(self, source: OwningIterator[T]) -> None:
        self._source = source
        self._element: T | None = None
        self._holding = False
        self._closed = False

    @property
    def holding(self) -> bool:
        """Check whether an element is currently borrowed out."""
        return self._holding

    def __next__(self) -> T:
        self._release_held()
        element = next(self._source)
        self._element = element
        self._holding = True
        return element

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._release_held()
        finally:
            self._source.close()

    def _release_held(self) -> None:
        """Hand the borrowed element back to the source."""
        if not self._holding:
            return
        element = self._element
        self._element = None
        self._holding = False
        self._source.release(element)  # type: ignore[arg-type]
