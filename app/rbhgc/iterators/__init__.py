"""Lazy entry streams and stream adapters."""

from rbhgc.iterators.base import EntryIterator, OwningIterator
from rbhgc.iterators.constify import ConstifyIterator

__all__ = ["ConstifyIterator", "EntryIterator", "OwningIterator"]
