"""Data models for rbhgc.

This module exports the entry and record types shared by backends
and the garbage collection pipeline.
"""

from rbhgc.models.entry import DeleteRecord, FsEntry, FsEntryProperty, Identity

__all__ = [
    "DeleteRecord",
    "FsEntry",
    "FsEntryProperty",
    "Identity",
]
