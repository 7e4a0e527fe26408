"""Garbage collection pipeline.

This module provides the existence probe, the candidate-to-deletion
stream adapter, the mount handle and the driver tying them to a
backend.
"""

from rbhgc.gc.deletes import DeleteIterator, GCStats
from rbhgc.gc.mount import MountHandle
from rbhgc.gc.pipeline import collect_garbage
from rbhgc.gc.probe import ABSENT_ERRNOS, ProbeOutcome, probe_entry
from rbhgc.gc.resolver import PROBE_FLAGS, HandleResolver, UnsupportedResolver, load_resolver

__all__ = [
    "ABSENT_ERRNOS",
    "PROBE_FLAGS",
    "DeleteIterator",
    "GCStats",
    "HandleResolver",
    "MountHandle",
    "ProbeOutcome",
    "UnsupportedResolver",
    "collect_garbage",
    "load_resolver",
    "probe_entry",
]
