"""rbhgc - Garbage collection for robinhood backends.

Deletes backend records of entries that no longer exist in the
filesystem the backend mirrors.
"""

__version__ = "0.1.0"
