"""Exception hierarchy for fatal garbage collection faults.

Every fault raised here aborts the current run. The CLI renders them
as ``<operation>: <reason>`` and exits with a failure status.
"""

import os


class GCError(Exception):
    """Base exception for fatal faults.

    Attributes:
        operation: Name of the operation that failed.
        errno: Underlying system error code, if any.
        detail: Human-readable reason overriding the errno message.
    """

    def __init__(
        self,
        operation: str,
        errno: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.operation = operation
        self.errno = errno
        self.detail = detail
        super().__init__(str(self))

    @property
    def reason(self) -> str:
        """Return the reason shown to the user."""
        if self.detail:
            return self.detail
        if self.errno is not None:
            return os.strerror(self.errno)
        return "unknown error"

    def __str__(self) -> str:
        return f"{self.operation}: {self.reason}"


class BackendError(GCError):
    """Raised when a backend cannot be opened, queried or updated."""


class ProbeError(GCError):
    """Raised when the existence of an entry cannot be determined."""


class MountError(GCError):
    """Raised when the mount handle cannot be opened or closed."""
