"""Mount handle of the mirrored filesystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType

from rbhgc.errors import MountError

logger = logging.getLogger(__name__)

MOUNT_FLAGS: int = os.O_RDONLY | os.O_NOFOLLOW | os.O_PATH


class MountHandle:
    """Inert descriptor on a path of the mirrored filesystem.

    Identities are resolved relative to this handle. Use
    :meth:`MountHandle.open` to create one.

    Args:
        fd: Open descriptor. The handle takes ownership of it.
        path: Path the descriptor was opened on.
    """

    def __init__(self, fd: int, path: Path) -> None:
        self._fd: int | None = fd
        self._path = path

    @classmethod
    def open(cls, path: Path) -> MountHandle:
        """Open a mount handle on a path.

        Args:
            path: A path in the mirrored filesystem. Symbolic links are
                not followed.

        Returns:
            MountHandle instance. The caller must close it.

        Raises:
            MountError: If the path cannot be opened.
        """
        try:
            fd = os.open(path, MOUNT_FLAGS)
        except OSError as e:
            raise MountError(f"open: {path}", e.errno, e.strerror) from e
        logger.debug("Opened mount handle %d on %s", fd, path)
        return cls(fd, path)

    @property
    def path(self) -> Path:
        """Path the handle was opened on."""
        return self._path

    @property
    def closed(self) -> bool:
        """Check whether the handle has been closed."""
        return self._fd is None

    def fileno(self) -> int:
        """Return the underlying descriptor.

        Raises:
            MountError: If the handle is closed.
        """
        if self._fd is None:
            raise MountError("fileno", detail=f"mount handle on {self._path} is closed")
        return self._fd

    def close(self) -> None:
        """Close the handle. Closing twice does nothing.

        Raises:
            MountError: If the descriptor cannot be closed.
        """
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            os.close(fd)
        except OSError as e:
            raise MountError("close", e.errno, e.strerror) from e

    def __enter__(self) -> MountHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
