"""JSON Lines backend.

Stores one record per line in a single file::

    {"id": "0a1b", "parent_id": "ff00", "name": "report.txt", "gc": false}

``gc`` is set by the change-tracking process once an entry has been
unlinked from the namespace and may be garbage collected.
"""

import errno
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import IO, Any

from rbhgc.backends.base import Backend, BackendOption, FilterOptions
from rbhgc.errors import BackendError
from rbhgc.iterators.base import OwningIterator
from rbhgc.models.entry import DeleteRecord, FsEntry, FsEntryProperty, Identity

logger = logging.getLogger(__name__)


class JsonlEntryIterator(OwningIterator[FsEntry]):
    """Lazily reads the records of a JSON Lines store.

    Args:
        path: Store file.
        gc: Only yield records whose ``gc`` flag equals this value.
        projection: Entry fields to populate.
    """

    def __init__(self, path: Path, *, gc: bool, projection: FsEntryProperty) -> None:
        self._path = path
        self._gc = gc
        self._projection = projection
        self._line_num = 0
        try:
            self._file: IO[bytes] | None = path.open("rb")
        except OSError as e:
            raise BackendError(
                "rbh_backend_filter", e.errno, f"cannot read {path}: {e.strerror}"
            ) from e

    def __next__(self) -> FsEntry:
        if self._file is None:
            raise StopIteration

        for line in self._file:
            self._line_num += 1
            record = _parse_record(line, self._path, self._line_num, "rbh_backend_filter")
            if record is None or bool(record.get("gc", False)) != self._gc:
                continue
            try:
                return FsEntry.from_dict(record, self._projection)
            except (KeyError, TypeError, ValueError) as e:
                raise BackendError(
                    "rbh_backend_filter",
                    errno.EILSEQ,
                    f"invalid record at {self._path}:{self._line_num}: {e}",
                ) from e

        raise StopIteration

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class JsonlBackend(Backend):
    """Backend storing entries in a JSON Lines file.

    Args:
        path: Store file. It must exist.

    Raises:
        BackendError: If the store file does not exist.
    """

    def __init__(self, path: Path) -> None:
        if not path.is_file():
            raise BackendError(
                "rbh_backend_from_uri", errno.ENOENT, f"no such store file: {path}"
            )
        self._path = path
        self._gc = False
        self._closed = False
        logger.info("Opened jsonl backend at %s", path)

    @property
    def name(self) -> str:
        return "jsonl"

    @property
    def path(self) -> Path:
        """Path to the store file."""
        return self._path

    def set_option(self, option: BackendOption, value: object) -> None:
        self._check_open("rbh_backend_set_option")
        if option != BackendOption.GC:
            raise BackendError("rbh_backend_set_option", errno.ENOTSUP)
        if not isinstance(value, bool):
            raise BackendError(
                "rbh_backend_set_option",
                errno.EINVAL,
                f"{option.value} expects a boolean, got {type(value).__name__}",
            )
        self._gc = value
        logger.info("Backend %s: %s set to %s", self.name, option.value, value)

    def filter(self, filter_: object | None, options: FilterOptions) -> JsonlEntryIterator:
        self._check_open("rbh_backend_filter")
        if filter_ is not None:
            raise BackendError(
                "rbh_backend_filter", errno.ENOTSUP, "the jsonl backend does not support filters"
            )
        return JsonlEntryIterator(
            self._path,
            gc=self._gc,
            projection=options.projection.fsentry_mask,
        )

    def update(self, records: Iterator[DeleteRecord]) -> int:
        """Drop the records named by a deletion stream.

        The whole stream is consumed before the store is touched, so the
        identities to drop are kept in memory until the single atomic
        rewrite. This costs memory proportional to the number of
        deletions on this side of the sink only; the stream feeding it
        still holds one record at a time.

        Args:
            records: Deletion records to apply.

        Returns:
            Number of deletion records consumed.

        Raises:
            BackendError: If the backend is closed or the store cannot be
                rewritten. The store is left unchanged.
        """
        self._check_open("rbh_backend_update")

        doomed: set[Identity] = set()
        count = 0
        for record in records:
            doomed.add(record.id)
            count += 1

        if doomed:
            self._commit_deletions(doomed)
        logger.info("Backend %s: %d record(s) deleted", self.name, count)
        return count

    def close(self) -> None:
        self._closed = True

    def _commit_deletions(self, doomed: set[Identity]) -> None:
        """Rewrite the store without the doomed records.

        The file is written atomically by first writing to a temporary
        file and then using os.replace() for atomic rename.

        Args:
            doomed: Identities of the records to drop.

        Raises:
            BackendError: If the store cannot be rewritten.
        """
        doomed_hex = {identity.hex() for identity in doomed}
        tmp_path: Path | None = None
        try:
            with (
                self._path.open("rb") as src,
                NamedTemporaryFile(
                    mode="wb",
                    dir=self._path.parent,
                    delete=False,
                    suffix=".tmp",
                ) as dst,
            ):
                tmp_path = Path(dst.name)
                for line_num, line in enumerate(src, start=1):
                    record = _parse_record(line, self._path, line_num, "rbh_backend_update")
                    if record is not None and record.get("id") in doomed_hex:
                        continue
                    dst.write(line if line.endswith(b"\n") else line + b"\n")
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise BackendError("rbh_backend_update", e.errno, str(e)) from e
        except BackendError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise BackendError(operation, errno.EBADF)


def _parse_record(
    line: bytes, path: Path, line_num: int, operation: str
) -> dict[str, Any] | None:
    """Parse one line of the store.

    Args:
        line: Raw line, including its newline.
        path: Store file, for error messages.
        line_num: 1-based line number, for error messages.
        operation: Operation reported if the line is corrupt.

    Returns:
        Parsed record, or None for blank lines.

    Raises:
        BackendError: If the line is not a UTF-8 encoded JSON object.
    """
    try:
        text = line.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise BackendError(
            operation, errno.EILSEQ, f"corrupt record at {path}:{line_num}: {e}"
        ) from e
    if not text:
        return None
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackendError(
            operation, errno.EILSEQ, f"corrupt record at {path}:{line_num}: {e}"
        ) from e
    if not isinstance(record, dict):
        raise BackendError(
            operation, errno.EILSEQ, f"corrupt record at {path}:{line_num}: not an object"
        )
    return record
