"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import errno
import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from rbhgc.gc.resolver import HandleResolver
from rbhgc.models.entry import Identity

StoreFactory = Callable[[list[dict[str, object]]], Path]


class FakeResolver(HandleResolver):
    """Resolver answering from a table instead of the filesystem.

    Identities mapped to None resolve to a real descriptor on
    ``target``; identities mapped to an errno raise it. Unknown
    identities are reported as gone.
    """

    def __init__(self, table: dict[Identity, int | None], target: Path) -> None:
        self.table = table
        self.target = target
        self.calls: list[tuple[int, Identity, int]] = []
        self.opened: list[int] = []

    def open(self, mount_fd: int, identity: Identity, flags: int) -> int:
        self.calls.append((mount_fd, identity, flags))
        code = self.table.get(identity, errno.ENOENT)
        if code is not None:
            raise OSError(code, os.strerror(code))
        fd = os.open(self.target, os.O_RDONLY)
        self.opened.append(fd)
        return fd


@pytest.fixture
def id1() -> Identity:
    return Identity(b"\x01\x01")


@pytest.fixture
def id2() -> Identity:
    return Identity(b"\x02\x02")


@pytest.fixture
def id3() -> Identity:
    return Identity(b"\x03\x03")


@pytest.fixture
def probe_target(tmp_path: Path) -> Path:
    """A regular file that present identities resolve to."""
    target = tmp_path / "present.bin"
    target.write_bytes(b"")
    return target


@pytest.fixture
def make_resolver(probe_target: Path) -> Callable[[dict[Identity, int | None]], FakeResolver]:
    """Factory for FakeResolver instances."""

    def _make(table: dict[Identity, int | None]) -> FakeResolver:
        return FakeResolver(table, probe_target)

    return _make


@pytest.fixture
def make_store(tmp_path: Path) -> StoreFactory:
    """Factory writing a JSON Lines store and returning its path."""

    def _make(records: list[dict[str, object]]) -> Path:
        store = tmp_path / "store.jsonl"
        store.write_text("".join(json.dumps(r) + "\n" for r in records))
        return store

    return _make


@pytest.fixture
def read_store() -> Callable[[Path], list[dict[str, object]]]:
    """Reader returning the records of a JSON Lines store."""

    def _read(path: Path) -> list[dict[str, object]]:
        return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]

    return _read
