"""Entry models exchanged with robinhood backends.

This module defines the identity token shared by the backend and the
filesystem, the projected filesystem entries returned by backend
queries, and the deletion records sent back to the backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto
from typing import Any


class FsEntryProperty(Flag):
    """Fields of a filesystem entry a backend may populate.

    Attributes:
        ID: The entry's identity.
        PARENT_ID: The identity of the entry's parent directory.
        NAME: The entry's name in its parent directory.
    """

    ID = auto()
    PARENT_ID = auto()
    NAME = auto()


@dataclass(frozen=True, slots=True)
class Identity:
    """Opaque token naming one filesystem object.

    The bytes are never interpreted: identities are only compared,
    hashed and passed along.

    Attributes:
        data: Raw identifier bytes assigned by the backend.
    """

    data: bytes

    def __post_init__(self) -> None:
        """Validate identity data after initialization."""
        if not isinstance(self.data, bytes):
            msg = f"Identity data must be bytes, got {type(self.data).__name__}"
            raise TypeError(msg)

    def hex(self) -> str:
        """Return the identity as a lowercase hex string."""
        return self.data.hex()

    @classmethod
    def from_hex(cls, value: str) -> Identity:
        """Build an identity from its hex representation.

        Args:
            value: Hex string, as produced by :meth:`hex`.

        Returns:
            Identity instance.

        Raises:
            ValueError: If value is not valid hex.
        """
        return cls(bytes.fromhex(value))

    def __str__(self) -> str:
        return self.hex()


@dataclass(frozen=True, slots=True)
class FsEntry:
    """A filesystem entry as projected by a backend query.

    Only the fields listed in ``mask`` are meaningful; the others are
    left to None.

    Attributes:
        mask: Fields populated by the backend.
        id: Identity of the entry.
        parent_id: Identity of the parent directory.
        name: Name of the entry in its parent directory.
    """

    mask: FsEntryProperty
    id: Identity | None = None
    parent_id: Identity | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], projection: FsEntryProperty) -> FsEntry:
        """Build a projected entry from a stored record.

        Args:
            data: Stored record with hex-encoded identities.
            projection: Fields to populate.

        Returns:
            FsEntry with only the projected fields set.

        Raises:
            KeyError: If a projected field is missing from the record.
            TypeError: If an identity is not a string.
            ValueError: If an identity is not valid hex.
        """
        mask = FsEntryProperty(0)
        entry_id: Identity | None = None
        parent_id: Identity | None = None
        name: str | None = None

        if FsEntryProperty.ID in projection:
            entry_id = Identity.from_hex(data["id"])
            mask |= FsEntryProperty.ID
        if FsEntryProperty.PARENT_ID in projection and data.get("parent_id") is not None:
            parent_id = Identity.from_hex(data["parent_id"])
            mask |= FsEntryProperty.PARENT_ID
        if FsEntryProperty.NAME in projection and data.get("name") is not None:
            name = data["name"]
            mask |= FsEntryProperty.NAME

        return cls(mask=mask, id=entry_id, parent_id=parent_id, name=name)


@dataclass(frozen=True, slots=True)
class DeleteRecord:
    """Request to erase the backend record of one entry.

    Attributes:
        id: Identity of the entry to erase.
    """

    id: Identity
