"""Unit tests for entry models.

Tests for Identity, FsEntry projection and DeleteRecord.
"""

import pytest
from rbhgc.models.entry import DeleteRecord, FsEntry, FsEntryProperty, Identity


class TestIdentity:
    """Tests for Identity dataclass."""

    def test_equality_and_hash(self) -> None:
        """Identities with the same bytes are equal and hash alike."""
        assert Identity(b"\x00\x01") == Identity(b"\x00\x01")
        assert len({Identity(b"\x00\x01"), Identity(b"\x00\x01")}) == 1
        assert Identity(b"\x00\x01") != Identity(b"\x00\x02")

    def test_hex(self) -> None:
        """hex() renders lowercase hex."""
        assert Identity(b"\xab\x01").hex() == "ab01"
        assert str(Identity(b"\xab\x01")) == "ab01"

    def test_from_hex(self) -> None:
        """from_hex() parses the hex form back."""
        assert Identity.from_hex("ab01") == Identity(b"\xab\x01")

    def test_from_hex_invalid(self) -> None:
        """from_hex() rejects non-hex strings."""
        with pytest.raises(ValueError):
            Identity.from_hex("zz")

    def test_non_bytes_rejected(self) -> None:
        """Identity data must be bytes."""
        with pytest.raises(TypeError, match="must be bytes"):
            Identity("ab01")  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        """Identity is frozen."""
        identity = Identity(b"\x01")
        with pytest.raises(AttributeError):
            identity.data = b"\x02"  # type: ignore[misc]


class TestFsEntryFromDict:
    """Tests for FsEntry.from_dict projection."""

    RECORD = {"id": "0a0b", "parent_id": "ff", "name": "report.txt", "gc": True}

    def test_identity_only_projection(self) -> None:
        """Only the identity is populated when only ID is projected."""
        entry = FsEntry.from_dict(self.RECORD, FsEntryProperty.ID)

        assert entry.mask == FsEntryProperty.ID
        assert entry.id == Identity(b"\x0a\x0b")
        assert entry.parent_id is None
        assert entry.name is None

    def test_full_projection(self) -> None:
        """Every projected field present in the record is populated."""
        projection = FsEntryProperty.ID | FsEntryProperty.PARENT_ID | FsEntryProperty.NAME
        entry = FsEntry.from_dict(self.RECORD, projection)

        assert entry.mask == projection
        assert entry.parent_id == Identity(b"\xff")
        assert entry.name == "report.txt"

    def test_missing_optional_fields_left_out_of_mask(self) -> None:
        """Projected fields absent from the record are not in the mask."""
        projection = FsEntryProperty.ID | FsEntryProperty.NAME
        entry = FsEntry.from_dict({"id": "01"}, projection)

        assert entry.mask == FsEntryProperty.ID
        assert entry.name is None

    def test_missing_id_raises(self) -> None:
        """A record without id cannot be projected on ID."""
        with pytest.raises(KeyError):
            FsEntry.from_dict({"name": "x"}, FsEntryProperty.ID)


class TestDeleteRecord:
    """Tests for DeleteRecord dataclass."""

    def test_carries_identity(self) -> None:
        """DeleteRecord holds exactly the identity it was given."""
        identity = Identity(b"\x07")
        assert DeleteRecord(id=identity).id is identity

    def test_equality(self) -> None:
        """DeleteRecords compare by identity."""
        assert DeleteRecord(Identity(b"\x07")) == DeleteRecord(Identity(b"\x07"))
