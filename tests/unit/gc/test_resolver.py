"""Unit tests for handle resolvers and resolver loading."""

import errno
import sys
import types
from collections.abc import Iterator
from pathlib import Path

import pytest
from rbhgc.core.config import ConfigError
from rbhgc.gc.resolver import PROBE_FLAGS, HandleResolver, UnsupportedResolver, load_resolver
from rbhgc.models.entry import Identity


class TableResolver(HandleResolver):
    """Minimal concrete resolver used as a load target."""

    def open(self, mount_fd: int, identity: Identity, flags: int) -> int:
        raise FileNotFoundError(errno.ENOENT, "gone")


class NeedsArgsResolver(HandleResolver):
    """Resolver that cannot be built without arguments."""

    def __init__(self, table: dict[Identity, int]) -> None:
        self.table = table

    def open(self, mount_fd: int, identity: Identity, flags: int) -> int:
        return self.table[identity]


@pytest.fixture
def resolver_module() -> Iterator[str]:
    """Register a throwaway module exposing resolver targets."""
    module = types.ModuleType("rbhgc_test_resolvers")
    module.TableResolver = TableResolver  # type: ignore[attr-defined]
    module.NeedsArgsResolver = NeedsArgsResolver  # type: ignore[attr-defined]
    module.instance = TableResolver()  # type: ignore[attr-defined]
    module.factory = lambda: TableResolver()  # type: ignore[attr-defined]
    module.not_a_resolver = 42  # type: ignore[attr-defined]
    sys.modules[module.__name__] = module
    yield module.__name__
    del sys.modules[module.__name__]


class TestUnsupportedResolver:
    """Tests for UnsupportedResolver."""

    def test_raises_enosys(self) -> None:
        """Every resolution fails with ENOSYS."""
        with pytest.raises(OSError) as exc_info:
            UnsupportedResolver().open(3, Identity(b"\x01"), PROBE_FLAGS)

        assert exc_info.value.errno == errno.ENOSYS


class TestLoadResolver:
    """Tests for load_resolver function."""

    def test_none_selects_unsupported(self) -> None:
        """No reference yields the unsupported resolver."""
        assert isinstance(load_resolver(None), UnsupportedResolver)

    def test_class_reference(self, resolver_module: str) -> None:
        """A class is instantiated."""
        assert isinstance(load_resolver(f"{resolver_module}:TableResolver"), TableResolver)

    def test_instance_reference(self, resolver_module: str) -> None:
        """An instance is used as is."""
        module = sys.modules[resolver_module]
        assert load_resolver(f"{resolver_module}:instance") is module.instance

    def test_factory_reference(self, resolver_module: str) -> None:
        """A factory is called."""
        assert isinstance(load_resolver(f"{resolver_module}:factory"), TableResolver)

    @pytest.mark.parametrize("reference", ["no_colon", ":attr", "module:"])
    def test_malformed_reference(self, reference: str) -> None:
        """References must have the module:attribute form."""
        with pytest.raises(ConfigError, match="module:attribute"):
            load_resolver(reference)

    def test_missing_module(self) -> None:
        """An unimportable module raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot import"):
            load_resolver("rbhgc_no_such_module_xyz:Resolver")

    def test_missing_attribute(self, resolver_module: str) -> None:
        """A missing attribute raises ConfigError."""
        with pytest.raises(ConfigError, match="no attribute"):
            load_resolver(f"{resolver_module}:Nope")

    def test_not_a_resolver(self, resolver_module: str) -> None:
        """Targets that are not resolvers are rejected."""
        with pytest.raises(ConfigError, match="does not provide"):
            load_resolver(f"{resolver_module}:not_a_resolver")

    def test_constructor_needs_arguments(self, resolver_module: str) -> None:
        """A class needing arguments cannot be loaded."""
        with pytest.raises(ConfigError, match="Cannot instantiate"):
            load_resolver(f"{resolver_module}:NeedsArgsResolver")

    @pytest.mark.parametrize(
        ("module_name", "source"),
        [
            ("rbhgc_test_broken_syntax", "def open(:\n"),
            ("rbhgc_test_failing_import", "raise RuntimeError('no handle support')\n"),
        ],
    )
    def test_module_failing_at_import(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        module_name: str,
        source: str,
    ) -> None:
        """A module raising while it is imported is a configuration error."""
        (tmp_path / f"{module_name}.py").write_text(source)
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(ConfigError, match=f"Error loading resolver module '{module_name}'"):
            load_resolver(f"{module_name}:Resolver")
