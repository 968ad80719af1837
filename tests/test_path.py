"""Tests for port paths."""

import pytest

from usbtree.path import PortPath
from usbtree.exception import InvalidPortPath


class TestParse:
    def test_nested(self):
        p = PortPath.parse("1-2.3")
        assert p.bus == 1
        assert p.ports == (2, 3)
        assert p.depth == 2
        assert p.port == 3

    def test_root(self):
        p = PortPath.parse("3-0")
        assert p.is_root
        assert p.ports == ()
        assert str(p) == "3-0"

    def test_interface_suffix_ignored(self):
        assert PortPath.parse("1-4.1:1.0") == PortPath(1, [4, 1])

    @pytest.mark.parametrize("text", ["", "1", "1-", "x-1", "1-2.a", "1-2.0", "300-1"])
    def test_malformed(self, text):
        with pytest.raises(InvalidPortPath):
            PortPath.parse(text)

    def test_invalid_path_is_value_error(self):
        with pytest.raises(ValueError):
            PortPath(1, [256])


class TestRelations:
    def test_parent(self):
        assert PortPath.parse("1-2.3").parent() == PortPath(1, [2])
        assert PortPath(1, [2]).parent() == PortPath(1)
        assert PortPath(1).parent() is None

    def test_child(self):
        assert PortPath(2, [1]).child(4) == PortPath.parse("2-1.4")

    def test_ancestor(self):
        hub = PortPath(1, [2])
        assert hub.is_ancestor_of(PortPath(1, [2, 3, 1]))
        assert PortPath(1).is_ancestor_of(hub)
        assert not hub.is_ancestor_of(hub)
        assert not hub.is_ancestor_of(PortPath(1, [3, 2]))
        assert not hub.is_ancestor_of(PortPath(2, [2, 1]))

    def test_ordering_and_hash(self):
        paths = [PortPath.parse(t) for t in ("2-1", "1-2.1", "1-2", "1-10")]
        assert [str(p) for p in sorted(paths)] == ["1-2", "1-2.1", "1-10", "2-1"]
        assert len({PortPath(1, [2]), PortPath.parse("1-2")}) == 1

    def test_str_round_trip(self):
        assert str(PortPath.parse("4-1.2.3")) == "4-1.2.3"
