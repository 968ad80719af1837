"""Tests for the device tree assembler."""

import itertools
import logging

import pytest

from usbtree.exception import TopologyError
from usbtree.model import Bus, Device, LocationId, SystemProfile
from usbtree.path import PortPath
from usbtree.topology import assemble, merge


def device(bus, ports, address = 1, **kwargs):
    return Device(LocationId(bus, address, list(ports)), **kwargs)


def tree(profile):
    """
    Nested (path, children) view of a profile, for comparisons.
    """
    def node(d):
        return (str(d.port_path()), [node(c) for c in d.devices])
    return [(b.usb_bus_number, [node(d) for d in b.devices]) for b in profile.buses]


class TestAssemble:
    def test_flat_bus(self):
        devices = [device(1, [3], 4), device(1, [1], 2), device(1, [2], 3)]
        profile = assemble(devices)
        assert tree(profile) == [(1, [("1-1", []), ("1-2", []), ("1-3", [])])]

    def test_order_independent(self):
        devices = [device(1, [2], 2), device(1, [2, 1], 3), device(1, [2, 1, 4], 4),
                   device(1, [2, 3], 5), device(2, [1], 2)]
        expected = tree(assemble(list(devices)))
        for permutation in itertools.permutations(devices):
            for d in devices:
                d.devices = None
            assert tree(assemble(list(permutation))) == expected

    def test_three_levels(self):
        devices = [device(1, [1, 4, 2]), device(1, [1]), device(1, [1, 4]),
                   device(1, [1, 2])]
        profile = assemble(devices)
        assert tree(profile) == [(1, [
            ("1-1", [
                ("1-1.2", []),
                ("1-1.4", [("1-1.4.2", [])]),
            ]),
        ])]
        assert profile.get_node(PortPath.parse("1-1.4.2")) is devices[0]
        assert len(profile) == 4

    def test_missing_parent_strict(self):
        with pytest.raises(TopologyError) as e:
            assemble([device(1, [1]), device(1, [3, 1])])
        assert e.value.parent == PortPath(1, [3])

    def test_missing_parent_lenient(self, caplog):
        with caplog.at_level(logging.WARNING):
            profile = assemble([device(1, [1]), device(1, [3, 1])], strict = False)
        assert tree(profile) == [(1, [("1-1", [])])]
        assert "1-3.1" in caplog.text

    def test_invalid_port_path_rejected(self, caplog):
        with caplog.at_level(logging.WARNING):
            profile = assemble([device(1, [1]), device(1, [0, 2])])
        assert tree(profile) == [(1, [("1-1", [])])]
        assert "Ignoring device" in caplog.text

    def test_root_hub_is_bus_metadata(self):
        root = device(2, [], 1, vendor_id = 0x1d6b, product_id = 0x0002,
                      name = "EHCI Host Controller", manufacturer = "Linux xhci-hcd")
        profile = assemble([device(2, [1], 2), root])
        bus, = profile.buses
        assert bus.usb_bus_number == 2
        assert bus.host_controller_vendor == 0x1d6b
        assert bus.host_controller == "Linux xhci-hcd"
        assert bus.root_hub_address == 1
        assert [d.address for d in bus.devices] == [2]

    def test_bus_metadata_kept(self):
        buses = {1: Bus(name = "bus one"), 3: Bus(name = "empty")}
        profile = assemble([device(1, [1])], buses)
        assert [b.usb_bus_number for b in profile.buses] == [1, 3]
        assert profile.buses[0].name == "bus one"
        assert profile.buses[1].devices == []

    def test_buses_sorted(self):
        profile = assemble([device(3, [1]), device(1, [1]), device(2, [1])])
        assert [b.usb_bus_number for b in profile.buses] == [1, 2, 3]


class TestMerge:
    def test_replaces_devices_and_keeps_metadata(self):
        existing = SystemProfile([Bus(1, name = "kept", devices = [device(1, [1])])])
        fresh = assemble([device(1, [2]), device(4, [1])])
        merged = merge(existing, fresh)
        assert merged is existing
        assert [b.usb_bus_number for b in merged.buses] == [1, 4]
        assert merged.buses[0].name == "kept"
        assert [str(d.port_path()) for d in merged.buses[0].devices] == ["1-2"]

    def test_bus_missing_from_fresh_untouched(self):
        existing = SystemProfile([Bus(1, devices = [device(1, [1])])])
        merge(existing, assemble([device(2, [1])]))
        assert [str(d.port_path()) for d in existing.buses[0].devices] == ["1-1"]
