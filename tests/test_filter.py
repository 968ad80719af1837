"""Tests for ancestor preserving filters."""

import pytest

from usbtree.filter import DeviceFilter, hide, hide_buses, retain, retain_buses
from usbtree.model import (Configuration, Device, DeviceExtra, Interface,
                           LocationId)
from usbtree.topology import assemble


def device(ports, vendor_id, class_code = 0, **kwargs):
    return Device(LocationId(1, len(ports) + sum(ports), list(ports)),
                  vendor_id = vendor_id, product_id = 0x0001,
                  class_code = class_code, **kwargs)


@pytest.fixture
def profile():
    """
    1-1 hub
      1-1.1 keyboard (0x046d)
      1-1.2 hub
        1-1.2.1 audio (0x08bb)
    1-2 storage (0x0781)
    1-3 empty hub
    """
    audio = device([1, 2, 1], 0x08bb, name = "USB Audio CODEC",
                   extra = DeviceExtra(configurations = [Configuration(
                       1, 0x80, 50, interfaces = [Interface(0, 0, 0x01, 0x01, 0x00)])]))
    return assemble([
        device([1], 0x05e3, 0x09),
        device([1, 1], 0x046d, serial = "ABC123"),
        device([1, 2], 0x05e3, 0x09),
        audio,
        device([2], 0x0781),
        device([3], 0x05e3, 0x09),
    ])


def paths(devices):
    return sorted(str(d.port_path()) for top in devices for d in top.flatten())


class TestRetain:
    def test_keeps_ancestors_and_prunes_siblings(self, profile):
        bus = profile.buses[0]
        retain(bus.devices, lambda d: d.vendor_id == 0x08bb)
        assert paths(bus.devices) == ["1-1", "1-1.2", "1-1.2.1"]

    def test_no_match(self, profile):
        bus = profile.buses[0]
        retain(bus.devices, lambda d: False)
        assert bus.devices == []

    def test_descendants_of_match_are_filtered(self, profile):
        bus = profile.buses[0]
        retain(bus.devices, lambda d: d.class_code == 0x09)
        assert paths(bus.devices) == ["1-1", "1-1.2", "1-3"]


class TestHide:
    def test_marks_instead_of_removing(self, profile):
        bus = profile.buses[0]
        assert hide(bus.devices, lambda d: d.vendor_id == 0x046d)
        visible = [str(d.port_path()) for d in bus.flattened_devices() if not d.hidden]
        assert visible == ["1-1", "1-1.1"]
        assert len(list(bus.flattened_devices())) == 6
        assert bus.devices[0].has_visible_devices()

    def test_hide_buses_exclude_empty(self, profile):
        hide_buses(profile.buses, lambda d: False, exclude_empty = True)
        assert profile.buses[0].hidden


class TestDeviceFilter:
    def test_vendor(self, profile):
        DeviceFilter(vendor_id = 0x0781).retain_buses(profile.buses)
        assert paths(profile.buses[0].devices) == ["1-2"]

    def test_name_substring(self, profile):
        DeviceFilter(name = "audio").retain_buses(profile.buses)
        assert paths(profile.buses[0].devices) == ["1-1", "1-1.2", "1-1.2.1"]

    def test_serial(self, profile):
        DeviceFilter(serial = "abc").retain_buses(profile.buses)
        assert paths(profile.buses[0].devices) == ["1-1", "1-1.1"]

    def test_interface_class(self, profile):
        f = DeviceFilter(base_class = 0x01)
        assert [str(d.port_path()) for d in profile.flattened_devices() if f(d)] == ["1-1.2.1"]

    def test_exclude_empty_hub(self, profile):
        DeviceFilter(base_class = 0x09, exclude_empty_hub = True).retain_buses(profile.buses)
        assert "1-3" not in paths(profile.buses[0].devices)

    def test_exclude_empty_bus(self, profile):
        DeviceFilter(vendor_id = 0xdead, exclude_empty_bus = True).retain_buses(profile.buses)
        assert profile.buses == []

    def test_unset_criteria_match_everything(self, profile):
        assert all(DeviceFilter()(d) for d in profile.flattened_devices())
