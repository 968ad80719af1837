"""Tests for the command line tool output."""

import pytest

try:
    import usb1
except (ImportError, OSError):
    pytest.skip("libusb1 not available", allow_module_level = True)

from usbtree.model import Device, LocationId
from usbtree.tool.list import list_lines
from usbtree.topology import assemble


def device(bus, ports, address, **kwargs):
    return Device(LocationId(bus, address, list(ports)), **kwargs)


class TestList:
    def test_root_hubs_listed(self):
        profile = assemble([
            device(1, [1, 2], 4, vendor_id = 0x046d, product_id = 0xc52b,
                   manufacturer = "Logitech", name = "USB Receiver"),
            device(1, [], 1, vendor_id = 0x1d6b, product_id = 0x0002,
                   manufacturer = "Linux xhci-hcd", name = "xHCI Host Controller"),
            device(1, [1], 3, vendor_id = 0x05e3, product_id = 0x0610),
            device(2, [], 1, vendor_id = 0x1d6b, product_id = 0x0003),
        ])
        assert list(list_lines(profile)) == [
            "Bus 001 Device 001: ID 1d6b:0002 Linux xhci-hcd xHCI Host Controller",
            "Bus 001 Device 003: ID 05e3:0610  ",
            "Bus 001 Device 004: ID 046d:c52b Logitech USB Receiver",
            "Bus 002 Device 001: ID 1d6b:0003  ",
        ]

    def test_bus_without_root_hub(self):
        profile = assemble([device(3, [2], 5, vendor_id = 0x1234, product_id = 0x5678)])
        assert list(list_lines(profile)) == ["Bus 003 Device 005: ID 1234:5678  "]
