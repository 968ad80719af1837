"""Tests for hub descriptor and port status retrieval."""

import pytest

from usbtree.exception import DescriptorTooShort
from usbtree.util.hub import HubDescriptor, HubStatus, PortStatus, hub_get

USB2_HUB = bytes([9, 0x29, 4, 0xe9, 0x00, 50, 100, 0x02, 0xff])
SS_HUB = bytes([12, 0x2a, 2, 0x09, 0x00, 50, 0, 4, 0x00, 0x01, 0x00, 0x00])


class TestHubDescriptor:
    def test_usb2(self):
        d = HubDescriptor.decode(USB2_HUB)
        assert d.num_ports == 4
        assert d.characteristics == 0xe9
        assert not d.super_speed
        assert not d.removable(1)
        assert d.removable(2)

    def test_super_speed(self):
        d = HubDescriptor.decode(SS_HUB)
        assert d.super_speed
        assert d.num_ports == 2
        assert d.hub_delay == 0x0100
        assert d.removable(1) and d.removable(2)

    def test_truncated(self):
        with pytest.raises(DescriptorTooShort):
            HubDescriptor.decode(USB2_HUB[:7])


class TestHubGet:
    def test_ports(self, device_stub):
        replies = {
            (6, 0x2900, 0): USB2_HUB,
            (0, 0, 0): bytes([0x01, 0x00, 0x00, 0x00]),
            (0, 0, 1): bytes([0x03, 0x01, 0x00, 0x00]),
            (0, 0, 2): bytes([0x00, 0x01, 0x00, 0x00]),
        }
        hub = hub_get(device_stub(replies))
        assert hub.status == HubStatus.LocalPowerSource
        assert len(hub) == 4
        assert hub[0].connected
        assert hub[0].status == (PortStatus.CurrentConnection | PortStatus.Enable
                                 | PortStatus.Power)
        assert not hub[1].connected
        assert hub[2].status is None

    def test_not_a_hub(self, device_stub):
        assert hub_get(device_stub()) is None
