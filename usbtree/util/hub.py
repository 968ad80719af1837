import struct
import logging
import enum
from dataclasses import dataclass, field
from typing import List, Optional

from ..capability import ControlRequest
from ..exception import *
from ..constant import *

logger = logging.getLogger(__name__)

class HubClassRequest(enum.IntEnum):
    GetStatus = 0
    ClearFeature = 1
    GetState = 2
    SetFeature = 3
    GetDescriptor = 6
    SetDescriptor = 7
    ClearTtBuffer = 8
    ResetTt = 9
    GetTtState = 10
    StopTt = 11

class HubStatus(enum.IntFlag):
    LocalPowerSource = 0x0001
    OverCurrent      = 0x0002

class PortStatus(enum.IntFlag):
    CurrentConnection = 0x0001
    Enable            = 0x0002
    Suspend           = 0x0004
    OverCurrent       = 0x0008
    Reset             = 0x0010
    Power             = 0x0100
    LowSpeed          = 0x0200
    HighSpeed         = 0x0400
    TestMode          = 0x0800
    Indicator         = 0x1000

class SsPortStatus(enum.IntFlag):
    CurrentConnection = 0x0001
    Enable            = 0x0002
    OverCurrent       = 0x0008
    Reset             = 0x0010
    Power             = 0x0200

@dataclass
class HubDescriptor:
    """
    Hub class descriptor, USB 2 (0x29) or SuperSpeed (0x2a) layout.
    """
    descriptor_type: int
    num_ports: int
    characteristics: int
    power_on_to_power_good: int
    control_current: int
    device_removable: int
    header_decode_latency: Optional[int] = None
    hub_delay: Optional[int] = None

    @property
    def super_speed(self):
        return self.descriptor_type == DescriptorType.SsHub

    def removable(self, port):
        """
        Whether a device on port (1-based) can be unplugged. DeviceRemovable
        sets the bit of non-removable ports, bit 0 is reserved.
        """
        return not (self.device_removable >> port) & 1

    @classmethod
    def decode(cls, desc):
        if len(desc) < 7:
            raise DescriptorTooShort(cls.__name__, 7, len(desc))
        l, t, port_count, car, pwr, cont = struct.unpack("<BBBHBB", desc[:7])
        if t == DescriptorType.SsHub:
            if len(desc) < 12:
                raise DescriptorTooShort(cls.__name__, 12, len(desc))
            declat, delay, fixed = struct.unpack("<BHH", desc[7:12])
            return cls(t, port_count, car, pwr, cont, fixed, declat, delay)
        bc = (port_count + 8) // 8
        if len(desc) < 7 + bc:
            raise DescriptorTooShort(cls.__name__, 7 + bc, len(desc))
        fixed = int.from_bytes(desc[7 : 7 + bc], "little")
        return cls(t, port_count, car, pwr, cont, fixed)

@dataclass
class Port:
    index: int
    removable: bool
    status: Optional[int] = None
    change: Optional[int] = None

    @property
    def connected(self):
        return bool(self.status and self.status & PortStatus.CurrentConnection)

@dataclass
class Hub:
    descriptor: HubDescriptor
    status: Optional[HubStatus] = None
    ports: List[Port] = field(default_factory = list)

    def __getitem__(self, index):
        return self.ports[index]

    def __len__(self):
        return len(self.ports)

    def __iter__(self):
        return iter(self.ports)

def _status_get(capability, recipient, index):
    st = capability.get_control_message(ControlRequest(
        control_type = RequestTypeType.Class,
        recipient = recipient,
        request = HubClassRequest.GetStatus,
        value = 0,
        index = index,
        length = 4))
    return struct.unpack("<HH", bytes(st[:4]))

def descriptor_get(capability, super_speed = False):
    """
    Retrieve and decode the hub descriptor. Some hubs only answer requests
    for the minimal length, so a shorter request is tried on failure.
    """
    type = DescriptorType.SsHub if super_speed else DescriptorType.Hub
    error = None
    for length in (12, 9):
        try:
            desc = capability.get_control_message(ControlRequest(
                control_type = RequestTypeType.Class,
                recipient = RequestTypeRecipient.Device,
                request = HubClassRequest.GetDescriptor,
                value = type << 8,
                index = 0,
                length = length))
        except Error as e:
            error = e
            continue
        return HubDescriptor.decode(bytes(desc))
    raise error

def hub_get(capability, super_speed = False):
    """
    Hub descriptor, hub status and status of each port. None when the
    device does not answer as a hub.
    """
    try:
        descriptor = descriptor_get(capability, super_speed)
    except Error as e:
        logger.debug("Hub descriptor: %s", e)
        return None

    hub = Hub(descriptor)
    flags = SsPortStatus if descriptor.super_speed else PortStatus
    try:
        hs, _ = _status_get(capability, RequestTypeRecipient.Device, 0)
        hub.status = HubStatus(hs & 0x3)
    except (Error, struct.error) as e:
        logger.debug("Hub status: %s", e)

    for i in range(descriptor.num_ports):
        port = Port(i + 1, descriptor.removable(i + 1))
        try:
            ps, cs = _status_get(capability, RequestTypeRecipient.Other, port.index)
            port.status = flags(ps & sum(flags))
            port.change = cs
        except (Error, struct.error) as e:
            logger.debug("Port %d status: %s", port.index, e)
        hub.ports.append(port)
    return hub
