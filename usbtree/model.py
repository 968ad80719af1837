"""
Snapshot model of the USB tree: buses own their top level devices, devices
own their children and their configurations, configurations own
interfaces, interfaces own endpoints.

Nodes never point to their parent; parents are found by port path.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .constant import ClassCode, Speed, enum_or_int
from .descriptor import ClassCodeTriplet
from .path import PortPath

__all__ = ["LocationId", "Endpoint", "Interface", "Configuration",
           "DeviceExtra", "Device", "Bus", "SystemProfile"]

@dataclass
class LocationId:
    """
    Device address on its bus and port positions from the root hub.
    """
    bus: int
    number: int
    tree_positions: List[int] = field(default_factory = list)

    @property
    def branch_position(self):
        """
        Port number on the parent hub, 0 for a root hub
        """
        return self.tree_positions[-1] if self.tree_positions else 0

    def port_path(self):
        """
        :raises InvalidPortPath: positions are not a valid path
        """
        return PortPath(self.bus, self.tree_positions)

@dataclass
class Endpoint:
    address: int
    attributes: int
    max_packet_size: int
    interval: int
    refresh: int = 0
    sync_address: int = 0
    extra: list = field(default_factory = list)

    @property
    def direction(self):
        """
        Endpoint direction, either "in" or "out"
        """
        return "in" if self.address & 0x80 else "out"

    @property
    def number(self):
        """
        Endpoint number, without direction bit
        """
        return self.address & 0x0f

    @property
    def type(self):
        """
        Endpoint type, either "control", "isochronous", "bulk" or "interrupt"
        """
        return ["control", "isochronous", "bulk", "interrupt"][self.attributes & 0x3]

@dataclass
class Interface:
    number: int
    alt_setting: int
    class_code: int
    sub_class: int
    protocol: int
    string_index: int = 0
    name: Optional[str] = None
    endpoints: List[Endpoint] = field(default_factory = list)
    extra: list = field(default_factory = list)

    @property
    def triplet(self):
        return ClassCodeTriplet(self.class_code, self.sub_class, self.protocol)

    @property
    def base_class(self):
        return enum_or_int(ClassCode, self.class_code)

@dataclass
class Configuration:
    number: int
    attributes: int
    max_power: int
    string_index: int = 0
    name: Optional[str] = None
    interfaces: List[Interface] = field(default_factory = list)
    extra: list = field(default_factory = list)

    @property
    def self_powered(self):
        return bool(self.attributes & 0x40)

    @property
    def remote_wakeup(self):
        return bool(self.attributes & 0x20)

@dataclass
class DeviceExtra:
    """
    Details only available once the device was opened.
    """
    max_packet_size0: int = 0
    configurations: List[Configuration] = field(default_factory = list)
    status: Optional[int] = None
    hub: Optional[object] = None
    qualifier: Optional[object] = None
    debug: Optional[object] = None
    bos: Optional[object] = None
    webusb_url: Optional[str] = None

@dataclass
class Device:
    location_id: LocationId
    vendor_id: Optional[int] = None
    product_id: Optional[int] = None
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    serial: Optional[str] = None
    bcd_usb: Optional[int] = None
    bcd_device: Optional[int] = None
    class_code: Optional[int] = None
    sub_class: int = 0
    protocol: int = 0
    speed: Optional[Speed] = None
    extra: Optional[DeviceExtra] = None
    devices: Optional[List["Device"]] = None
    hidden: bool = False

    @property
    def bus(self):
        return self.location_id.bus

    @property
    def address(self):
        return self.location_id.number

    @property
    def ports(self):
        return list(self.location_id.tree_positions)

    @property
    def base_class(self):
        if self.class_code is None:
            return None
        return enum_or_int(ClassCode, self.class_code)

    @property
    def triplet(self):
        return ClassCodeTriplet(self.class_code or 0, self.sub_class, self.protocol)

    def port_path(self):
        return self.location_id.port_path()

    def parent_path(self):
        return self.port_path().parent()

    def is_root_hub(self):
        return not self.location_id.tree_positions

    def is_hub(self):
        return self.class_code == ClassCode.Hub

    def has_devices(self):
        return bool(self.devices)

    def has_visible_devices(self):
        return any(not d.hidden for d in self.devices or ())

    def interfaces(self):
        """
        Iterator over interfaces of all configurations
        """
        if self.extra is None:
            return
        for c in self.extra.configurations:
            yield from c.interfaces

    def get_node(self, path):
        """
        Find the device at path within this subtree, None if absent.
        """
        own = self.port_path()
        if own == path:
            return self
        if not own.is_ancestor_of(path):
            return None
        for d in self.devices or ():
            found = d.get_node(path)
            if found is not None:
                return found
        return None

    def flatten(self):
        """
        Iterator over this device and all its descendants, depth first
        """
        yield self
        for d in self.devices or ():
            yield from d.flatten()

    def __str__(self):
        return "%s %04x:%04x %s" % (
            self.port_path(), self.vendor_id or 0, self.product_id or 0,
            self.name or "")

@dataclass
class Bus:
    usb_bus_number: Optional[int] = None
    name: Optional[str] = None
    host_controller: Optional[str] = None
    host_controller_vendor: Optional[int] = None
    host_controller_device: Optional[int] = None
    root_hub_address: Optional[int] = None
    devices: Optional[List[Device]] = None
    hidden: bool = False

    @classmethod
    def from_root_hub(cls, device):
        """
        Bus metadata taken from its root hub device.
        """
        return cls(usb_bus_number = device.bus,
                   name = device.name,
                   host_controller = device.manufacturer,
                   host_controller_vendor = device.vendor_id,
                   host_controller_device = device.product_id,
                   root_hub_address = device.address)

    def has_devices(self):
        return bool(self.devices)

    def has_visible_devices(self):
        return any(not d.hidden for d in self.devices or ())

    def get_node(self, path):
        if path.bus != self.usb_bus_number:
            return None
        for d in self.devices or ():
            found = d.get_node(path)
            if found is not None:
                return found
        return None

    def flattened_devices(self):
        for d in self.devices or ():
            yield from d.flatten()

@dataclass
class SystemProfile:
    buses: List[Bus] = field(default_factory = list)

    def get_bus(self, number):
        for b in self.buses:
            if b.usb_bus_number == number:
                return b
        return None

    def get_node(self, path):
        bus = self.get_bus(path.bus)
        if bus is None:
            return None
        return bus.get_node(path)

    def flattened_devices(self):
        return [d for b in self.buses for d in b.flattened_devices()]

    def __len__(self):
        return len(self.flattened_devices())
