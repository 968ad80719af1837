"""
Ancestor preserving filtering of the device tree.

A device is kept (or left visible) when it matches the predicate or when
any of its descendants does, so the hubs leading to a matching device are
always part of the result.
"""

from dataclasses import dataclass
from typing import Optional

from .constant import ClassCode

__all__ = ["retain", "hide", "retain_buses", "hide_buses", "DeviceFilter"]

def retain(devices, predicate):
    """
    Remove in place every device whose subtree has no match.

    :returns: devices
    """
    kept = []
    for device in devices:
        if device.devices:
            retain(device.devices, predicate)
        if device.devices or predicate(device):
            kept.append(device)
    devices[:] = kept
    return devices

def hide(devices, predicate):
    """
    Mark hidden every device whose subtree has no match, and unmark the
    others. The tree structure is left untouched.

    :returns: True if any device remains visible
    """
    any_visible = False
    for device in devices:
        visible = hide(device.devices or [], predicate)
        visible = predicate(device) or visible
        device.hidden = not visible
        any_visible = any_visible or visible
    return any_visible

def retain_buses(buses, predicate, exclude_empty = False):
    """
    retain() over each bus; with exclude_empty, buses left without
    devices are removed too.
    """
    for bus in buses:
        if bus.devices:
            retain(bus.devices, predicate)
    if exclude_empty:
        buses[:] = [b for b in buses if b.devices]
    return buses

def hide_buses(buses, predicate, exclude_empty = False):
    for bus in buses:
        visible = hide(bus.devices or [], predicate)
        bus.hidden = exclude_empty and not visible
    return buses

@dataclass
class DeviceFilter:
    """
    Match criteria for devices, usable as a retain()/hide() predicate.
    Unset criteria match anything. `name` and `serial` match substrings,
    case insensitive. `base_class` matches the device class or the class
    of any of its interfaces.
    """
    vendor_id: Optional[int] = None
    product_id: Optional[int] = None
    bus: Optional[int] = None
    number: Optional[int] = None
    name: Optional[str] = None
    serial: Optional[str] = None
    base_class: Optional[int] = None
    exclude_empty_hub: bool = False
    exclude_empty_bus: bool = False

    def _class_match(self, device):
        if device.class_code == self.base_class:
            return True
        return any(i.class_code == self.base_class for i in device.interfaces())

    @staticmethod
    def _contains(value, pattern):
        return value is not None and pattern.lower() in value.lower()

    def is_match(self, device):
        if self.vendor_id is not None and device.vendor_id != self.vendor_id:
            return False
        if self.product_id is not None and device.product_id != self.product_id:
            return False
        if self.bus is not None and device.bus != self.bus:
            return False
        if self.number is not None and device.address != self.number:
            return False
        if self.name is not None and not self._contains(device.name, self.name):
            return False
        if self.serial is not None and not self._contains(device.serial, self.serial):
            return False
        if self.base_class is not None and not self._class_match(device):
            return False
        if self.exclude_empty_hub and device.class_code == ClassCode.Hub \
           and not device.has_devices():
            return False
        return True

    __call__ = is_match

    def retain_buses(self, buses):
        return retain_buses(buses, self, self.exclude_empty_bus)

    def hide_buses(self, buses):
        return hide_buses(buses, self, self.exclude_empty_bus)
