"""
Build the bus/hub/device tree from a flat device enumeration.
"""

from itertools import groupby
import logging

from .exception import *
from .model import Bus, SystemProfile

logger = logging.getLogger(__name__)

__all__ = ["assemble", "merge"]

def _attach(children, devices):
    children.extend(devices)
    children.sort(key = lambda d: d.port_path())

def assemble(devices, buses = None, strict = True):
    """
    Arrange devices into a SystemProfile.

    Devices are grouped by bus, then by parent port path. Groups are
    inserted from the shallowest to the deepest so the parent of a group
    is in the tree by the time the group is attached. Children are kept
    sorted by port path, which makes the result independent from the
    enumeration order.

    :param devices: iterable of Device, children not populated
    :param buses: mapping of bus number to Bus metadata, possibly incomplete
    :param strict: raise TopologyError when a device's parent is missing,
        otherwise skip the device with a warning
    :returns: a SystemProfile with buses sorted by number
    """
    buses = dict(buses or {})

    located = []
    for device in devices:
        try:
            path = device.port_path()
        except InvalidPortPath as e:
            logger.warning("Ignoring device %s: %s", device.location_id, e)
            continue
        if path.is_root:
            # Root hubs stand for their bus
            buses.setdefault(path.bus, Bus.from_root_hub(device))
            continue
        device.devices = []
        located.append((path, device))

    located.sort(key = lambda item: item[0].bus)

    profile = SystemProfile()
    for number, members in groupby(located, key = lambda item: item[0].bus):
        bus = buses.pop(number, None) or Bus(usb_bus_number = number)
        bus.usb_bus_number = number
        bus.devices = []

        by_parent = {}
        for path, device in members:
            by_parent.setdefault(path.parent(), []).append(device)

        for parent in sorted(by_parent, key = lambda p: (p.depth, p)):
            children = by_parent[parent]
            if parent.is_root:
                _attach(bus.devices, children)
                continue
            node = bus.get_node(parent)
            if node is None:
                if strict:
                    raise TopologyError(children[0].port_path(), parent)
                for d in children:
                    logger.warning("Skipping device %s: no hub at %s",
                                   d.port_path(), parent)
                continue
            _attach(node.devices, children)

        profile.buses.append(bus)

    for number, bus in buses.items():
        bus.usb_bus_number = number
        bus.devices = bus.devices or []
        profile.buses.append(bus)

    profile.buses.sort(key = lambda b: b.usb_bus_number)
    return profile

def merge(existing, fresh):
    """
    Replace device trees of `existing` buses with the ones of `fresh`
    buses of the same number, keeping the bus metadata of `existing`.
    Buses only known to `fresh` are added.

    :returns: existing, updated in place
    """
    for bus in fresh.buses:
        target = existing.get_bus(bus.usb_bus_number)
        if target is None:
            existing.buses.append(bus)
        else:
            target.devices = bus.devices
    existing.buses.sort(key = lambda b: (b.usb_bus_number is None,
                                         b.usb_bus_number or 0))
    return existing
