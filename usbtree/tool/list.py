import logging
from ..profiler import Profiler

def list_lines(profile):
    """
    lsusb style lines, one per device, root hubs included.
    """
    for bus in profile.buses:
        devices = []
        if bus.root_hub_address is not None:
            devices.append((bus.root_hub_address, bus.host_controller_vendor,
                            bus.host_controller_device, bus.host_controller,
                            bus.name))
        for d in bus.flattened_devices():
            devices.append((d.address, d.vendor_id, d.product_id,
                            d.manufacturer, d.name))
        for address, vid, pid, manufacturer, product in sorted(devices, key = lambda x: x[0]):
            yield "Bus %03d Device %03d: ID %04x:%04x %s %s" % (
                bus.usb_bus_number, address, vid or 0, pid or 0,
                manufacturer or "", product or "")

def usbtree_list():
    with Profiler() as profiler:
        profile = profiler.profile()
    for line in list_lines(profile):
        print(line)

if __name__ == "__main__":
    logging.basicConfig(level = logging.WARNING)
    usbtree_list()
