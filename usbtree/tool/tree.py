import argparse
import logging
from ..profiler import Profiler
from ..filter import DeviceFilter

def hex_int(value):
    return int(value, 16)

def device_dump(device, depth, with_extra):
    if device.hidden:
        return
    pfx = "    " * depth
    print("%s%s %04x:%04x %s %s" % (
        pfx, device.port_path(),
        device.vendor_id or 0, device.product_id or 0,
        device.manufacturer or "", device.name or ""))

    hub = device.extra.hub if with_extra and device.extra else None
    if hub is not None:
        print("%s  Hub Status %s" % (pfx, hub.status))
        for port in hub:
            print("%s  * Port %d (%s) %s" % (
                pfx, port.index, "removable" if port.removable else "fixed",
                port.status))

    for child in device.devices or ():
        device_dump(child, depth + 1, with_extra)

def tree(profile, with_extra):
    for bus in profile.buses:
        if bus.hidden:
            continue
        print("Bus %03d %s" % (bus.usb_bus_number, bus.host_controller or bus.name or ""))
        for d in bus.devices or ():
            device_dump(d, 1, with_extra)

def main():
    parser = argparse.ArgumentParser(description = "Print the USB bus/device tree")
    parser.add_argument("-d", "--vid", type = hex_int, help = "Vendor ID, hex")
    parser.add_argument("-p", "--pid", type = hex_int, help = "Product ID, hex")
    parser.add_argument("-b", "--bus", type = int)
    parser.add_argument("-n", "--name", help = "Product name substring")
    parser.add_argument("-s", "--serial", help = "Serial number substring")
    parser.add_argument("-c", "--class", dest = "base_class", type = hex_int,
                        help = "Device or interface class, hex")
    parser.add_argument("--hide-empty-hubs", action = "store_true")
    parser.add_argument("--hide-empty-buses", action = "store_true")
    parser.add_argument("-x", "--extra", action = "store_true",
                        help = "Read hub port status and class descriptors")
    parser.add_argument("--lenient", action = "store_true",
                        help = "Skip devices whose parent hub is missing")
    parser.add_argument("-v", "--verbose", action = "count", default = 0)
    args = parser.parse_args()

    logging.basicConfig(
        level = logging.DEBUG if args.verbose > 1 else
                logging.INFO if args.verbose else logging.WARNING,
        format = "%(asctime)s %(name)s %(levelname)s: %(message)s")

    criteria = DeviceFilter(vendor_id = args.vid, product_id = args.pid,
                            bus = args.bus, name = args.name,
                            serial = args.serial, base_class = args.base_class,
                            exclude_empty_hub = args.hide_empty_hubs,
                            exclude_empty_bus = args.hide_empty_buses)

    with Profiler(with_extra = args.extra, strict = not args.lenient) as profiler:
        profile = profiler.profile()
    criteria.hide_buses(profile.buses)
    tree(profile, args.extra)

if __name__ == "__main__":
    main()
