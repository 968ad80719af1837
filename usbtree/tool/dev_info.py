import logging
from ..profiler import Profiler
from ..filter import DeviceFilter

def descriptor_dump(pfx, descriptors):
    for d in descriptors:
        print("%s%r" % (pfx, d))

def usbtree_dev_info(vid, pid):
    with Profiler(with_extra = True, strict = False) as profiler:
        profile = profiler.profile()
    matching = [d for d in profile.flattened_devices()
                if DeviceFilter(vendor_id = vid, product_id = pid).is_match(d)]
    if len(matching) != 1:
        raise SystemExit("%d devices matching %04x:%04x" % (len(matching), vid, pid))
    device, = matching
    extra = device.extra

    print("Bus %03d Device %03d: ID %04x:%04x v.%03x usb v.%03x speed %s" % (
        device.bus, device.address, device.vendor_id, device.product_id,
        device.bcd_device, device.bcd_usb, device.speed))
    print(" Device classes: %02x %02x %02x" % tuple(device.triplet))
    print(" Control Endpoint 00, MPS=%d" % (extra.max_packet_size0))
    if extra.status is not None:
        print(" Status: %s" % extra.status)
    if extra.webusb_url:
        print(" WebUSB landing page: %s" % extra.webusb_url)
    for configuration in extra.configurations:
        print(" Configuration #%d %s" % (configuration.number, configuration.name or ""))
        descriptor_dump("  ", configuration.extra)
        for interface in configuration.interfaces:
            print("  Interface #%d Alternate Setting %d, class %s %s" % (
                interface.number, interface.alt_setting,
                interface.base_class, interface.name or ""))
            descriptor_dump("   ", interface.extra)
            for endpoint in interface.endpoints:
                print("    %s %s Endpoint %02x, MPS=%d, interval=%d" % (
                    endpoint.type.capitalize(), endpoint.direction.capitalize(),
                    endpoint.number, endpoint.max_packet_size, endpoint.interval))
                descriptor_dump("     ", endpoint.extra)

if __name__ == "__main__":
    import sys
    logging.basicConfig(level = logging.WARNING)
    usbtree_dev_info(int(sys.argv[1], 16), int(sys.argv[2], 16))
