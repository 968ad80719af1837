__doc__ = """
USB device tree profiler over libusb1.

usbtree enumerates USB devices, decodes their class specific descriptors
(Audio, MIDI, Video, HID, CDC) and arranges them in a bus/hub/device
tree::

  from usbtree.profiler import Profiler
  from usbtree.filter import DeviceFilter

  with Profiler(with_extra = True) as profiler:
      profile = profiler.profile()

  DeviceFilter(vendor_id = 0x1d6b).retain_buses(profile.buses)
  for bus in profile.buses:
      for dev in bus.flattened_devices():
          print("%s %s" % (dev.port_path(), dev.name))

Decoding and tree assembly do not touch the hardware: usbtree.descriptor,
usbtree.topology and usbtree.filter work on plain data; only
usbtree.profiler needs libusb.
"""

from .exception import *
from .path import *
from .model import *
from .topology import *
